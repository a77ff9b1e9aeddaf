"""
Value models for forecast requests.

ApiKey and GeoCoordinates are supplied by the caller and validated on
construction. Language, Units and Block are closed sets whose values are
sent verbatim as query values. ForecastRequest is the immutable result of
ForecastRequestBuilder.build().
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_URL_TEMPLATE = (
    "https://api.darksky.net/forecast/##key##/##latitude##,##longitude##"
)

KEY_TOKEN = "##key##"
LATITUDE_TOKEN = "##latitude##"
LONGITUDE_TOKEN = "##longitude##"


class Language(str, Enum):
    """Languages the forecast summaries can be translated into."""

    de = "de"
    en = "en"


class Units(str, Enum):
    auto = "auto"  # selected from the geographic location
    ca = "ca"  # si, but windSpeed in km/h
    si = "si"
    uk2 = "uk2"  # si, but distances in miles and windSpeed in mph
    us = "us"  # imperial


class Block(str, Enum):
    """Sections of the forecast response that can be excluded."""

    currently = "currently"
    minutely = "minutely"
    hourly = "hourly"
    daily = "daily"
    alerts = "alerts"
    flags = "flags"


class QueryParameter(str, Enum):
    lang = "lang"
    units = "units"
    exclude = "exclude"
    extend = "extend"


class ApiKey(BaseModel):
    """Dark Sky secret key. The raw value is masked in repr and str."""

    model_config = ConfigDict(frozen=True)

    value: SecretStr

    @field_validator("value")
    @classmethod
    def _not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("API key must not be empty")
        return v

    @property
    def raw(self) -> str:
        return self.value.get_secret_value()


class GeoCoordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @property
    def latitude_str(self) -> str:
        return _decimal_str(self.latitude)

    @property
    def longitude_str(self) -> str:
        return _decimal_str(self.longitude)


def _decimal_str(value: float) -> str:
    """Shortest round-tripping form of *value*, never in scientific notation."""
    return format(Decimal(repr(value)), "f")


class ForecastRequest(BaseModel):
    """A fully resolved forecast URL. Instances cannot be mutated."""

    model_config = ConfigDict(frozen=True)

    url: str

    @property
    def host(self) -> str:
        return urlsplit(self.url).netloc

    @property
    def query_params(self) -> dict[str, str]:
        """Query parameters in the order they appear in the URL."""
        return dict(parse_qsl(urlsplit(self.url).query, keep_blank_values=True))

    def __str__(self) -> str:
        return self.url
