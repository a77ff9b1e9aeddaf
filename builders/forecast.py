from typing import Any, Optional, Union

from pydantic import ValidationError

from config import ForecastSettings
from errors import InvalidArgumentError, InvalidStateError
from schemas.models.forecast import (
    DEFAULT_URL_TEMPLATE,
    KEY_TOKEN,
    LATITUDE_TOKEN,
    LONGITUDE_TOKEN,
    ApiKey,
    Block,
    ForecastRequest,
    GeoCoordinates,
    Language,
    QueryParameter,
    Units,
)
from shared.logging import get_logger
from shared.validators import ensure_valid_url, require

log = get_logger(__name__)


class ForecastRequestBuilder:
    """Builder for Dark Sky forecast request URLs.

    Every setter returns the builder so calls can be chained::

        request = (
            ForecastRequestBuilder()
            .key("0123456789abcdef")
            .location((52.52, 13.405))
            .exclude(Block.minutely, Block.alerts)
            .build()
        )

    Instances are not safe for concurrent mutation; use one builder per
    construction flow.
    """

    def __init__(self) -> None:
        self.api_key: Optional[ApiKey] = None
        self.geo_coordinates: Optional[GeoCoordinates] = None
        self.override_url: Optional[str] = None
        self.lang: Language = Language.de
        self.unit_system: Units = Units.si
        self.exclusion: list[Block] = []
        self.extend_hourly_enabled: bool = False

    @classmethod
    def from_settings(
        cls, settings: Optional[ForecastSettings] = None
    ) -> "ForecastRequestBuilder":
        """Return a builder seeded from DARKSKY_* settings.

        Coordinates are always per request and must still be set.
        """
        settings = settings or ForecastSettings()
        builder = cls().language(settings.language).units(settings.units)
        if settings.api_key:
            builder.key(settings.api_key)
        if settings.base_url.strip() != DEFAULT_URL_TEMPLATE:
            builder.url(settings.base_url)
        return builder

    def key(self, api_key: Union[ApiKey, str, None]) -> "ForecastRequestBuilder":
        require(api_key, "APIKey cannot be None.", field="api_key")
        if not isinstance(api_key, ApiKey):
            try:
                api_key = ApiKey(value=api_key)
            except ValidationError as e:
                raise InvalidArgumentError(
                    "APIKey must be a non-empty string.", field="api_key"
                ) from e
        self.api_key = api_key
        return self

    def location(
        self, coordinates: Union[GeoCoordinates, tuple[float, float], None]
    ) -> "ForecastRequestBuilder":
        require(coordinates, "GeoCoordinates cannot be None.", field="location")
        if isinstance(coordinates, (str, bytes)):
            raise InvalidArgumentError(
                "GeoCoordinates must be a (latitude, longitude) pair, not a string.",
                field="location",
            )
        if not isinstance(coordinates, GeoCoordinates):
            try:
                latitude, longitude = coordinates
                coordinates = GeoCoordinates(latitude=latitude, longitude=longitude)
            except (TypeError, ValueError) as e:
                # pydantic's ValidationError is a ValueError
                raise InvalidArgumentError(
                    "GeoCoordinates must be a (latitude, longitude) pair within range.",
                    field="location",
                    details=str(e),
                ) from e
        self.geo_coordinates = coordinates
        return self

    def url(self, template: Optional[str]) -> "ForecastRequestBuilder":
        """Override the default Dark Sky URL.

        The template must contain ``##key##``, ``##latitude##`` and
        ``##longitude##``. Missing tokens are not detected and simply stay
        unreplaced.
        """
        require(template, "url cannot be None.", field="url")
        if not isinstance(template, str):
            raise InvalidArgumentError(
                "url must be a string template.", field="url", details=repr(template)
            )
        self.override_url = template.strip()
        return self

    def language(
        self, language: Union[Language, str, None]
    ) -> "ForecastRequestBuilder":
        require(language, "language cannot be None.", field="language")
        self.lang = _coerce(Language, language, "language")
        return self

    def units(self, units: Union[Units, str, None]) -> "ForecastRequestBuilder":
        require(units, "units cannot be None.", field="units")
        self.unit_system = _coerce(Units, units, "units")
        return self

    def extend_hourly(self) -> "ForecastRequestBuilder":
        """Return hour-by-hour data for the next 168 hours instead of 48."""
        self.extend_hourly_enabled = True
        return self

    def exclude(self, *blocks: Union[Block, str]) -> "ForecastRequestBuilder":
        """Exclude response blocks. Repeated calls add up, in call order."""
        coerced = []
        for block in blocks:
            require(block, "block cannot be None.", field="exclude")
            coerced.append(_coerce(Block, block, "exclude"))
        self.exclusion.extend(coerced)
        return self

    # Aliases matching the setter naming used by other Dark Sky clients
    set_key = key
    set_location = location
    set_url_override = url
    set_language = language
    set_units = units
    enable_extended_hourly = extend_hourly
    add_exclusions = exclude

    def build(self) -> ForecastRequest:
        """Return the request for the current configuration.

        The builder is left untouched, so build() may be called again after
        fixing a failure.
        """
        if self.api_key is None:
            raise InvalidStateError(
                "The APIKey must be set. Please call key() first.", field="api_key"
            )
        if self.geo_coordinates is None:
            raise InvalidStateError(
                "The location must be set. Please call location() first.",
                field="location",
            )

        template = (
            self.override_url if self.override_url is not None else DEFAULT_URL_TEMPLATE
        )
        url = (
            template.replace(KEY_TOKEN, self.api_key.raw)
            .replace(LATITUDE_TOKEN, self.geo_coordinates.latitude_str)
            .replace(LONGITUDE_TOKEN, self.geo_coordinates.longitude_str)
            + self._query_string()
        )

        try:
            ensure_valid_url(url)
        except InvalidArgumentError:
            log.warning(
                "forecast_url_invalid",
                overridden=self.override_url is not None,
                template_length=len(template),
            )
            raise

        log.debug(
            "forecast_request_built",
            overridden=self.override_url is not None,
            lang=self.lang.value,
            units=self.unit_system.value,
            excluded=len(self.exclusion),
            extend_hourly=self.extend_hourly_enabled,
        )
        return ForecastRequest(url=url)

    def _query_string(self) -> str:
        params: list[tuple[QueryParameter, str]] = [
            (QueryParameter.lang, self.lang.value),
            (QueryParameter.units, self.unit_system.value),
        ]
        if self.exclusion:
            params.append(
                (QueryParameter.exclude, ",".join(b.value for b in self.exclusion))
            )
        if self.extend_hourly_enabled:
            params.append((QueryParameter.extend, Block.hourly.value))

        query = "?"
        for name, value in params:
            query += f"{name.value}={value}&"
        return query[:-1]


def _coerce(enum_cls: Any, value: Any, field: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(
            f"{field} must be one of: {allowed}", field=field, details=value
        ) from e
