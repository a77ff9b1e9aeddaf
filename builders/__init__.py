"""
Forecast Request Builders

Builders accumulate request options through chained calls and validate them
eagerly, keeping URL construction separate from any HTTP client.
"""

from .forecast import ForecastRequestBuilder

__all__ = [
    "ForecastRequestBuilder",
]
