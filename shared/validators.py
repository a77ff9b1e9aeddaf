"""
Input validators — framework-agnostic, pure functions.

require() is the null guard used by every builder setter; ensure_valid_url()
is the final syntax check run by build() before a request is returned.
"""

from __future__ import annotations

from typing import Optional, TypeVar

import validators as _validators

from errors import InvalidArgumentError

T = TypeVar("T")


def require(value: Optional[T], message: str, *, field: Optional[str] = None) -> T:
    """Return *value* unchanged, or raise InvalidArgumentError if it is None."""
    if value is None:
        raise InvalidArgumentError(message, field=field)
    return value


def ensure_valid_url(url: str) -> str:
    """Return *url* if it is valid, otherwise raise InvalidArgumentError.

    Single-label hosts (``localhost:8080``, ``mock-server``) are accepted so
    override templates can point at local or test servers. The failure object
    returned by the ``validators`` library is chained as the exception cause,
    and the offending URL is attached as ``details``.
    """
    result = _validators.url(url, simple_host=True)
    if result:
        return url
    error = InvalidArgumentError(
        "Cannot create forecast request. The URL is invalid!",
        field="url",
        details=url,
    )
    if isinstance(result, BaseException):
        raise error from result
    raise error
