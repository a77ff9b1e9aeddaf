"""
Error hierarchy for forecast request construction.

AppError is the base for all typed errors. Setters raise
InvalidArgumentError eagerly; build() raises InvalidStateError when a
required field was never set.
"""

from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidArgumentError(AppError, ValueError):
    error_code = "invalid_argument"


class InvalidStateError(AppError, RuntimeError):
    error_code = "invalid_state"
