"""Error classes and helpers for the WMR server configuration.

Defines structured exceptions for every way startup configuration can be
rejected and a function to convert exceptions to serializable error
payloads suitable for structured log events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict


class ErrorPayload(TypedDict, total=False):
    code: str
    message: str
    details: Dict[str, Any]


@dataclass
class AppError(Exception):
    """Base application error with a code and optional details."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(AppError):
    """Raised when startup configuration cannot be used.

    ``section`` names the part of the configuration that was rejected and
    is stored under ``details["configuration"]``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        section: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        merged: Dict[str, Any] = {"configuration": section}
        if details:
            merged.update(details)
        super().__init__(code, message, merged)


class ConfigParseError(ConfigurationError):
    """Raised on unreadable input, invalid JSON, or mistyped fields."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("PARSE_ERROR", message, "document", details)


class MissingTokenError(ConfigurationError):
    """Raised when neither the document nor the environment sets a token."""

    def __init__(
        self,
        message: str = "a valid authentication token must be set",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__("MISSING_TOKEN", message, "token", details)


class TokenCommitError(ConfigurationError):
    """Raised when the authentication token cannot be hashed."""

    def __init__(
        self,
        message: str = "invalid token configuration",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__("TOKEN_COMMIT", message, "token", details)


class MissingModulesError(ConfigurationError):
    """Raised when neither the document nor the environment lists modules."""

    def __init__(
        self,
        message: str = "at least a valid module must be set",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__("MISSING_MODULES", message, "modules", details)


class InvalidPortError(ConfigurationError):
    """Raised when the resolved webserver port is not an integer."""

    def __init__(self, port: str, details: Optional[Dict[str, Any]] = None) -> None:
        merged: Dict[str, Any] = {"port": port}
        if details:
            merged.update(details)
        super().__init__(
            "INVALID_PORT", f"{port} is not a valid webserver port", "webserver", merged
        )


def to_error_payload(
    error: AppError, *, path_hint: Optional[str] = None
) -> ErrorPayload:
    """Convert an application error into a structured error payload.

    Args:
        error: The error to convert.
        path_hint: Optional file path that might help with diagnosis.

    Returns:
        A dictionary with ``code``, ``message`` and optional ``details``.

    Examples:
        >>> try:
        ...     raise MissingTokenError()
        ... except AppError as e:
        ...     payload = to_error_payload(e)
        ...     assert payload["code"] == "MISSING_TOKEN"
    """

    payload = error.to_payload()
    if path_hint:
        payload["details"] = {**payload.get("details", {}), "path": path_hint}
    return payload
