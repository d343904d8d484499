"""Exceptions for the Tidbyt client library."""

from __future__ import annotations

from typing import Any


class TidbytError(Exception):
    """Base exception for all Tidbyt client errors."""

    def __init__(self, message: str = "", *args: Any) -> None:
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(TidbytError):
    """Raised when a call cannot be made with the current configuration.

    This is always raised before any network activity.
    """

    pass


class ClientNotBoundError(ConfigurationError):
    """Raised when a device operation is attempted without a bound client."""

    def __init__(self, device_id: str | None = None) -> None:
        self.device_id = device_id
        super().__init__("TidbytClient is not initialized")


class InvalidParameterError(ConfigurationError):
    """Raised when a required argument is missing or invalid."""

    def __init__(self, parameter: str, value: Any, reason: str | None = None) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{parameter}': {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ApiError(TidbytError):
    """Raised when the API returns an error response.

    ``code`` is the server supplied error code when the body has one,
    otherwise the numeric HTTP status.
    """

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        code: Any = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code if code is not None else status_code
        self.response_body = response_body

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class AuthenticationError(ApiError):
    """Raised when the API token is rejected (HTTP 401)."""

    pass


class AuthorizationError(ApiError):
    """Raised when the token may not access the resource (HTTP 403)."""

    pass


class NotFoundError(ApiError):
    """Raised when the requested resource does not exist (HTTP 404)."""

    pass


class DecodeError(TidbytError, ValueError):
    """Raised when a response body that should be JSON cannot be decoded.

    ``status_code`` is the HTTP status of the response, which may be an
    error status.
    """

    def __init__(
        self,
        message: str = "",
        body: bytes | None = None,
        status_code: int | None = None,
    ) -> None:
        self.body = body
        self.status_code = status_code
        super().__init__(message)
