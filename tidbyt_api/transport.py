"""HTTP transport for the Tidbyt API built on aiohttp.

The transport issues exactly one request per call and never retries.
Response bodies are always read fully as bytes and only decoded to text
when JSON is expected.
"""

from __future__ import annotations

import json
import logging
import ssl
from typing import Any

import aiohttp

from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_HOST = "api.tidbyt.com"
DEFAULT_PORT = 443
DEFAULT_ENCODING = "utf-8"

_DEFAULT_PORTS = {"https": 443, "http": 80}


class AiohttpTransport:
    """Async HTTP transport using aiohttp.

    Keeps an optionally provided ``aiohttp.ClientSession`` or creates one
    lazily. Sessions passed in by the caller are never closed here.

    No request deadline is applied unless ``timeout`` is given; callers
    wanting bounded latency can also wrap calls in ``asyncio.timeout``.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        scheme: str = "https",
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        if _DEFAULT_PORTS.get(scheme) == int(port):
            self.base_url = f"{scheme}://{host}"
        else:
            self.base_url = f"{scheme}://{host}:{port}"
        self._session = session
        self._owns_session = session is None
        # ClientTimeout() with no arguments disables every limit.
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._ssl_context = ssl_context
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return True once close() has been called."""
        return self._closed

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._closed:
            raise ConfigurationError("Transport is closed")
        if self._session is None or self._session.closed:
            if self._ssl_context is not None:
                connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            else:
                connector = aiohttp.TCPConnector()
            self._session = aiohttp.ClientSession(
                connector=connector, timeout=self._timeout
            )
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        *,
        auth_token: str | None,
        headers: dict[str, str] | None = None,
        body: Any = None,
        raw: bool = False,
        encoding: str = DEFAULT_ENCODING,
    ) -> Any:
        """Send one request and return the decoded JSON or raw bytes.

        Args:
            method: HTTP method.
            path: Absolute request path, including any version prefix.
            auth_token: Bearer token sent in the Authorization header.
            headers: Extra headers; these override the defaults on collision.
            body: JSON-serializable payload. The transport does not set a
                Content-Type for it.
            raw: Return the response body as bytes instead of parsed JSON.
            encoding: Text encoding used to decode JSON responses.

        Returns:
            The parsed JSON value, or bytes when ``raw`` is set.

        Raises:
            ConfigurationError: If the token or path is missing.
            ApiError: If the API answers with a status of 400 or above.
            DecodeError: If a non-raw response body, of any status, is not
                valid JSON. An empty body is not valid JSON.
            aiohttp.ClientError: On connection level failures, unchanged.
        """
        if not auth_token:
            raise ConfigurationError("api_token is required")
        if not path:
            raise ConfigurationError("path is required")

        request_headers = {"Authorization": f"Bearer {auth_token}"}
        if headers:
            request_headers.update(headers)

        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")

        session = await self._get_session()
        url = f"{self.base_url}/{path.lstrip('/')}"
        _LOGGER.debug("%s %s", method, url)

        async with session.request(
            method,
            url,
            data=data,
            headers=request_headers,
            timeout=self._timeout,
        ) as response:
            _LOGGER.debug("%s %s returned HTTP %s", method, url, response.status)
            return await self._handle_response(response, raw=raw, encoding=encoding)

    async def _handle_response(
        self,
        response: aiohttp.ClientResponse,
        *,
        raw: bool = False,
        encoding: str = DEFAULT_ENCODING,
    ) -> Any:
        body = await response.read()
        status = response.status

        if raw:
            if status >= 400:
                raise self._error_from_payload(
                    status, response.reason, _try_decode_json(body, encoding), body, encoding
                )
            return body

        # Non-raw bodies must be JSON whatever the status.
        payload = _decode_json(body, encoding, status_code=status)
        if status >= 400:
            raise self._error_from_payload(status, response.reason, payload, body, encoding)
        return payload

    def _error_from_payload(
        self,
        status: int,
        reason: str | None,
        payload: Any,
        body: bytes,
        encoding: str,
    ) -> ApiError:
        message = None
        code = None
        if isinstance(payload, dict):
            message = payload.get("message")
            code = payload.get("code")
        text = body.decode(encoding, errors="replace")
        return self._map_http_error(
            status,
            str(message or reason or ""),
            text or None,
            code=code or None,
        )

    def _map_http_error(
        self,
        status: int,
        message: str,
        response_body: str | None = None,
        *,
        code: Any = None,
    ) -> ApiError:
        """Map an HTTP error status to the matching exception."""
        if status == 401:
            return AuthenticationError(
                message or "Authentication failed",
                status_code=status,
                code=code,
                response_body=response_body,
            )
        if status == 403:
            return AuthorizationError(
                message or "Access denied",
                status_code=status,
                code=code,
                response_body=response_body,
            )
        if status == 404:
            return NotFoundError(
                message or "Not found",
                status_code=status,
                code=code,
                response_body=response_body,
            )
        return ApiError(
            message,
            status_code=status,
            code=code,
            response_body=response_body,
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None


def _decode_json(body: bytes, encoding: str, status_code: int | None = None) -> Any:
    """Decode a JSON response body, raising DecodeError when it is invalid."""
    try:
        return json.loads(body.decode(encoding))
    except ValueError as err:
        # Covers both UnicodeDecodeError and json.JSONDecodeError.
        raise DecodeError(
            f"Invalid JSON response: {err}", body=body, status_code=status_code
        ) from err


def _try_decode_json(body: bytes, encoding: str) -> Any:
    """Best-effort decode of a raw error body, for its message and code."""
    try:
        return json.loads(body.decode(encoding))
    except ValueError:
        return None
