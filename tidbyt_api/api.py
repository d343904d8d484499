"""High-level Tidbyt API client.

This module provides the main entry point for interacting with the
Tidbyt API: device settings, pushing images and the app catalog.
"""

from __future__ import annotations

import ssl
from typing import Any

import aiohttp

from .device import JSON_HEADERS, TidbytDevice
from .exceptions import InvalidParameterError
from .models import DeviceUpdate, PushOptions
from .transport import DEFAULT_ENCODING, DEFAULT_HOST, DEFAULT_PORT, AiohttpTransport

DEFAULT_API_VERSION = "v0"


class DevicesAPI:
    """Device operations addressed by device ID (``client.devices``)."""

    def __init__(self, client: TidbytClient) -> None:
        self._client = client

    async def get(self, device_id: str) -> TidbytDevice:
        """Fetch a device by ID.

        Raises:
            NotFoundError: If the device does not exist.
        """
        _require_device_id(device_id)
        data = await self._client.request(f"/devices/{device_id}")
        return TidbytDevice.from_api(data or {}, self._client)

    async def update(
        self,
        device_id: str,
        *,
        display_name: str | None = None,
        brightness: int | None = None,
        auto_dim: bool | None = None,
    ) -> TidbytDevice:
        """Update a device's settings.

        Only the arguments that are not None are sent.

        Args:
            device_id: The device ID.
            display_name: New display name.
            brightness: New brightness, 0 to 100.
            auto_dim: Whether to dim automatically at night.

        Returns:
            A new TidbytDevice built from the API response.
        """
        _require_device_id(device_id)
        updates = DeviceUpdate(
            display_name=display_name,
            brightness=brightness,
            auto_dim=auto_dim,
        )
        data = await self._client.request(
            f"/devices/{device_id}",
            method="PATCH",
            body=updates.to_api(),
            headers=dict(JSON_HEADERS),
        )
        return TidbytDevice.from_api(data or {}, self._client)

    async def push(
        self,
        device_id: str,
        image: bytes,
        *,
        installation_id: str | None = None,
        background: bool | None = None,
    ) -> Any:
        """Push an image to a device.

        Args:
            device_id: The device ID.
            image: The encoded image to display. Must not be empty.
            installation_id: Installation to create or replace.
            background: Add the installation without interrupting the rotation.

        Returns:
            The parsed API response.

        Raises:
            InvalidParameterError: If the image is missing or empty.
        """
        _require_device_id(device_id)
        options = PushOptions(installation_id=installation_id, background=background)
        body = options.to_api(image)
        return await self._client.request(
            f"/devices/{device_id}/push",
            method="POST",
            body=body,
            headers=dict(JSON_HEADERS),
        )


class AppsAPI:
    """App catalog operations (``client.apps``)."""

    def __init__(self, client: TidbytClient) -> None:
        self._client = client

    async def list(
        self, *, as_map: bool = False
    ) -> list[dict[str, Any]] | dict[str, dict[str, Any]]:
        """Return the apps available on the platform.

        Args:
            as_map: Return a dict keyed by app ID instead of a list.
        """
        data = await self._client.request("/apps")

        apps: list[Any] = []
        if isinstance(data, dict):
            apps = data.get("apps") or []
        elif isinstance(data, list):
            apps = data

        if as_map:
            return {app["id"]: app for app in apps if isinstance(app, dict) and "id" in app}
        return apps


class TidbytClient:
    """Async client for the Tidbyt API.

    The token and API version are fixed for the lifetime of the client.
    Each call makes a single request; nothing is cached or retried.

    Example usage with context manager (recommended):
        async with TidbytClient(token) as tidbyt:
            device = await tidbyt.devices.get(device_id)
            await device.push(image, installation_id="clock")

    Example usage with manual lifecycle:
        tidbyt = TidbytClient(token)
        try:
            apps = await tidbyt.apps.list(as_map=True)
        finally:
            await tidbyt.close()
    """

    def __init__(
        self,
        api_token: str,
        api_version: str = DEFAULT_API_VERSION,
        *,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_token: Tidbyt API token, sent as a bearer token.
            api_version: API version path segment.
            host: API host name.
            port: API port.
            session: Optional existing aiohttp session to use.
            timeout: Optional total request deadline in seconds. None (the
                default) applies no deadline.
            ssl_context: Optional SSL context for custom certificates.
        """
        self._api_token = api_token
        self._api_version = api_version
        self._transport = AiohttpTransport(
            host,
            port,
            session=session,
            timeout=timeout,
            ssl_context=ssl_context,
        )
        self._closed = False

        self.devices = DevicesAPI(self)
        self.apps = AppsAPI(self)

    async def __aenter__(self) -> TidbytClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager and clean up resources."""
        await self.close()

    @property
    def api_token(self) -> str:
        return self._api_token

    @property
    def api_version(self) -> str:
        return self._api_version

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        raw: bool = False,
        encoding: str = DEFAULT_ENCODING,
    ) -> Any:
        """Send a request to the Tidbyt API.

        Args:
            path: Resource path without the version prefix, e.g. ``/apps``.
            method: HTTP method.
            body: JSON-serializable request body.
            headers: Extra request headers.
            raw: Return the response body as bytes.
            encoding: Text encoding of JSON responses.

        Returns:
            Parsed JSON, or bytes when ``raw`` is set.
        """
        return await self._transport.request(
            method,
            f"/{self._api_version}{path}" if path else path,
            auth_token=self._api_token,
            headers=headers or {},
            body=body,
            raw=raw,
            encoding=encoding,
        )

    async def close(self) -> None:
        """Close the client and release resources."""
        if self._closed:
            return

        self._closed = True
        await self._transport.close()


def _require_device_id(device_id: str) -> None:
    if not device_id:
        raise InvalidParameterError("device_id", device_id, "Device ID is required")
