"""Device wrapper with helpers bound to a single Tidbyt.

A TidbytDevice is a snapshot: it is never refreshed or mutated in place.
Operations that return device data produce a new instance.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from .exceptions import ClientNotBoundError, InvalidParameterError
from .models import DeviceInfo

if TYPE_CHECKING:
    from .api import TidbytClient

JSON_HEADERS = {"Content-Type": "application/json"}


class InstallationsAPI:
    """Installation operations for one device (``device.installations``)."""

    def __init__(self, device: TidbytDevice) -> None:
        self._device = device

    def _base_path(self) -> str:
        return f"{self._device.base_path}/installations"

    async def list(self) -> list[dict[str, Any]]:
        """Return the installations currently on the device.

        Returns an empty list when the response has no installations.
        """
        client = self._device._require_client()
        data = await client.request(self._base_path())
        if isinstance(data, dict):
            return data.get("installations") or []
        return []

    async def update(self, installation_id: str, image: bytes) -> Any:
        """Replace an installation's image by pushing it again."""
        _require_installation_id(installation_id)
        return await self._device.push(image, installation_id=installation_id)

    async def delete(self, installation_id: str) -> Any:
        """Remove an installation from the device's rotation."""
        _require_installation_id(installation_id)
        client = self._device._require_client()
        return await client.request(
            f"{self._base_path()}/{installation_id}",
            method="DELETE",
            headers=dict(JSON_HEADERS),
        )

    async def preview(self, installation_id: str) -> bytes:
        """Download the rendered preview image of an installation."""
        _require_installation_id(installation_id)
        client = self._device._require_client()
        return await client.request(
            f"{self._base_path()}/{installation_id}/preview",
            raw=True,
        )


class TidbytDevice:
    """A Tidbyt device and the operations available on it.

    The client is fixed at construction. A device created without one
    can still be inspected, but every operation raises
    ClientNotBoundError without touching the network.

    Attributes:
        id: The device ID.
        display_name: The name shown in the Tidbyt app.
        brightness: Display brightness from 0 to 100.
        auto_dim: Whether the display dims automatically at night.
        last_seen: When the device last contacted the service.
        installations: Installation operations for this device.
    """

    def __init__(
        self,
        info: DeviceInfo,
        client: TidbytClient | None = None,
    ) -> None:
        self._info = info
        self._client = client
        self.installations = InstallationsAPI(self)

    @classmethod
    def from_api(
        cls,
        data: dict[str, Any],
        client: TidbytClient | None = None,
    ) -> TidbytDevice:
        """Build a device from a device JSON object."""
        return cls(DeviceInfo.from_api(data), client)

    @property
    def id(self) -> str:
        return self._info.id

    @property
    def display_name(self) -> str | None:
        return self._info.display_name

    @property
    def brightness(self) -> int | None:
        return self._info.brightness

    @property
    def auto_dim(self) -> bool | None:
        return self._info.auto_dim

    @property
    def last_seen(self) -> datetime | None:
        return self._info.last_seen

    @property
    def info(self) -> DeviceInfo:
        """Return the underlying DeviceInfo dataclass."""
        return self._info

    @property
    def client(self) -> TidbytClient | None:
        return self._client

    @property
    def is_bound(self) -> bool:
        """Return True if the device has a client to make requests with."""
        return self._client is not None

    @property
    def base_path(self) -> str:
        return f"/devices/{self.id}"

    def _require_client(self) -> TidbytClient:
        if self._client is None:
            raise ClientNotBoundError(self.id)
        return self._client

    async def update(
        self,
        *,
        display_name: str | None = None,
        brightness: int | None = None,
        auto_dim: bool | None = None,
    ) -> TidbytDevice:
        """Update this device's settings.

        Returns:
            A new TidbytDevice with the settings the API reports back.
        """
        client = self._require_client()
        return await client.devices.update(
            self.id,
            display_name=display_name,
            brightness=brightness,
            auto_dim=auto_dim,
        )

    async def push(
        self,
        image: bytes,
        *,
        installation_id: str | None = None,
        background: bool | None = None,
    ) -> Any:
        """Push an image to this device.

        Args:
            image: The encoded image (usually WebP) to display.
            installation_id: Installation to create or replace.
            background: Add the installation without interrupting the rotation.
        """
        client = self._require_client()
        return await client.devices.push(
            self.id,
            image,
            installation_id=installation_id,
            background=background,
        )

    def __repr__(self) -> str:
        return f"TidbytDevice(id={self.id!r}, display_name={self.display_name!r})"


def _require_installation_id(installation_id: str) -> None:
    if not installation_id:
        raise InvalidParameterError(
            "installation_id", installation_id, "Installation ID is required"
        )
