"""Data models for Tidbyt API resources and request options."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .exceptions import InvalidParameterError

MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 100


def _parse_last_seen(value: Any) -> datetime | None:
    """Parse a Unix timestamp in seconds into an aware UTC datetime.

    Accepts numbers and numeric strings. Returns None when the value is
    missing or cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    # Round to whole milliseconds.
    millis = int(round(seconds * 1000))
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _as_image_bytes(image: Any) -> bytes:
    """Return ``image`` as bytes, rejecting anything empty or non-binary."""
    if not isinstance(image, (bytes, bytearray, memoryview)):
        raise InvalidParameterError(
            "image", type(image).__name__, "Image is required"
        )
    data = bytes(image)
    if not data:
        raise InvalidParameterError("image", data, "Image is required")
    return data


@dataclass
class DeviceInfo:
    """Snapshot of a device as returned by the API."""

    id: str
    display_name: str | None = None
    brightness: int | None = None
    auto_dim: bool | None = None
    last_seen: datetime | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DeviceInfo:
        """Create a DeviceInfo from a device JSON object."""
        return cls(
            id=str(data.get("id", "")),
            display_name=data.get("displayName"),
            brightness=data.get("brightness"),
            auto_dim=data.get("autoDim"),
            last_seen=_parse_last_seen(data.get("lastSeen")),
            raw=dict(data),
        )


@dataclass(frozen=True)
class DeviceUpdate:
    """Partial update for a device's settings.

    Fields left as None are not sent, so the server keeps its current
    values for them.
    """

    display_name: str | None = None
    brightness: int | None = None
    auto_dim: bool | None = None

    def __post_init__(self) -> None:
        if self.brightness is None:
            return
        if isinstance(self.brightness, bool) or not isinstance(self.brightness, int):
            raise InvalidParameterError(
                "brightness", self.brightness, "Must be an integer"
            )
        if not MIN_BRIGHTNESS <= self.brightness <= MAX_BRIGHTNESS:
            raise InvalidParameterError(
                "brightness",
                self.brightness,
                f"Must be between {MIN_BRIGHTNESS} and {MAX_BRIGHTNESS}",
            )

    def to_api(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.display_name is not None:
            payload["displayName"] = self.display_name
        if self.brightness is not None:
            payload["brightness"] = self.brightness
        if self.auto_dim is not None:
            payload["autoDim"] = self.auto_dim
        return payload


@dataclass(frozen=True)
class PushOptions:
    """Options for pushing an image to a device.

    Attributes:
        installation_id: Installation to create or replace. When empty the
            push is a one-off image that does not occupy a rotation slot.
        background: If True the installation is added without interrupting
            the current rotation.
    """

    installation_id: str | None = None
    background: bool | None = None

    def to_api(self, image: Any) -> dict[str, Any]:
        """Build the push request body, base64 encoding ``image``."""
        data = _as_image_bytes(image)
        payload: dict[str, Any] = {
            "image": base64.b64encode(data).decode("ascii"),
        }
        if self.installation_id:
            payload["installationID"] = self.installation_id
        if self.background is not None:
            payload["background"] = self.background
        return payload
