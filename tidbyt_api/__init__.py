"""Tidbyt API - An async Python client for the Tidbyt API.

This library provides a small async interface for managing Tidbyt
devices: reading and updating settings, pushing images, and managing
the installations in a device's rotation.

Example usage:
    from tidbyt_api import TidbytClient

    async with TidbytClient(api_token) as tidbyt:
        device = await tidbyt.devices.get(device_id)
        print(device.display_name, device.last_seen)
        for installation in await device.installations.list():
            print(installation["id"])
"""

from .api import DEFAULT_API_VERSION, AppsAPI, DevicesAPI, TidbytClient
from .device import InstallationsAPI, TidbytDevice
from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ClientNotBoundError,
    ConfigurationError,
    DecodeError,
    InvalidParameterError,
    NotFoundError,
    TidbytError,
)
from .models import DeviceInfo, DeviceUpdate, PushOptions
from .transport import DEFAULT_HOST, DEFAULT_PORT, AiohttpTransport

__version__ = "0.2.0"

__all__ = [
    # Main client
    "TidbytClient",
    "DevicesAPI",
    "AppsAPI",
    "DEFAULT_API_VERSION",
    # Devices
    "TidbytDevice",
    "InstallationsAPI",
    # Data models
    "DeviceInfo",
    "DeviceUpdate",
    "PushOptions",
    # Transport
    "AiohttpTransport",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    # Exceptions
    "TidbytError",
    "ConfigurationError",
    "ClientNotBoundError",
    "InvalidParameterError",
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "DecodeError",
]
