"""Shared fixtures for tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from tidbyt_api.api import TidbytClient
from tidbyt_api.models import DeviceInfo
from tidbyt_api.transport import AiohttpTransport


def _make_response(status=200, body=b"", reason="OK"):
    """Create a mock aiohttp response whose body is read as bytes."""
    if not isinstance(body, (bytes, bytearray)):
        body = json.dumps(body).encode("utf-8")
    response = AsyncMock()
    response.status = status
    response.reason = reason
    response.read = AsyncMock(return_value=bytes(body))
    return response


def _make_session(response):
    """Create a mock session whose request() yields ``response``."""
    session = MagicMock(spec=aiohttp.ClientSession)
    session.closed = False
    session.request = MagicMock(
        return_value=AsyncMock(
            __aenter__=AsyncMock(return_value=response),
            __aexit__=AsyncMock(return_value=False),
        )
    )
    return session


@pytest.fixture
def mock_transport():
    """Create a mock transport."""
    transport = MagicMock(spec=AiohttpTransport)
    transport.request = AsyncMock()
    transport.close = AsyncMock()
    transport.closed = False
    return transport


@pytest.fixture
def client(mock_transport):
    """Create a client whose transport is mocked."""
    client = TidbytClient("test-token")
    client._transport = mock_transport
    return client


@pytest.fixture
def sample_device_data():
    """Sample device data from API."""
    return {
        "id": "quietly-vivid-mint-ant-a1b",
        "displayName": "Kitchen",
        "brightness": 60,
        "autoDim": True,
        "lastSeen": "1700000000",
    }


@pytest.fixture
def device_info(sample_device_data):
    """Create a DeviceInfo instance."""
    return DeviceInfo.from_api(sample_device_data)


@pytest.fixture
def sample_apps_data():
    """Sample app catalog from API."""
    return {
        "apps": [
            {"id": "clock", "name": "Clock", "description": "Shows the time."},
            {"id": "weather", "name": "Weather", "description": "Local forecast."},
        ]
    }


@pytest.fixture
def make_response():
    """Factory fixture for mock aiohttp responses."""
    return _make_response


@pytest.fixture
def make_session():
    """Factory fixture for mock aiohttp sessions."""
    return _make_session
