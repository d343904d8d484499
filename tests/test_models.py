"""Tests for data models."""

import base64
from datetime import datetime, timezone

import pytest

from tidbyt_api.exceptions import InvalidParameterError
from tidbyt_api.models import DeviceInfo, DeviceUpdate, PushOptions, _parse_last_seen


class TestParseLastSeen:
    """Tests for last-seen timestamp parsing."""

    def test_numeric_string(self):
        result = _parse_last_seen("1700000000")
        assert result == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert result.tzinfo is not None

    def test_integer(self):
        assert _parse_last_seen(1700000000) == datetime(
            2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc
        )

    def test_fractional_seconds_keep_milliseconds(self):
        result = _parse_last_seen(1700000000.25)
        assert result.microsecond == 250000

    def test_datetime_rejected(self):
        assert _parse_last_seen(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)) is None

    def test_none(self):
        assert _parse_last_seen(None) is None

    def test_invalid(self):
        assert _parse_last_seen("yesterday") is None
        assert _parse_last_seen(True) is None


class TestDeviceInfo:
    """Tests for DeviceInfo."""

    def test_from_api(self, sample_device_data):
        info = DeviceInfo.from_api(sample_device_data)

        assert info.id == "quietly-vivid-mint-ant-a1b"
        assert info.display_name == "Kitchen"
        assert info.brightness == 60
        assert info.auto_dim is True
        assert info.last_seen == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert info.raw == sample_device_data
        assert info.raw is not sample_device_data

    def test_raw_is_a_copy(self, sample_device_data):
        info = DeviceInfo.from_api(sample_device_data)
        sample_device_data["displayName"] = "Renamed"
        assert info.raw["displayName"] == "Kitchen"

    def test_from_api_minimal(self):
        info = DeviceInfo.from_api({"id": "abc"})

        assert info.id == "abc"
        assert info.display_name is None
        assert info.brightness is None
        assert info.auto_dim is None
        assert info.last_seen is None


class TestDeviceUpdate:
    """Tests for DeviceUpdate."""

    def test_only_brightness(self):
        assert DeviceUpdate(brightness=50).to_api() == {"brightness": 50}

    def test_only_display_name(self):
        assert DeviceUpdate(display_name="Den").to_api() == {"displayName": "Den"}

    def test_falsy_values_are_sent(self):
        payload = DeviceUpdate(display_name="", brightness=0, auto_dim=False).to_api()
        assert payload == {"displayName": "", "brightness": 0, "autoDim": False}

    def test_empty(self):
        assert DeviceUpdate().to_api() == {}

    @pytest.mark.parametrize("value", [-1, 101, 50.5, "50", True])
    def test_invalid_brightness(self, value):
        with pytest.raises(InvalidParameterError) as exc_info:
            DeviceUpdate(brightness=value)
        assert exc_info.value.parameter == "brightness"

    @pytest.mark.parametrize("value", [0, 100])
    def test_brightness_bounds(self, value):
        assert DeviceUpdate(brightness=value).to_api() == {"brightness": value}


class TestPushOptions:
    """Tests for PushOptions."""

    def test_image_only(self):
        image = bytes(range(256))
        payload = PushOptions().to_api(image)

        assert payload == {"image": base64.b64encode(image).decode("ascii")}
        assert base64.b64decode(payload["image"]) == image

    def test_installation_and_background(self):
        payload = PushOptions(installation_id="NyanCat", background=True).to_api(b"x")

        assert payload["installationID"] == "NyanCat"
        assert payload["background"] is True

    def test_empty_installation_id_omitted(self):
        payload = PushOptions(installation_id="").to_api(b"x")
        assert "installationID" not in payload

    def test_accepts_bytearray_and_memoryview(self):
        assert PushOptions().to_api(bytearray(b"ab"))["image"] == "YWI="
        assert PushOptions().to_api(memoryview(b"ab"))["image"] == "YWI="

    @pytest.mark.parametrize("image", [b"", None, "not bytes"])
    def test_invalid_image(self, image):
        with pytest.raises(InvalidParameterError, match="Image is required"):
            PushOptions().to_api(image)
