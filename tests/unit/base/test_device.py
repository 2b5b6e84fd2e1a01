"""Tests for the Device classes built from UIDs."""

from uuid import NAMESPACE_DNS, UUID, getnode, uuid4, uuid5

import pytest
from pydantic import ValidationError

from fanconf import UID, Device, Fan, Sensor


class TestDeviceFromUID:
    """Test building devices from hwmon UIDs."""

    def test_fan_uid_builds_fan(self, fan_uid: UID):
        device = Device.from_uid(fan_uid)

        assert isinstance(device, Fan)
        assert device.name == "it8728#2:fan1"
        assert device.uid == fan_uid
        assert device.properties == {
            "hwmon_path": "/sys/class/hwmon/hwmon2/fan1",
            "type": "fan",
            "vendor": "generic",
        }

    def test_sensor_uid_builds_sensor(self, sensor_uid: UID):
        device = Device.from_uid(sensor_uid)

        assert isinstance(device, Sensor)
        assert device.properties["type"] == "sensor"
        assert device.properties["vendor"] == "generic"

    def test_nvidia_sensor(self, nvidia_sensor_uid: UID):
        device = Device.from_uid(nvidia_sensor_uid)

        assert isinstance(device, Sensor)
        assert device.properties["vendor"] == "nvidia"

    def test_nvidia_fan(self):
        device = Device.from_uid(
            UID(chipname="nvidia", hw_id=4, dev_name="fan1")
        )

        assert isinstance(device, Fan)
        assert device.properties["vendor"] == "nvidia"

    def test_invalid_uid_rejected(self):
        uid = UID.decode("chipname#badnum:fanname")

        with pytest.raises(ValueError):
            Device.from_uid(uid)


class TestDeviceIdentity:
    """Test deterministic device UUIDs."""

    def test_same_path_same_uuid(self, fan_uid: UID):
        """Test the same physical device keeps its UUID."""
        device1 = Device.from_uid(fan_uid)
        device2 = Device.from_uid(UID.decode("it8728#2:fan1"))

        assert device1.uuid == device2.uuid

        expected = uuid5(
            NAMESPACE_DNS,
            f"{getnode()}./sys/class/hwmon/hwmon2/fan1.uuid.fanconf",
        )
        assert device1.uuid == expected

    def test_different_paths_different_uuids(
        self, fan_uid: UID, sensor_uid: UID
    ):
        assert Device.from_uid(fan_uid).uuid != Device.from_uid(
            sensor_uid
        ).uuid

    def test_explicit_uuid_overrides_derived(self, fan_uid: UID):
        explicit = uuid4()
        device = Fan(name="cpu_fan", uid=fan_uid, uuid=explicit)

        assert device.uuid == explicit

    def test_invalid_uid_gets_random_uuid(self):
        device = Fan(name="placeholder", uid=UID())

        assert isinstance(device.uuid, UUID)
        assert device.uuid != Fan(name="placeholder", uid=UID()).uuid


class TestDeviceModel:
    """Test pydantic model behavior of devices."""

    def test_name_required(self, fan_uid: UID):
        with pytest.raises(ValidationError):
            Fan(name="", uid=fan_uid)

    def test_immutability(self, fan_uid: UID):
        device = Device.from_uid(fan_uid)

        with pytest.raises(ValidationError):
            device.properties = {}

    def test_serialization_round_trip(self, sensor_uid: UID):
        device = Device.from_uid(sensor_uid)

        data = device.model_dump(mode="json")
        restored = Sensor.model_validate(data)

        assert data["uid"]["chipname"] == "coretemp"
        assert restored.uuid == device.uuid
        assert restored.uid == sensor_uid
        assert restored.properties == device.properties
