"""hwmon device entities handed to the control loop."""

from typing import Any, Dict
from uuid import NAMESPACE_DNS, UUID, getnode, uuid4, uuid5

from pydantic import BaseModel, ConfigDict, Field

from .uid import UID, DeviceType


class Device(BaseModel):
    """A fan or temperature sensor located by its UID.

    The control loop reads and writes the files under ``hwmon_path``;
    this class only describes where they are. Devices built from a valid
    UID get a deterministic UUID derived from this machine and the
    device's hwmon path, so the same physical device keeps the same
    identity across daemon restarts.

    Common property names:
    - hwmon_path: Base path of the device files
    - type: "fan" or "sensor"
    - vendor: "nvidia" or "generic"
    """

    model_config = ConfigDict(frozen=True)

    uuid: UUID = Field(
        default_factory=uuid4,
        description="Unique identifier for this device",
    )
    name: str = Field(min_length=1, description="Human-readable name")
    uid: UID = Field(description="hwmon identity of the device")
    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Flexible key-value storage for device properties",
    )

    def __init__(self, **data: Any) -> None:
        uid = data.get("uid")
        if isinstance(uid, UID) and uid.is_valid and "uuid" not in data:
            dns_name = f"{getnode()}.{uid.base_path()}.uuid.fanconf"
            data["uuid"] = uuid5(NAMESPACE_DNS, dns_name)
        super().__init__(**data)

    @classmethod
    def from_uid(cls, uid: UID) -> "Device":
        """Build a Sensor or Fan for ``uid``.

        Raises:
            ValueError: If the UID is not valid
        """
        if not uid.is_valid:
            raise ValueError(f"Cannot build a device from invalid UID {uid!r}")

        device_type = uid.classify()
        is_sensor = device_type.contained_in(
            DeviceType.SENSOR | DeviceType.NVIDIA
        )
        is_nvidia = DeviceType.NVIDIA in device_type
        device_class = Sensor if is_sensor else Fan
        properties = {
            "hwmon_path": uid.base_path(),
            "type": "sensor" if is_sensor else "fan",
            "vendor": "nvidia" if is_nvidia else "generic",
        }
        return device_class(name=str(uid), uid=uid, properties=properties)


class Sensor(Device):
    """A temperature sensor sampled by the control loop."""


class Fan(Device):
    """A fan whose speed is driven from a curve."""
