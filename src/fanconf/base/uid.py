"""Device UID: identity and type classification of hwmon fans and sensors."""

import logging
from enum import IntFlag
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    HWMON_PATH,
    NVIDIA_LABEL,
    TEMP_SENSOR_LABEL,
    UID_CHIP_SEPARATOR,
    UID_HW_ID_SEPARATOR,
)
from .tokens import Token, any_char, is_digit

logger = logging.getLogger(__name__)


class DeviceType(IntFlag):
    """Two-axis device classification: role (fan/sensor) and vendor.

    A UID's type is contained in a mask when ``type & mask == type``, so
    ``FAN | NVIDIA`` selects fans of any vendor and ``SENSOR | NVIDIA``
    selects sensors of any vendor.
    """

    FAN = 1
    SENSOR = 2
    NVIDIA = 4

    FAN_NVIDIA = FAN | NVIDIA
    SENSOR_NVIDIA = SENSOR | NVIDIA
    ALL = FAN | SENSOR | NVIDIA

    def contained_in(self, mask: "DeviceType") -> bool:
        """Check that every bit of this type is present in ``mask``."""
        return (self & mask) == self


class UID(BaseModel):
    """Identifies one physical fan or temperature sensor.

    A UID names the hwmon chip, the hwmon instance index and the device
    file, e.g. ``it8728#2:fan1`` for ``/sys/class/hwmon/hwmon2/fan1``.
    Identity is the ``(chipname, dev_name, hw_id)`` triple; ``is_valid``
    records whether all three were present when the UID was built.
    """

    model_config = ConfigDict(frozen=True)

    chipname: str = Field(default="", description="hwmon chip name")
    hw_id: int = Field(default=0, ge=0, description="hwmon instance index")
    dev_name: str = Field(default="", description="Device file name")
    is_valid: bool = Field(
        default=False, description="Whether every identity field is set"
    )

    @model_validator(mode="before")
    @classmethod
    def _derive_validity(cls, data: Any) -> Any:
        if isinstance(data, dict) and "is_valid" not in data:
            data = dict(data)
            data["is_valid"] = bool(data.get("chipname")) and bool(
                data.get("dev_name")
            )
        return data

    @model_validator(mode="after")
    def _check_validity(self) -> "UID":
        if self.is_valid and not (self.chipname and self.dev_name):
            raise ValueError("A valid UID needs a chipname and a dev_name")
        return self

    @classmethod
    def decode(cls, line: str) -> "UID":
        """Parse ``chipname#hw_id:dev_name``.

        Whitespace is removed before parsing. A line that does not yield
        all three fields produces an invalid UID; it is logged unless the
        line was empty.
        """
        text = "".join(line.split())

        chip = Token.scan(text, 0, lambda ch: ch != UID_CHIP_SEPARATOR)
        hw_id = Token.after(text, UID_CHIP_SEPARATOR, is_digit)
        dev = Token.after(
            text, UID_HW_ID_SEPARATOR, any_char, start=hw_id.end
        )

        hw_id_value = hw_id.convert(int, None) if hw_id.found else None

        complete = (
            chip.found
            and chip.followed_by(UID_CHIP_SEPARATOR)
            and hw_id_value is not None
            and hw_id.followed_by(UID_HW_ID_SEPARATOR)
            and dev.found
        )
        if not complete:
            if text:
                logger.error(f"Invalid UID: {text}")
            return cls(is_valid=False)

        return cls(
            chipname=chip.text,
            hw_id=hw_id_value,
            dev_name=dev.text,
            is_valid=True,
        )

    def encode(self) -> str:
        return (
            f"{self.chipname}{UID_CHIP_SEPARATOR}"
            f"{self.hw_id}{UID_HW_ID_SEPARATOR}{self.dev_name}"
        )

    def classify(self) -> DeviceType:
        """Classify by sensor label in dev_name and vendor chipname."""
        is_sensor = TEMP_SENSOR_LABEL in self.dev_name
        is_nvidia = self.chipname == NVIDIA_LABEL

        device_type = DeviceType.SENSOR if is_sensor else DeviceType.FAN
        if is_nvidia:
            device_type |= DeviceType.NVIDIA
        return device_type

    @property
    def device_type(self) -> DeviceType:
        return self.classify()

    def is_of_type(self, mask: DeviceType) -> bool:
        """Check the UID is valid and its type is contained in ``mask``."""
        return self.is_valid and self.classify().contained_in(mask)

    def base_path(self) -> str:
        """Return the hwmon path of the device file, without touching it."""
        return f"{HWMON_PATH}{self.hw_id}/{self.dev_name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UID):
            return NotImplemented
        return (
            self.chipname == other.chipname
            and self.dev_name == other.dev_name
            and self.hw_id == other.hw_id
        )

    def __hash__(self) -> int:
        return hash((self.chipname, self.dev_name, self.hw_id))

    def __str__(self) -> str:
        return self.encode()
