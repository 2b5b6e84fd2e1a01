"""Grammar primitives and device identity for fanconf."""

from fanconf.base import constants
from fanconf.base.device import Device, Fan, Sensor
from fanconf.base.tokens import Token, TokenNotFoundError, parse_bool
from fanconf.base.uid import UID, DeviceType

__all__ = [
    "UID",
    "Device",
    "DeviceType",
    "Fan",
    "Sensor",
    "Token",
    "TokenNotFoundError",
    "constants",
    "parse_bool",
]
