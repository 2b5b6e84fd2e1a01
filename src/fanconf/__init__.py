"""Configuration grammar and device identity for hwmon fan control."""

# Grammar primitives and device identity
from .base import (
    UID,
    Device,
    DeviceType,
    Fan,
    Sensor,
    Token,
    TokenNotFoundError,
    constants,
    parse_bool,
)

# Curve and controller configuration
from .config import (
    ConfigFile,
    ControllerSettings,
    Curve,
    FanConfig,
    Point,
    Profile,
    load_config,
    save_config,
)

__all__ = [
    "UID",
    "ConfigFile",
    "ControllerSettings",
    "Curve",
    "Device",
    "DeviceType",
    "Fan",
    "FanConfig",
    "Point",
    "Profile",
    "Sensor",
    "Token",
    "TokenNotFoundError",
    "constants",
    "load_config",
    "parse_bool",
    "save_config",
]
