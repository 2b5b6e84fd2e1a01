"""Curve and controller configuration grammars."""

from fanconf.config.curve import Curve
from fanconf.config.point import Point
from fanconf.config.profile import (
    ConfigFile,
    FanConfig,
    Profile,
    load_config,
    save_config,
)
from fanconf.config.settings import ControllerSettings

__all__ = [
    "ConfigFile",
    "ControllerSettings",
    "Curve",
    "FanConfig",
    "Point",
    "Profile",
    "load_config",
    "save_config",
]
