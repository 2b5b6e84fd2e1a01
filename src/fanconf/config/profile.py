"""Configuration files: controller settings followed by fan profiles.

File layout::

    interval=1000
    threads=4
    >default
    it8728#2:fan1 coretemp#1:temp1_input
    30:0%
    60;255
    >quiet
    ...

Lines before the first profile marker are controller settings. Each
profile holds fan entries: a header naming the fan UID and the sensor
UID that drives it, followed by the points of its curve.
"""

import logging
from pathlib import Path
from typing import List, Optional, TextIO, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from fanconf.base.constants import PROFILE_PREFIX, UID_CHIP_SEPARATOR
from fanconf.base.uid import UID, DeviceType

from .curve import Curve, Source, iter_lines
from .settings import ControllerSettings

logger = logging.getLogger(__name__)


class FanConfig(BaseModel):
    """A fan, the sensor it follows, and its curve."""

    model_config = ConfigDict(frozen=True)

    fan: UID = Field(description="Fan being controlled")
    sensor: UID = Field(description="Temperature sensor driving the fan")
    curve: Curve = Field(default_factory=Curve, description="Speed curve")

    def valid(self) -> bool:
        return (
            self.fan.is_of_type(DeviceType.FAN_NVIDIA)
            and self.sensor.is_of_type(DeviceType.SENSOR_NVIDIA)
            and self.curve.valid()
        )

    def encode(self) -> str:
        return f"{self.fan.encode()} {self.sensor.encode()}\n" + (
            self.curve.encode()
        )


class Profile(BaseModel):
    """A named set of fan configurations."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Profile name")
    fans: List[FanConfig] = Field(default_factory=list)

    def valid(self) -> bool:
        return all(fan.valid() for fan in self.fans)

    def get_fan(self, fan: UID) -> Optional[FanConfig]:
        """Get the configuration of a fan, or None if not in this profile."""
        for fan_config in self.fans:
            if fan_config.fan == fan:
                return fan_config
        return None

    def encode(self) -> str:
        return f"{PROFILE_PREFIX}{self.name}\n" + "".join(
            fan.encode() for fan in self.fans
        )


def _build_fan(header: str, point_lines: List[str]) -> Optional[FanConfig]:
    """Turn a fan entry into a FanConfig, or None if it is unusable."""
    uids = header.split()
    if len(uids) != 2:
        logger.error(f"Invalid fan entry, expected fan and sensor: {header}")
        return None

    fan_config = FanConfig(
        fan=UID.decode(uids[0]),
        sensor=UID.decode(uids[1]),
        curve=Curve.decode(point_lines),
    )
    if not fan_config.valid():
        logger.error(f"Invalid fan entry: {header}")
        return None
    return fan_config


class _ProfileBuilder:
    """Accumulates the lines of one profile section while decoding."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.fans: List[FanConfig] = []
        self._entry: Optional[Tuple[str, List[str]]] = None

    def start_fan(self, header: str) -> None:
        self.finish_fan()
        self._entry = (header, [])

    def add_point(self, line: str) -> None:
        if self._entry is None:
            logger.error(
                f"Point outside a fan entry in profile '{self.name}': {line}"
            )
            return
        self._entry[1].append(line)

    def finish_fan(self) -> None:
        if self._entry is not None:
            fan_config = _build_fan(*self._entry)
            if fan_config is not None:
                self.fans.append(fan_config)
            self._entry = None

    def build(self) -> Optional[Profile]:
        self.finish_fan()
        if not self.name:
            logger.error("Ignoring profile without a name")
            return None
        return Profile(name=self.name, fans=self.fans)


class ConfigFile(BaseModel):
    """Controller settings and every profile of a configuration file."""

    model_config = ConfigDict(frozen=True)

    settings: ControllerSettings = Field(default_factory=ControllerSettings)
    profiles: List[Profile] = Field(default_factory=list)

    @classmethod
    def decode(cls, source: Source) -> "ConfigFile":
        settings_lines: List[str] = []
        profiles: List[Profile] = []
        builder: Optional[_ProfileBuilder] = None

        for line in iter_lines(source):
            text = line.strip()
            if not text:
                continue

            if text.startswith(PROFILE_PREFIX):
                if builder is not None:
                    profile = builder.build()
                    if profile is not None:
                        profiles.append(profile)
                builder = _ProfileBuilder(text[len(PROFILE_PREFIX) :].strip())
            elif builder is None:
                settings_lines.append(text)
            elif UID_CHIP_SEPARATOR in text:
                builder.start_fan(text)
            else:
                builder.add_point(text)

        if builder is not None:
            profile = builder.build()
            if profile is not None:
                profiles.append(profile)

        return cls(
            settings=ControllerSettings.decode(settings_lines),
            profiles=profiles,
        )

    @classmethod
    def read(cls, stream: TextIO) -> "ConfigFile":
        return cls.decode(stream)

    def encode(self) -> str:
        return self.settings.encode() + "".join(
            profile.encode() for profile in self.profiles
        )

    def write(self, stream: TextIO) -> None:
        stream.write(self.encode())

    def get_profile(self, name: str) -> Optional[Profile]:
        """Get a profile by name. Returns None if not found."""
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None

    def active_profile(self) -> Optional[Profile]:
        """Return the profile selected by the controller settings."""
        return self.get_profile(self.settings.profile)


def load_config(path: Union[str, Path]) -> ConfigFile:
    """Read a configuration file from disk."""
    with Path(path).open(encoding="utf-8") as stream:
        return ConfigFile.read(stream)


def save_config(config: ConfigFile, path: Union[str, Path]) -> None:
    """Write a configuration file to disk, replacing any existing file."""
    Path(path).write_text(config.encode(), encoding="utf-8")
