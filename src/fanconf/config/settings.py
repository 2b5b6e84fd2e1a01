"""Daemon-wide controller settings."""

import logging
import os
from datetime import timedelta
from typing import Any, Dict, TextIO

from pydantic import BaseModel, ConfigDict, Field

from fanconf.base.constants import (
    DYNAMIC_KEY,
    INTERVAL_KEY,
    PROFILE_KEY,
    THREADS_KEY,
    UPDATE_KEY_DEPRECATED,
)
from fanconf.base.tokens import Token, is_not_space, parse_bool

from .curve import Source, iter_lines

logger = logging.getLogger(__name__)


def _default_max_threads() -> int:
    return os.cpu_count() or 1


def _milliseconds(text: str) -> timedelta:
    return timedelta(milliseconds=int(text))


class ControllerSettings(BaseModel):
    """Operating parameters of the control loop.

    Format: one ``key=value`` per line, in any order::

        profile=default
        dynamic=true
        interval=2000
        threads=4

    Whitespace around ``=`` is ignored. ``update=`` is the old name of
    ``interval=``; it is still read but never written. Unknown keys are
    ignored and values that don't parse leave the default in place.
    Nothing is clamped: callers must check ``valid()`` before starting
    the control loop.
    """

    model_config = ConfigDict(frozen=True)

    profile: str = Field(default="default", description="Active profile")
    dynamic: bool = Field(
        default=True, description="Recompute fan speeds from curves"
    )
    update_interval: timedelta = Field(
        default=timedelta(milliseconds=2000),
        description="Time between control loop updates",
    )
    max_threads: int = Field(
        default_factory=_default_max_threads,
        description="Worker pool size for the control loop",
    )

    @classmethod
    def decode(cls, source: Source) -> "ControllerSettings":
        values: Dict[str, Any] = cls().model_dump()

        for line in iter_lines(source):
            text = line.strip()
            if not text:
                continue
            if "=" in text:
                # "interval = 500" reads as "interval=500"
                key_text, _, value_text = text.partition("=")
                text = f"{key_text.strip()}={value_text.lstrip()}"

            if text.startswith(UPDATE_KEY_DEPRECATED):
                logger.warning(
                    f"'{UPDATE_KEY_DEPRECATED}' is deprecated, "
                    f"use '{INTERVAL_KEY}' instead"
                )
                key, field, kind = (
                    UPDATE_KEY_DEPRECATED,
                    "update_interval",
                    _milliseconds,
                )
            elif text.startswith(INTERVAL_KEY):
                key, field, kind = INTERVAL_KEY, "update_interval", _milliseconds
            elif text.startswith(PROFILE_KEY):
                key, field, kind = PROFILE_KEY, "profile", str
            elif text.startswith(DYNAMIC_KEY):
                key, field, kind = DYNAMIC_KEY, "dynamic", parse_bool
            elif text.startswith(THREADS_KEY):
                key, field, kind = THREADS_KEY, "max_threads", int
            else:
                logger.debug(f"Ignoring unknown setting: {text}")
                continue

            token = Token.scan(text, len(key), is_not_space)
            if token.found:
                values[field] = token.convert(kind, values[field])

        return cls(**values)

    @classmethod
    def read(cls, stream: TextIO) -> "ControllerSettings":
        return cls.decode(stream)

    def encode(self) -> str:
        interval_ms = int(self.update_interval / timedelta(milliseconds=1))
        return (
            f"{PROFILE_KEY}{self.profile}\n"
            f"{DYNAMIC_KEY}{'true' if self.dynamic else 'false'}\n"
            f"{INTERVAL_KEY}{interval_ms}\n"
            f"{THREADS_KEY}{self.max_threads}\n"
        )

    def write(self, stream: TextIO) -> None:
        stream.write(self.encode())

    def valid(self) -> bool:
        """Interval and thread count must both be positive."""
        return (
            self.update_interval > timedelta(0) and self.max_threads > 0
        )
