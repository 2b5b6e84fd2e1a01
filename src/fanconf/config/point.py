"""Curve points: one temperature to fan speed control pair."""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fanconf.base.constants import (
    FAHRENHEIT,
    PERCENT,
    PWM_MAX,
    PWM_MIN,
    PWM_SEPARATOR,
    RPM_MIN,
    RPM_SEPARATOR,
)
from fanconf.base.tokens import Token, is_digit

logger = logging.getLogger(__name__)


def _is_temp_char(ch: str) -> bool:
    return is_digit(ch) or ch == "-"


class Point(BaseModel):
    """A single (temperature, speed) point of a fan curve.

    Format: ``temp[f]:rpm[%]`` or ``temp[f];pwm``, e.g. ``40:1200``,
    ``104f:50%`` or ``60;255``. A line may carry both channels.
    Temperatures are stored in Celsius; an ``f`` suffix is converted at
    parse time. A percentage RPM is kept as a percentage, resolving it
    against a fan's maximum speed is left to the control loop.
    """

    model_config = ConfigDict(frozen=True)

    temp: int = Field(default=0, description="Temperature in Celsius")
    rpm: Optional[int] = Field(
        default=None, ge=RPM_MIN, description="Target RPM, None when unset"
    )
    pwm: Optional[int] = Field(
        default=None,
        ge=PWM_MIN,
        le=PWM_MAX,
        description="Target PWM duty value, None when unset",
    )
    is_rpm_percent: bool = Field(
        default=False, description="Whether rpm is a percentage of maximum"
    )

    @staticmethod
    def fahrenheit_to_celsius(value: int) -> int:
        """Convert whole degrees, truncating toward zero."""
        scaled = (value - 32) * 5
        if scaled < 0:
            return -(-scaled // 9)
        return scaled // 9

    @classmethod
    def decode(cls, line: str) -> "Point":
        """Parse a point, leaving any channel that doesn't parse unset.

        The returned point may be invalid; callers check ``valid()``.
        """
        text = "".join(line.split())

        temp = 0
        temp_token = Token.scan(text, 0, _is_temp_char)
        if temp_token.found:
            temp = temp_token.convert(int, temp)
            if temp_token.followed_by(FAHRENHEIT) or temp_token.followed_by(
                FAHRENHEIT.upper()
            ):
                temp = cls.fahrenheit_to_celsius(temp)

        rpm = None
        is_rpm_percent = False
        rpm_token = Token.after(text, RPM_SEPARATOR, is_digit)
        if rpm_token.found:
            rpm = rpm_token.convert(int, rpm)
            is_rpm_percent = rpm_token.followed_by(PERCENT)

        pwm = None
        pwm_token = Token.after(text, PWM_SEPARATOR, is_digit)
        if pwm_token.found:
            pwm = pwm_token.convert(int, pwm)
            if pwm is not None and pwm > PWM_MAX:
                logger.warning(
                    f"PWM {pwm} above {PWM_MAX} ignored in point: {text}"
                )
                pwm = None

        return cls(
            temp=temp, rpm=rpm, pwm=pwm, is_rpm_percent=is_rpm_percent
        )

    def encode(self) -> str:
        """Serialize in Celsius; unset channels are omitted."""
        text = str(self.temp)
        if self.valid_rpm():
            text += f"{RPM_SEPARATOR}{self.rpm}"
            if self.is_rpm_percent:
                text += PERCENT
        if self.valid_pwm():
            text += f"{PWM_SEPARATOR}{self.pwm}"
        return text

    def valid_rpm(self) -> bool:
        return self.rpm is not None

    def valid_pwm(self) -> bool:
        return self.pwm is not None

    def valid(self) -> bool:
        """A point needs at least one of the RPM or PWM channels."""
        return self.valid_rpm() or self.valid_pwm()

    def __str__(self) -> str:
        return self.encode()
