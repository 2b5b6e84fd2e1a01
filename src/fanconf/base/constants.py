"""Grammar symbols shared by the configuration parsers and serializers.

Every value here is fixed at import time. Parsers compare against these
symbols; nothing in the package reassigns them.
"""

from typing import Final

# Marks the start of a profile section in a configuration file
PROFILE_PREFIX: Final = ">"

# UID format: chipname#hw_id:dev_name
UID_CHIP_SEPARATOR: Final = "#"
UID_HW_ID_SEPARATOR: Final = ":"

# Point format: temp[f]:rpm[%] and/or temp[f];pwm
RPM_SEPARATOR: Final = ":"
PWM_SEPARATOR: Final = ";"
FAHRENHEIT: Final = "f"
PERCENT: Final = "%"

# Controller settings keys
PROFILE_KEY: Final = "profile="
DYNAMIC_KEY: Final = "dynamic="
INTERVAL_KEY: Final = "interval="
THREADS_KEY: Final = "threads="
# Superseded by INTERVAL_KEY; accepted on read, never written
UPDATE_KEY_DEPRECATED: Final = "update="

# hwmon device tree and classification labels
HWMON_PATH: Final = "/sys/class/hwmon/hwmon"
TEMP_SENSOR_LABEL: Final = "temp"
NVIDIA_LABEL: Final = "nvidia"

PWM_MIN: Final = 0
PWM_MAX: Final = 255
RPM_MIN: Final = 0
