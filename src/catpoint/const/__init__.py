"""Constants for catpoint."""

from .defaults import (
    CAT_CONFIDENCE_THRESHOLD,
    DEFAULT_CONFIG_FILE,
    DEFAULT_STORE_FILE,
    STORE_KEY_ALARM_STATUS,
    STORE_KEY_ARMING_STATUS,
    STORE_KEY_SENSORS,
)
from .states import AlarmStatus, ArmingStatus, SensorType
from .strings import (
    ALARM_STATUS,
    ALARM_STATUS_STYLE,
    ARMING_STATUS,
    ARMING_STATUS_STYLE,
    SENSOR_TYPE,
)

__all__ = [
    "AlarmStatus",
    "ArmingStatus",
    "SensorType",
    "ALARM_STATUS",
    "ALARM_STATUS_STYLE",
    "ARMING_STATUS",
    "ARMING_STATUS_STYLE",
    "SENSOR_TYPE",
    "CAT_CONFIDENCE_THRESHOLD",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_STORE_FILE",
    "STORE_KEY_ALARM_STATUS",
    "STORE_KEY_ARMING_STATUS",
    "STORE_KEY_SENSORS",
]
