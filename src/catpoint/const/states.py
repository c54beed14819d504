"""State definitions for catpoint entities."""

from enum import Enum


class ArmingStatus(str, Enum):
    """System arming states."""

    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def is_armed(self) -> bool:
        """Check if this is any armed state."""
        return self in (ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY)


class AlarmStatus(str, Enum):
    """Alarm levels."""

    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"


class SensorType(str, Enum):
    """Sensor type tags.

    Informational only; alarm decisions never depend on the type.
    """

    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"
