"""Human-readable text for statuses."""

from .states import AlarmStatus, ArmingStatus, SensorType

ARMING_STATUS: dict[str, str] = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Armed - At Home",
    ArmingStatus.ARMED_AWAY: "Armed - Away",
}

ALARM_STATUS: dict[str, str] = {
    AlarmStatus.NO_ALARM: "Cool and Good",
    AlarmStatus.PENDING_ALARM: "I'm in Danger...",
    AlarmStatus.ALARM: "Awooga!",
}

SENSOR_TYPE: dict[str, str] = {
    SensorType.DOOR: "Door",
    SensorType.WINDOW: "Window",
    SensorType.MOTION: "Motion",
}

# rich styles used by the CLI
ARMING_STATUS_STYLE: dict[str, str] = {
    ArmingStatus.DISARMED: "yellow",
    ArmingStatus.ARMED_HOME: "green",
    ArmingStatus.ARMED_AWAY: "blue",
}

ALARM_STATUS_STYLE: dict[str, str] = {
    AlarmStatus.NO_ALARM: "blue",
    AlarmStatus.PENDING_ALARM: "yellow",
    AlarmStatus.ALARM: "red",
}
