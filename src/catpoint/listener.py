"""Status listener interface."""

import logging

from .const.states import AlarmStatus, ArmingStatus

_LOGGER = logging.getLogger(__name__)


class StatusListener:
    """Receives notifications from the security service.

    Subclass and override the callbacks you care about; the defaults do
    nothing.
    """

    def alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        """Called after a new alarm status has been stored."""

    def arming_status_changed(self, arming_status: ArmingStatus) -> None:
        """Called after a new arming status has been stored."""

    def cat_detected(self, cat: bool) -> None:
        """Called with the result of every processed image."""

    def sensors_changed(self) -> None:
        """Called when sensors are added, removed or bulk-deactivated."""


class LoggingStatusListener(StatusListener):
    """Listener that logs every notification."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or _LOGGER

    def alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        self._logger.info(f"Alarm status: {alarm_status.value}")

    def arming_status_changed(self, arming_status: ArmingStatus) -> None:
        self._logger.info(f"Arming status: {arming_status.value}")

    def cat_detected(self, cat: bool) -> None:
        self._logger.info("Cat detected" if cat else "No cat detected")

    def sensors_changed(self) -> None:
        self._logger.info("Sensors changed")
