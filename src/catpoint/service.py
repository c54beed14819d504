"""Security service: the alarm decision engine."""

import logging
import threading
from enum import Enum
from typing import Any, Callable, TypeVar

from .const.defaults import CAT_CONFIDENCE_THRESHOLD
from .const.states import AlarmStatus, ArmingStatus
from .exceptions import CatpointInvalidParameterError, CatpointSensorNotFoundError
from .image import ImageClassifier
from .listener import StatusListener
from .repository import SecurityRepository
from .sensor import Sensor

_LOGGER = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)


def _coerce_status(enum_cls: type[_E], value: Any) -> _E:
    """Accept an enum member or its string value."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise CatpointInvalidParameterError(
            f"Invalid {enum_cls.__name__}: {value!r}"
        ) from e


class SecurityService:
    """Receives changes to the security system and decides the alarm state.

    The service reads every value from the repository on demand and writes
    each change back before notifying listeners. All public operations are
    serialized with a re-entrant lock, so one service may be shared between
    threads.
    """

    def __init__(self, repository: SecurityRepository, classifier: ImageClassifier):
        """Initialize service.

        Args:
            repository: Store for sensors and statuses
            classifier: Image classifier used by process_image()
        """
        if repository is None:
            raise CatpointInvalidParameterError("repository is required")
        if classifier is None:
            raise CatpointInvalidParameterError("classifier is required")

        self._repository = repository
        self._classifier = classifier
        self._listeners: list[StatusListener] = []
        self._lock = threading.RLock()

        _LOGGER.debug("Security service initialized")

    # Listeners

    def add_status_listener(self, listener: StatusListener) -> None:
        """Register a listener. Registering the same listener twice is a no-op."""
        if not isinstance(listener, StatusListener):
            raise CatpointInvalidParameterError(
                f"Listener must be a StatusListener, got {type(listener).__name__}"
            )
        with self._lock:
            if not any(existing is listener for existing in self._listeners):
                self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        """Deregister a listener. Unknown listeners are ignored."""
        with self._lock:
            self._listeners = [existing for existing in self._listeners if existing is not listener]

    def _notify(self, callback: Callable[[StatusListener], None]) -> None:
        # Snapshot so a listener may (de)register others while being notified
        for listener in list(self._listeners):
            callback(listener)

    # Reads

    def get_alarm_status(self) -> AlarmStatus:
        """Get current alarm status from the repository."""
        return AlarmStatus(self._repository.get_alarm_status())

    def get_arming_status(self) -> ArmingStatus:
        """Get current arming status from the repository."""
        return ArmingStatus(self._repository.get_arming_status())

    def get_sensors(self) -> list[Sensor]:
        """Get all sensors, ordered by name then id."""
        return sorted(self._repository.get_sensors())

    def get_active_sensors(self) -> list[Sensor]:
        """Get sensors that are currently active, ordered by name then id."""
        return [sensor for sensor in self.get_sensors() if sensor.active]

    def get_sensor(self, sensor_id: str) -> Sensor:
        """Get a sensor by id.

        Raises:
            CatpointSensorNotFoundError: If no sensor has that id
        """
        for sensor in self._repository.get_sensors():
            if sensor.sensor_id == sensor_id:
                return sensor
        raise CatpointSensorNotFoundError(f"Sensor {sensor_id} not found")

    def _all_sensors_inactive(self, excluding: Sensor | None = None) -> bool:
        return not any(
            sensor.active
            for sensor in self._repository.get_sensors()
            if excluding is None or sensor.sensor_id != excluding.sensor_id
        )

    # Commands

    def set_alarm_status(self, alarm_status: AlarmStatus | str) -> None:
        """Change the alarm status and notify listeners.

        This is the only place the alarm status is written. Nothing is
        written or notified when the status is already at that value.

        Args:
            alarm_status: New alarm status
        """
        alarm_status = _coerce_status(AlarmStatus, alarm_status)
        with self._lock:
            previous = self.get_alarm_status()
            if previous == alarm_status:
                return

            self._repository.set_alarm_status(alarm_status)
            _LOGGER.info(f"Alarm status changed: {previous.value} → {alarm_status.value}")
            self._notify(lambda listener: listener.alarm_status_changed(alarm_status))

    def set_arming_status(self, arming_status: ArmingStatus | str) -> None:
        """Set the arming status.

        Disarming clears any alarm; sensors keep their state. Arming first
        deactivates every active sensor, while the previous arming status
        is still in effect, then stores the new arming status.

        Args:
            arming_status: New arming status
        """
        arming_status = _coerce_status(ArmingStatus, arming_status)
        with self._lock:
            if arming_status == ArmingStatus.DISARMED:
                self.set_alarm_status(AlarmStatus.NO_ALARM)
            else:
                # Deactivation writes back to the repository: iterate a snapshot
                active_sensors = self.get_active_sensors()
                for sensor in active_sensors:
                    self.change_sensor_activation_status(sensor, False)
                if active_sensors:
                    self._notify(lambda listener: listener.sensors_changed())

            previous = self.get_arming_status()
            self._repository.set_arming_status(arming_status)
            if previous != arming_status:
                _LOGGER.info(f"Arming status changed: {previous.value} → {arming_status.value}")
                self._notify(lambda listener: listener.arming_status_changed(arming_status))

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Change a sensor's activation flag and update the alarm if needed.

        The sensor is always written back, even when the flag does not
        change.

        Args:
            sensor: Sensor to change
            active: Desired activation flag
        """
        if not isinstance(sensor, Sensor):
            raise CatpointInvalidParameterError("sensor must be a Sensor")
        if not isinstance(active, bool):
            raise CatpointInvalidParameterError(f"active must be a bool, got {active!r}")

        with self._lock:
            was_active = sensor.active
            if not was_active and active:
                _LOGGER.info(f"Activating sensor {sensor.sensor_id} ({sensor.name})")
                self._handle_sensor_activated()
            elif was_active and not active:
                _LOGGER.info(f"Deactivating sensor {sensor.sensor_id} ({sensor.name})")
                self._handle_sensor_deactivated(sensor)

            sensor.active = active
            self._repository.update_sensor(sensor)

    def _handle_sensor_activated(self) -> None:
        if not self.get_arming_status().is_armed:
            return

        alarm_status = self.get_alarm_status()
        if alarm_status == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)
        # ALARM stays raised until disarm

    def _handle_sensor_deactivated(self, sensor: Sensor) -> None:
        if not self.get_arming_status().is_armed:
            return

        if self.get_alarm_status() != AlarmStatus.PENDING_ALARM:
            return

        # The sensor itself is about to become inactive
        if self._all_sensors_inactive(excluding=sensor):
            self.set_alarm_status(AlarmStatus.NO_ALARM)

    def process_image(self, image: Any) -> bool:
        """Run a camera frame through the classifier and update the alarm.

        Args:
            image: Opaque image payload passed to the classifier

        Returns:
            Whether a cat was detected
        """
        with self._lock:
            cat = bool(self._classifier.contains_cat(image, CAT_CONFIDENCE_THRESHOLD))
            self._cat_detected(cat)
            return cat

    def _cat_detected(self, cat: bool) -> None:
        if cat and self.get_arming_status() == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif not cat and self._all_sensors_inactive():
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        self._notify(lambda listener: listener.cat_detected(cat))

    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor to the system."""
        if not isinstance(sensor, Sensor):
            raise CatpointInvalidParameterError("sensor must be a Sensor")
        with self._lock:
            self._repository.add_sensor(sensor)
            _LOGGER.info(f"Sensor added: {sensor.sensor_id} ({sensor.name})")
            self._notify(lambda listener: listener.sensors_changed())

    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor from the system."""
        if not isinstance(sensor, Sensor):
            raise CatpointInvalidParameterError("sensor must be a Sensor")
        with self._lock:
            self._repository.remove_sensor(sensor)
            _LOGGER.info(f"Sensor removed: {sensor.sensor_id} ({sensor.name})")
            self._notify(lambda listener: listener.sensors_changed())

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<SecurityService {self.get_arming_status().value}/"
            f"{self.get_alarm_status().value}, {len(self._listeners)} listeners>"
        )
