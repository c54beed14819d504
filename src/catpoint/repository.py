"""State stores for sensors, arming status and alarm status."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable

import yaml

from .const.defaults import (
    STORE_KEY_ALARM_STATUS,
    STORE_KEY_ARMING_STATUS,
    STORE_KEY_SENSORS,
)
from .const.states import AlarmStatus, ArmingStatus
from .exceptions import CatpointInvalidParameterError, CatpointRepositoryError
from .sensor import Sensor

_LOGGER = logging.getLogger(__name__)


class SecurityRepository(ABC):
    """Interface the security service uses to read and persist system state."""

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the stored alarm status."""

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the stored arming status."""

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""

    @abstractmethod
    def get_sensors(self) -> set[Sensor]:
        """Get all sensors (unique by id)."""

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor."""

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor."""

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist a sensor's current fields."""


class InMemorySecurityRepository(SecurityRepository):
    """Repository that keeps state in process memory.

    Sensors handed out by get_sensors() are copies, so callers can only
    change stored sensors through update_sensor().
    """

    def __init__(
        self,
        sensors: list[Sensor] | None = None,
        arming_status: ArmingStatus = ArmingStatus.DISARMED,
        alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
    ):
        """Initialize repository.

        Args:
            sensors: Initial sensors
            arming_status: Initial arming status
            alarm_status: Initial alarm status
        """
        self._sensors: dict[str, Sensor] = {}
        self._arming_status = ArmingStatus(arming_status)
        self._alarm_status = AlarmStatus(alarm_status)
        for sensor in sensors or []:
            self._sensors[sensor.sensor_id] = sensor.copy()

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status

    def get_sensors(self) -> set[Sensor]:
        return {sensor.copy() for sensor in self._sensors.values()}

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.sensor_id] = sensor.copy()

    def remove_sensor(self, sensor: Sensor) -> None:
        self._sensors.pop(sensor.sensor_id, None)

    def update_sensor(self, sensor: Sensor) -> None:
        # Upsert: an unknown sensor is stored as if it had been added
        self._sensors[sensor.sensor_id] = sensor.copy()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<InMemorySecurityRepository {self._arming_status.value}/"
            f"{self._alarm_status.value}, {len(self._sensors)} sensors>"
        )


class FileSecurityRepository(InMemorySecurityRepository):
    """Repository persisted to a YAML file.

    The whole state is loaded once on construction and written back after
    every mutation; when the write fails the change is undone in memory
    too. A missing file means a fresh system: disarmed, no alarm,
    no sensors.

    File layout:
        alarm_status: NO_ALARM
        arming_status: DISARMED
        sensors:
          - {id: ..., name: Front Door, type: DOOR, active: false}
    """

    def __init__(self, path: str | Path):
        """Initialize repository and load state from path.

        Args:
            path: YAML file holding the state

        Raises:
            CatpointRepositoryError: If the file cannot be read or decoded
        """
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            _LOGGER.debug(f"No state file at {self.path}, starting fresh")
            return

        try:
            with open(self.path) as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CatpointRepositoryError(f"Failed to read state from {self.path}: {e}") from e

        if raw is None:
            return
        if not isinstance(raw, dict):
            raise CatpointRepositoryError(f"Invalid state file {self.path}: expected a mapping")

        try:
            self._alarm_status = AlarmStatus(raw.get(STORE_KEY_ALARM_STATUS, AlarmStatus.NO_ALARM))
            self._arming_status = ArmingStatus(
                raw.get(STORE_KEY_ARMING_STATUS, ArmingStatus.DISARMED)
            )
            sensors = [Sensor.from_dict(item) for item in raw.get(STORE_KEY_SENSORS) or []]
        except (ValueError, AttributeError, CatpointInvalidParameterError) as e:
            raise CatpointRepositoryError(f"Invalid state file {self.path}: {e}") from e

        self._sensors = {sensor.sensor_id: sensor for sensor in sensors}
        _LOGGER.debug(
            f"Loaded state from {self.path}: {self._arming_status.value}/"
            f"{self._alarm_status.value}, {len(self._sensors)} sensors"
        )

    def _save(self) -> None:
        data: dict[str, Any] = {
            STORE_KEY_ALARM_STATUS: self._alarm_status.value,
            STORE_KEY_ARMING_STATUS: self._arming_status.value,
            STORE_KEY_SENSORS: [s.to_dict() for s in sorted(self._sensors.values())],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(data, f, sort_keys=False)
        except OSError as e:
            raise CatpointRepositoryError(f"Failed to write state to {self.path}: {e}") from e

    def _persist(self, apply: Callable[..., None], *args: Any) -> None:
        """Apply a change in memory, then write it; undo the change if the write fails."""
        previous = (self._alarm_status, self._arming_status, dict(self._sensors))
        apply(*args)
        try:
            self._save()
        except CatpointRepositoryError:
            self._alarm_status, self._arming_status, self._sensors = previous
            raise

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._persist(super().set_alarm_status, alarm_status)

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._persist(super().set_arming_status, arming_status)

    def add_sensor(self, sensor: Sensor) -> None:
        self._persist(super().add_sensor, sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self._persist(super().remove_sensor, sensor)

    def update_sensor(self, sensor: Sensor) -> None:
        self._persist(super().update_sensor, sensor)

    def __repr__(self) -> str:
        """String representation."""
        return f"<FileSecurityRepository {self.path}, {len(self._sensors)} sensors>"
