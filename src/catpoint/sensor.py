"""Sensor abstraction."""

import functools
import logging
import uuid
from typing import Any

from .const.states import SensorType
from .exceptions import CatpointInvalidParameterError

_LOGGER = logging.getLogger(__name__)


def coerce_sensor_type(value: Any) -> SensorType:
    """Convert a SensorType or its string value into a SensorType.

    Raises:
        CatpointInvalidParameterError: If value is not a known sensor type
    """
    if isinstance(value, SensorType):
        return value
    try:
        return SensorType(str(value).upper())
    except ValueError as e:
        raise CatpointInvalidParameterError(f"Unknown sensor type: {value!r}") from e


@functools.total_ordering
class Sensor:
    """Represents an intrusion sensor.

    Sensors compare equal (and hash) by id. They sort by name, then id, so
    iteration over a set of sensors can be made deterministic.
    """

    def __init__(
        self,
        name: str,
        sensor_type: SensorType | str = SensorType.DOOR,
        active: bool = False,
        sensor_id: str | None = None,
    ):
        """Initialize sensor.

        Args:
            name: Display name
            sensor_type: DOOR, WINDOW or MOTION
            active: Initial activation flag
            sensor_id: Stable id (default: random uuid4 hex)
        """
        if not isinstance(name, str) or not name.strip():
            raise CatpointInvalidParameterError("Sensor name must be a non-empty string")

        self.sensor_id = sensor_id or uuid.uuid4().hex
        self.name = name
        self.sensor_type = coerce_sensor_type(sensor_type)
        self._active = bool(active)

        _LOGGER.debug(f"Sensor {self.sensor_id} initialized: {name} ({self.sensor_type.value})")

    @property
    def active(self) -> bool:
        """Get activation flag."""
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        self._active = bool(value)

    def copy(self) -> "Sensor":
        """Return an independent copy with the same id."""
        clone = object.__new__(Sensor)
        clone.__dict__.update(self.__dict__)
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Serialize sensor to a plain dict."""
        return {
            "id": self.sensor_id,
            "name": self.name,
            "type": self.sensor_type.value,
            "active": self._active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sensor":
        """Build a sensor from the output of to_dict().

        Raises:
            CatpointInvalidParameterError: If required keys are missing
        """
        try:
            return cls(
                name=data["name"],
                sensor_type=data.get("type", SensorType.DOOR),
                active=bool(data.get("active", False)),
                sensor_id=str(data["id"]),
            )
        except (KeyError, TypeError) as e:
            raise CatpointInvalidParameterError(f"Invalid sensor record: {data!r}") from e

    def _sort_key(self) -> tuple[str, str]:
        return (self.name, self.sensor_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __lt__(self, other: "Sensor") -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self.sensor_id)

    def __repr__(self) -> str:
        """String representation."""
        state = "active" if self._active else "inactive"
        return f"<Sensor {self.sensor_id}: {self.name} ({self.sensor_type.value}, {state})>"
