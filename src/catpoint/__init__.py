"""Catpoint - home security alarm controller.

The security service decides the alarm status from sensor activity and
camera images, persists it through a repository and notifies listeners.

Example:
    >>> from catpoint import (
    ...     ArmingStatus, FakeImageClassifier, InMemorySecurityRepository,
    ...     SecurityService, Sensor,
    ... )
    >>>
    >>> service = SecurityService(InMemorySecurityRepository(), FakeImageClassifier(result=False))
    >>> door = Sensor("Front Door", "DOOR")
    >>> service.add_sensor(door)
    >>> service.set_arming_status(ArmingStatus.ARMED_HOME)
    >>> service.change_sensor_activation_status(door, True)
    >>> service.get_alarm_status()
    <AlarmStatus.PENDING_ALARM: 'PENDING_ALARM'>
"""

from . import const, exceptions
from .const.states import AlarmStatus, ArmingStatus, SensorType
from .image import FakeImageClassifier, ImageClassifier
from .listener import LoggingStatusListener, StatusListener
from .repository import FileSecurityRepository, InMemorySecurityRepository, SecurityRepository
from .sensor import Sensor
from .service import SecurityService

__version__ = "0.1.0"

__all__ = [
    # High-level API (recommended)
    "SecurityService",
    # Entity classes
    "Sensor",
    "AlarmStatus",
    "ArmingStatus",
    "SensorType",
    # Collaborators
    "SecurityRepository",
    "InMemorySecurityRepository",
    "FileSecurityRepository",
    "ImageClassifier",
    "FakeImageClassifier",
    "StatusListener",
    "LoggingStatusListener",
    # Submodules
    "const",
    "exceptions",
    # Version
    "__version__",
]
