import pytest

from catpoint.sensor import Sensor


@pytest.fixture
def sensors():
    """Three named sensors, all inactive."""
    return [
        Sensor("Back Door", "DOOR", sensor_id="s1"),
        Sensor("Kitchen Window", "WINDOW", sensor_id="s2"),
        Sensor("Hallway", "MOTION", sensor_id="s3"),
    ]
