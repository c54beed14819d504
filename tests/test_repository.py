"""Tests for sensors and the bundled repositories."""

import pytest
import yaml

from catpoint.const.states import AlarmStatus, ArmingStatus, SensorType
from catpoint.exceptions import CatpointInvalidParameterError, CatpointRepositoryError
from catpoint.image import FakeImageClassifier
from catpoint.listener import StatusListener
from catpoint.repository import FileSecurityRepository, InMemorySecurityRepository
from catpoint.sensor import Sensor
from catpoint.service import SecurityService


class TestSensor:
    """Test the sensor entity."""

    def test_defaults(self):
        sensor = Sensor("Front Door")
        assert sensor.sensor_type is SensorType.DOOR
        assert sensor.active is False
        assert len(sensor.sensor_id) == 32

    def test_type_from_string(self):
        assert Sensor("Hall", "motion").sensor_type is SensorType.MOTION

    def test_unknown_type(self):
        with pytest.raises(CatpointInvalidParameterError):
            Sensor("Hall", "LASER")

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_bad_name(self, name):
        with pytest.raises(CatpointInvalidParameterError):
            Sensor(name)

    def test_identity_is_id(self):
        a = Sensor("Door", sensor_id="x")
        b = Sensor("Renamed", "WINDOW", active=True, sensor_id="x")
        assert a == b
        assert len({a, b}) == 1

    def test_copy_is_independent(self):
        sensor = Sensor("Door", sensor_id="x")
        clone = sensor.copy()
        clone.active = True
        assert sensor.active is False
        assert clone == sensor

    def test_dict_round_trip(self):
        sensor = Sensor("Window", "WINDOW", active=True, sensor_id="w1")
        assert sensor.to_dict() == {"id": "w1", "name": "Window", "type": "WINDOW", "active": True}
        restored = Sensor.from_dict(sensor.to_dict())
        assert (restored.sensor_id, restored.name, restored.sensor_type, restored.active) == (
            "w1",
            "Window",
            SensorType.WINDOW,
            True,
        )

    def test_from_dict_missing_keys(self):
        with pytest.raises(CatpointInvalidParameterError):
            Sensor.from_dict({"name": "no id"})


class TestInMemoryRepository:
    """Test the in-memory repository."""

    def test_initial_state(self):
        repo = InMemorySecurityRepository()
        assert repo.get_arming_status() is ArmingStatus.DISARMED
        assert repo.get_alarm_status() is AlarmStatus.NO_ALARM
        assert repo.get_sensors() == set()

    def test_returned_sensors_are_copies(self):
        repo = InMemorySecurityRepository([Sensor("Door", sensor_id="d1")])
        (sensor,) = repo.get_sensors()
        sensor.active = True

        (stored,) = repo.get_sensors()
        assert stored.active is False

        repo.update_sensor(sensor)
        (stored,) = repo.get_sensors()
        assert stored.active is True

    def test_update_unknown_sensor_adds_it(self):
        repo = InMemorySecurityRepository()
        repo.update_sensor(Sensor("Door", sensor_id="d1"))
        assert {s.sensor_id for s in repo.get_sensors()} == {"d1"}

    def test_remove_unknown_sensor_is_noop(self):
        repo = InMemorySecurityRepository([Sensor("Door", sensor_id="d1")])
        repo.remove_sensor(Sensor("Other", sensor_id="zz"))
        assert len(repo.get_sensors()) == 1


class AlarmRecorder(StatusListener):
    def __init__(self):
        self.alarms = []

    def alarm_status_changed(self, alarm_status):
        self.alarms.append(alarm_status)


class TestFileRepository:
    """Test the YAML file repository."""

    def test_missing_file_starts_fresh(self, tmp_path):
        repo = FileSecurityRepository(tmp_path / "state.yaml")
        assert repo.get_arming_status() is ArmingStatus.DISARMED
        assert repo.get_alarm_status() is AlarmStatus.NO_ALARM
        assert repo.get_sensors() == set()
        assert not (tmp_path / "state.yaml").exists()

    def test_state_survives_reload(self, tmp_path):
        path = tmp_path / "nested" / "state.yaml"
        service = SecurityService(FileSecurityRepository(path), FakeImageClassifier(result=False))
        door = Sensor("Front Door", "DOOR", sensor_id="d1")
        service.add_sensor(door)
        service.add_sensor(Sensor("Window", "WINDOW", sensor_id="w1"))
        service.set_arming_status(ArmingStatus.ARMED_AWAY)
        service.change_sensor_activation_status(door, True)

        reloaded = FileSecurityRepository(path)
        assert reloaded.get_arming_status() is ArmingStatus.ARMED_AWAY
        assert reloaded.get_alarm_status() is AlarmStatus.PENDING_ALARM
        assert {s.sensor_id: s.active for s in reloaded.get_sensors()} == {"d1": True, "w1": False}

        data = yaml.safe_load(path.read_text())
        assert data["arming_status"] == "ARMED_AWAY"
        assert data["alarm_status"] == "PENDING_ALARM"
        assert [s["id"] for s in data["sensors"]] == ["d1", "w1"]

    def test_empty_file_starts_fresh(self, tmp_path):
        path = tmp_path / "state.yaml"
        path.write_text("")
        assert FileSecurityRepository(path).get_sensors() == set()

    @pytest.mark.parametrize(
        "content",
        [
            "- just\n- a list\n",
            "arming_status: SLEEPING\n",
            "sensors:\n  - {name: Door}\n",
            "alarm_status: [unclosed\n",
        ],
    )
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / "state.yaml"
        path.write_text(content)
        with pytest.raises(CatpointRepositoryError):
            FileSecurityRepository(path)

    def test_failed_write_leaves_state_unchanged(self, tmp_path):
        path = tmp_path / "state.yaml"
        repo = FileSecurityRepository(path)
        service = SecurityService(repo, FakeImageClassifier(result=False))
        door = Sensor("Front Door", sensor_id="d1")
        service.add_sensor(door)
        service.set_arming_status(ArmingStatus.ARMED_HOME)
        recorder = AlarmRecorder()
        service.add_status_listener(recorder)

        # Writes to a directory path fail
        path.unlink()
        path.mkdir()
        with pytest.raises(CatpointRepositoryError):
            service.change_sensor_activation_status(door, True)

        assert service.get_alarm_status() is AlarmStatus.NO_ALARM
        assert door.active is False
        assert {s.sensor_id: s.active for s in repo.get_sensors()} == {"d1": False}
        assert repo.get_arming_status() is ArmingStatus.ARMED_HOME
        assert recorder.alarms == []

        path.rmdir()
        service.change_sensor_activation_status(door, True)

        assert service.get_alarm_status() is AlarmStatus.PENDING_ALARM
        assert recorder.alarms == [AlarmStatus.PENDING_ALARM]
        assert yaml.safe_load(path.read_text())["alarm_status"] == "PENDING_ALARM"

    @pytest.mark.parametrize("operation", ["add", "remove", "arming"])
    def test_failed_write_rolls_back_each_setter(self, tmp_path, operation):
        path = tmp_path / "state.yaml"
        repo = FileSecurityRepository(path)
        kept = Sensor("Kept", sensor_id="k1")
        repo.add_sensor(kept)

        path.unlink()
        path.mkdir()
        with pytest.raises(CatpointRepositoryError):
            if operation == "add":
                repo.add_sensor(Sensor("New", sensor_id="n1"))
            elif operation == "remove":
                repo.remove_sensor(kept)
            else:
                repo.set_arming_status(ArmingStatus.ARMED_AWAY)

        assert {s.sensor_id for s in repo.get_sensors()} == {"k1"}
        assert repo.get_arming_status() is ArmingStatus.DISARMED
