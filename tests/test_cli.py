"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from catpoint.cli import cli


@pytest.fixture
def invoke(tmp_path):
    """Run the CLI against a store inside tmp_path."""
    config = tmp_path / "catpoint.yaml"
    config.write_text(
        f"catpoint:\n  store: {tmp_path / 'state.yaml'}\n  classifier:\n    result: true\n"
    )
    runner = CliRunner()

    def run(*args):
        return runner.invoke(cli, ["--config", str(config), *args], obj={})

    return run


def last_json(result):
    return json.loads(result.output.strip().splitlines()[-1])


def test_status_of_fresh_system(invoke):
    result = invoke("status", "--json")
    assert result.exit_code == 0, result.output
    payload = last_json(result)
    assert payload["ok"] is True
    assert payload["arming_status"] == "DISARMED"
    assert payload["alarm_status"] == "NO_ALARM"
    assert payload["sensors"] == []


def test_status_table(invoke):
    invoke("add-sensor", "Front Door")
    result = invoke("status")
    assert result.exit_code == 0, result.output
    assert "Front Door" in result.output
    assert "Disarmed" in result.output


def test_arm_and_trip_sensor(invoke):
    added = last_json(invoke("add-sensor", "Front Door", "--type", "door", "--json"))
    sensor_id = added["sensor"]["id"]
    assert added["sensor"]["type"] == "DOOR"
    assert added["events"] == [{"event": "sensors_changed"}]

    armed = last_json(invoke("arm-home", "--json"))
    assert armed["arming_status"] == "ARMED_HOME"
    assert armed["events"] == [{"event": "arming_status_changed", "arming_status": "ARMED_HOME"}]

    tripped = last_json(invoke("sensor", sensor_id, "activate", "--json"))
    assert tripped["alarm_status"] == "PENDING_ALARM"
    assert tripped["events"] == [{"event": "alarm_status_changed", "alarm_status": "PENDING_ALARM"}]

    # Lookup by name works too
    cleared = last_json(invoke("sensor", "Front Door", "deactivate", "--json"))
    assert cleared["alarm_status"] == "NO_ALARM"

    disarmed = last_json(invoke("disarm", "--json"))
    assert disarmed["arming_status"] == "DISARMED"


def test_scan_image_with_cat_at_home(invoke, tmp_path):
    image = tmp_path / "frame.jpg"
    image.write_bytes(b"\xff\xd8fake")
    invoke("arm-home")

    payload = last_json(invoke("scan-image", str(image), "--json"))

    assert payload["cat"] is True
    assert payload["alarm_status"] == "ALARM"
    assert payload["events"][-1] == {"event": "cat_detected", "cat": True}


def test_remove_sensor(invoke):
    invoke("add-sensor", "Garage", "--type", "MOTION")
    payload = last_json(invoke("remove-sensor", "Garage", "--json"))
    assert payload["ok"] is True
    assert last_json(invoke("status", "--json"))["sensors"] == []


def test_unknown_sensor_is_an_error(invoke):
    result = invoke("sensor", "nope", "activate", "--json")
    assert result.exit_code == 1
    payload = last_json(result)
    assert payload["ok"] is False
    assert "nope" in payload["error"]


def test_ambiguous_sensor_name(invoke):
    invoke("add-sensor", "Door")
    invoke("add-sensor", "Door")
    result = invoke("remove-sensor", "Door")
    assert result.exit_code == 1
    assert "ambiguous" in result.output


def test_bad_config(tmp_path):
    config = tmp_path / "catpoint.yaml"
    config.write_text("catpoint:\n  classifier:\n    result: maybe\n")
    result = CliRunner().invoke(cli, ["--config", str(config), "status"], obj={})
    assert result.exit_code == 1


def test_config_path_is_directory(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path), "status"], obj={})
    assert result.exit_code == 1
    assert "Cannot read config" in result.output
