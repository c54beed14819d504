"""Command-line interface for catpoint."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

try:
    import click
    from rich.console import Console
    from rich.table import Table
except ImportError:
    print("CLI dependencies not installed. Install with: pip install catpoint[cli]")
    sys.exit(1)

from . import __version__
from .config import build_classifier, load_config
from .const.defaults import DEFAULT_CONFIG_FILE
from .const.states import AlarmStatus, ArmingStatus, SensorType
from .const.strings import (
    ALARM_STATUS,
    ALARM_STATUS_STYLE,
    ARMING_STATUS,
    ARMING_STATUS_STYLE,
    SENSOR_TYPE,
)
from .exceptions import CatpointError, CatpointSensorNotFoundError
from .listener import StatusListener
from .repository import FileSecurityRepository
from .sensor import Sensor
from .service import SecurityService

console = Console()


class ConsoleStatusListener(StatusListener):
    """Prints service notifications, or collects them for JSON output."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.events: list[dict[str, Any]] = []

    def _emit(self, event: dict[str, Any], text: str) -> None:
        self.events.append(event)
        if not self.quiet:
            console.print(text)

    def alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        style = ALARM_STATUS_STYLE[alarm_status]
        self._emit(
            {"event": "alarm_status_changed", "alarm_status": alarm_status.value},
            f"Alarm: [{style}]{ALARM_STATUS[alarm_status]}[/{style}]",
        )

    def arming_status_changed(self, arming_status: ArmingStatus) -> None:
        style = ARMING_STATUS_STYLE[arming_status]
        self._emit(
            {"event": "arming_status_changed", "arming_status": arming_status.value},
            f"System: [{style}]{ARMING_STATUS[arming_status]}[/{style}]",
        )

    def cat_detected(self, cat: bool) -> None:
        self._emit(
            {"event": "cat_detected", "cat": cat},
            "[red]DANGER - CAT DETECTED[/red]" if cat else "[green]No cats detected[/green]",
        )

    def sensors_changed(self) -> None:
        self._emit({"event": "sensors_changed"}, "[cyan]Sensors updated[/cyan]")


def _find_sensor(service: SecurityService, key: str) -> Sensor:
    """Find a sensor by id, falling back to a unique name match."""
    try:
        return service.get_sensor(key)
    except CatpointSensorNotFoundError:
        matches = [s for s in service.get_sensors() if s.name == key]
        if len(matches) == 1:
            return matches[0]
        if matches:
            raise CatpointSensorNotFoundError(
                f"Sensor name {key!r} is ambiguous; use the sensor id"
            ) from None
        raise


def _snapshot(service: SecurityService) -> dict[str, Any]:
    return {
        "arming_status": service.get_arming_status().value,
        "alarm_status": service.get_alarm_status().value,
        "sensors": [s.to_dict() for s in service.get_sensors()],
    }


def _run(
    ctx: click.Context,
    as_json: bool,
    action: str,
    body: Callable[[SecurityService], dict[str, Any]],
) -> None:
    """Open the store, run body against a service and report the outcome."""
    config = ctx.obj["config"]
    listener = ConsoleStatusListener(quiet=as_json)
    try:
        repository = FileSecurityRepository(config["catpoint"]["store"])
        service = SecurityService(repository, build_classifier(config))
        service.add_status_listener(listener)
        extra = body(service)
        if as_json:
            payload = {"ok": True, "action": action, **extra, "events": listener.events}
            click.echo(json.dumps(payload))
    except CatpointError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}))
        else:
            console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    help="Configuration file path",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: Path, debug: bool) -> None:
    """Catpoint - home security alarm controller."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config)
    except CatpointError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output status as JSON")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show arming status, alarm status and sensors."""

    def body(service: SecurityService) -> dict[str, Any]:
        snapshot = _snapshot(service)
        if as_json:
            return snapshot

        arming = service.get_arming_status()
        alarm = service.get_alarm_status()
        console.print(
            f"System: [{ARMING_STATUS_STYLE[arming]}]{ARMING_STATUS[arming]}[/{ARMING_STATUS_STYLE[arming]}]"
        )
        console.print(
            f"Alarm:  [{ALARM_STATUS_STYLE[alarm]}]{ALARM_STATUS[alarm]}[/{ALARM_STATUS_STYLE[alarm]}]\n"
        )

        sensors = service.get_sensors()
        if sensors:
            table = Table(title="Sensors")
            table.add_column("Id", style="cyan")
            table.add_column("Name", style="magenta")
            table.add_column("Type", style="yellow")
            table.add_column("State", style="yellow")

            for sensor in sensors:
                state_style = "red" if sensor.active else "green"
                state_text = "Active" if sensor.active else "Inactive"
                table.add_row(
                    sensor.sensor_id,
                    sensor.name,
                    SENSOR_TYPE[sensor.sensor_type],
                    f"[{state_style}]{state_text}[/{state_style}]",
                )

            console.print(table)
        else:
            console.print("[yellow]No sensors configured[/yellow]")
        return snapshot

    _run(ctx, as_json, "status", body)


def _arming_command(name: str, arming_status: ArmingStatus, doc: str) -> None:
    @cli.command(name, help=doc)
    @click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
    @click.pass_context
    def command(ctx: click.Context, as_json: bool) -> None:
        def body(service: SecurityService) -> dict[str, Any]:
            if not as_json:
                console.print(f"[cyan]Setting system to {ARMING_STATUS[arming_status]}...[/cyan]")
            service.set_arming_status(arming_status)
            return _snapshot(service)

        _run(ctx, as_json, name.replace("-", "_"), body)


_arming_command("arm-home", ArmingStatus.ARMED_HOME, "Arm the system while at home.")
_arming_command("arm-away", ArmingStatus.ARMED_AWAY, "Arm the system while away.")
_arming_command("disarm", ArmingStatus.DISARMED, "Disarm the system.")


@cli.command("add-sensor")
@click.argument("name", type=str)
@click.option(
    "--type",
    "sensor_type",
    type=click.Choice([t.value for t in SensorType], case_sensitive=False),
    default=SensorType.DOOR.value,
    show_default=True,
    help="Sensor type",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def add_sensor(ctx: click.Context, name: str, sensor_type: str, as_json: bool) -> None:
    """Add a new sensor."""

    def body(service: SecurityService) -> dict[str, Any]:
        sensor = Sensor(name, sensor_type)
        service.add_sensor(sensor)
        if not as_json:
            console.print(f"[green]Sensor {sensor.name} added with id {sensor.sensor_id}[/green]")
        return {"sensor": sensor.to_dict()}

    _run(ctx, as_json, "add_sensor", body)


@cli.command("remove-sensor")
@click.argument("sensor", type=str)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def remove_sensor(ctx: click.Context, sensor: str, as_json: bool) -> None:
    """Remove a sensor (by id or name)."""

    def body(service: SecurityService) -> dict[str, Any]:
        sensor_obj = _find_sensor(service, sensor)
        service.remove_sensor(sensor_obj)
        if not as_json:
            console.print(f"[green]Sensor {sensor_obj.name} removed[/green]")
        return {"sensor": sensor_obj.to_dict()}

    _run(ctx, as_json, "remove_sensor", body)


@cli.command("sensor")
@click.argument("sensor", type=str)
@click.argument("action", type=click.Choice(["activate", "deactivate"]))
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def sensor_cmd(ctx: click.Context, sensor: str, action: str, as_json: bool) -> None:
    """Activate or deactivate a sensor (by id or name)."""

    def body(service: SecurityService) -> dict[str, Any]:
        sensor_obj = _find_sensor(service, sensor)
        if not as_json:
            console.print(f"[cyan]Sensor {sensor_obj.name}: {action}...[/cyan]")
        service.change_sensor_activation_status(sensor_obj, action == "activate")
        return {"sensor": sensor_obj.to_dict(), **_snapshot(service)}

    _run(ctx, as_json, action, body)


@cli.command("scan-image")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def scan_image(ctx: click.Context, image: Path, as_json: bool) -> None:
    """Scan a camera image for cats."""

    def body(service: SecurityService) -> dict[str, Any]:
        if not as_json:
            console.print(f"[cyan]Scanning {image}...[/cyan]")
        cat = service.process_image(image.read_bytes())
        return {"image": str(image), "cat": cat, **_snapshot(service)}

    _run(ctx, as_json, "scan_image", body)


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
