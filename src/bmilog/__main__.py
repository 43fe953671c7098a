"""
Command-line interface for bmilog.
Plays the part of the rendering layer: every command opens the configured
store, drives a SessionController and prints what a screen would show.
"""

import click
import json
import sys
import typing

from stairval.notepad import create_notepad

from . import config
from .audit import AuditEntry, audit_history
from .history import HistoryStore
from .measurement import MeasurementInput
from .record import ResultRecord
from .session import SessionController
from .storage import JsonFileBackend
from .tables import DISPLAY_COLUMNS, records_to_frame, summarize, write_history_csv
from .update_check import UpdateChecker

# Bounds of the calculator input sliders
HEIGHT_RANGE = click.FloatRange(100, 250)
WEIGHT_RANGE = click.FloatRange(30, 200)
AGE_RANGE = click.IntRange(5, 100)


@click.group()
@click.option(
    "-s",
    "--store-path",
    "store_path",
    default=config.STORE_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="JSON file holding the history (env: BMILOG_STORE_PATH)",
)
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
@click.pass_context
def main(ctx: click.Context, store_path: str, verbose_logging: bool, log_file_path: typing.Optional[str]):
    """bmilog: Body Mass Index calculator with a persistent history."""
    config.configure_logging(verbose_logging, log_file_path)
    ctx.obj = _open_session(store_path)


def _open_session(store_path: str) -> SessionController:
    history = HistoryStore(JsonFileBackend(store_path), key=config.HISTORY_KEY)
    return SessionController(history)


def _format_result(record: ResultRecord) -> str:
    # one line per value, as on the result screen
    who = " | ".join(
        part
        for part in (
            record.name,
            f"{record.age}y",
            record.gender.value.capitalize(),
            f"{record.height_cm:g}cm",
            f"{record.weight_kg:g}kg",
        )
        if part
    )
    return "\n".join(
        [
            f"BMI:          {record.bmi}",
            f"Category:     {record.category.display.label}",
            f"Subject:      {who}",
            f"Ideal weight: {record.ideal_weight_label}",
            f"Recorded:     {record.display_date}",
            f"Id:           {record.id}",
        ]
    )


@main.command(name="calc")
@click.option("-w", "--weight", "weight_kg", required=True, type=WEIGHT_RANGE, help="weight in kg (30-200)")
@click.option("-h", "--height", "height_cm", required=True, type=HEIGHT_RANGE, help="height in cm (100-250)")
@click.option("-a", "--age", default=25, show_default=True, type=AGE_RANGE, help="age in years (5-100)")
@click.option(
    "-g",
    "--gender",
    default="female",
    show_default=True,
    type=click.Choice(["male", "female"], case_sensitive=False),
)
@click.option("-n", "--name", default="", help="optional display name")
@click.option("--json", "as_json", is_flag=True, help="Print the stored record as JSON")
@click.pass_obj
def calc(session: SessionController, weight_kg: float, height_cm: float, age: int, gender: str, name: str, as_json: bool):
    """
    Compute BMI, category and ideal weight, and store the result as the newest history entry.
    """
    measurement = MeasurementInput(name=name, age=age, gender=gender, weight_kg=weight_kg, height_cm=height_cm)
    record = session.submit_measurement(measurement)
    if as_json:
        click.echo(json.dumps(record.to_dict(), indent=2))
    else:
        color = record.category.display.color
        click.echo(click.style(_format_result(record), fg=None if color == "gray" else color))


@main.command(name="history")
@click.option("--json", "as_json", is_flag=True, help="Print the history as a JSON array")
@click.pass_obj
def history(session: SessionController, as_json: bool):
    """List stored results, newest first."""
    records = session.history.records
    if as_json:
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return
    if not records:
        click.echo("History is empty. Run `bmilog calc` to add a result.")
        return
    df = records_to_frame(records)[DISPLAY_COLUMNS]
    click.echo(df.to_string(index=False))


@main.command(name="delete")
@click.argument("record_id")
@click.pass_obj
def delete(session: SessionController, record_id: str):
    """Delete the history entry RECORD_ID."""
    if session.history.get(record_id) is None:
        click.echo(f"No history entry with id {record_id}")
        return
    session.delete_history_entry(record_id)
    click.echo(f"Deleted {record_id}")


@main.command(name="clear")
@click.confirmation_option(prompt="Delete the whole history?")
@click.pass_obj
def clear(session: SessionController):
    """Delete every history entry."""
    count = len(session.history)
    session.history.clear()
    click.echo(f"Deleted {count} history entries")


@main.command(name="export")
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="CSV file to write",
)
@click.pass_obj
def export(session: SessionController, output_path: str):
    """Export the history as CSV."""
    count = write_history_csv(session.history.records, output_path)
    click.echo(f"Wrote {count} records to {output_path}")


@main.command(name="summary")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_obj
def summary(session: SessionController, as_json: bool):
    """Summarize the stored BMI values."""
    stats = summarize(session.history.records)
    if as_json:
        click.echo(json.dumps(stats, indent=2))
        return
    click.echo(f"Records:   {stats['count']}")
    if stats["latest_bmi"] is not None:
        click.echo(f"Latest:    {stats['latest_bmi']}")
        click.echo(f"Range:     {stats['min_bmi']} - {stats['max_bmi']}")
        click.echo(f"Mean:      {stats['mean_bmi']}")
    for label, count in stats["categories"].items():
        click.echo(f"  {label:12} {count}")


@main.command(name="audit")
@click.option("-r", "--raw", "raw", is_flag=True, help="Emit JSON instead of a table")
@click.pass_obj
def audit(session: SessionController, raw: bool):
    """
    Re-derive every stored result from its measurements and report inconsistencies.
    Exits with status 1 when errors (duplicate or misordered ids) are found.
    """
    notepad = create_notepad("history")
    entries = audit_history(session.history.records, notepad)
    if raw:
        click.echo(json.dumps([entry._asdict() for entry in entries], indent=2))
    else:
        _print_audit_table(entries)
        _report_issues(notepad)
    if notepad.has_errors(include_subsections=True):
        sys.exit(1)


def _print_audit_table(entries: list[AuditEntry]) -> None:
    click.echo(f"{'RECORD':30}  {'STEP':12}  {'LEVEL':7}  MESSAGE")
    for entry in entries:
        line = f"{entry.record:30}  {entry.step:12}  {entry.level:7}  {entry.message}"
        click.echo(click.style(line, fg="red" if entry.level == "error" else "yellow"))


def _report_issues(notepad) -> None:
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in history:")
        for err in notepad.errors():
            click.echo(f"- {err}")
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in history:")
        for w in notepad.warnings():
            click.echo(f"- {w}")
    if not (notepad.has_errors(include_subsections=True) or notepad.has_warnings(include_subsections=True)):
        click.echo("History is consistent.")


@main.command(name="check-update")
@click.argument("url", required=False, default=None)
@click.option("--known", "known_fingerprint", default=None, help="fingerprint of the build currently running")
def check_update(url: typing.Optional[str], known_fingerprint: typing.Optional[str]):
    """
    Probe URL (default: BMILOG_UPDATE_URL) once for a newer build.
    """
    url = url or config.UPDATE_URL
    if not url:
        click.echo("No update URL configured.", err=True)
        sys.exit(2)
    checker = UpdateChecker(url, on_update=lambda: None, period=0, known_fingerprint=known_fingerprint)
    if checker.check_once():
        click.echo(f"Newer build available ({checker.fingerprint})")
    elif checker.last_status_code != 200:
        click.echo("Update server unreachable; skipped.")
    else:
        click.echo(f"Up to date ({checker.fingerprint})")


if __name__ == "__main__":
    main()
