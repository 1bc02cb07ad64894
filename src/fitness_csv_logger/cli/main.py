"""
Command-line interface for Fitness CSV Logger.

Provides an interactive shell plus one-shot commands for listing, adding,
updating, deleting, importing and summarizing fitness entries.
"""

from typing import NoReturn

import typer

from fitness_csv_logger.cli.shell import FitnessShell
from fitness_csv_logger.domain.fitness_entry import FitnessEntry
from fitness_csv_logger.infrastructure.csv_store import CSVStore
from fitness_csv_logger.services.fitness_log import FitnessLog
from fitness_csv_logger.services.summary import SummaryService
from fitness_csv_logger.utils.exceptions import FitnessLoggerError
from fitness_csv_logger.utils.logging_config import get_logger, setup_logging
from fitness_csv_logger.utils.parameters import ParameterLoader

app = typer.Typer(help="Fitness CSV Logger - daily fitness measurements in a CSV file")

logger = get_logger(__name__)

CONFIG_OPTION = typer.Option("config/config.yaml", help="Path to configuration file")
FILE_OPTION = typer.Option(None, "--file", help="Data file (defaults to storage.default_file)")


def init_config(config_path: str = "config/config.yaml") -> ParameterLoader:
    """
    Initialize configuration and logging.

    Args:
        config_path: Path to configuration file.

    Returns:
        Parameter loader instance.
    """
    param_loader = ParameterLoader(config_path)
    setup_logging(param_loader.get_logging_config())
    return param_loader


def open_log(config_path: str, file: str | None) -> tuple[CSVStore, FitnessLog, str]:
    """
    Build the store and load the data file into a fresh log.

    Returns:
        Store, log and the data filename in use.
    """
    param_loader = init_config(config_path)
    storage_config = param_loader.get_storage_config()
    filename = file or storage_config.default_file

    store = CSVStore(storage_config)
    log = FitnessLog(store.load(filename) if store.exists(filename) else [])
    return store, log, filename


def save_log(store: CSVStore, log: FitnessLog, filename: str) -> None:
    """Save the log, exiting with an error code when the write fails."""
    if not store.save(log.entries, filename):
        typer.echo("Save failed.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved {len(log)} entries.")


def fail(message: str, error: Exception | None = None) -> NoReturn:
    """Report an error and exit with code 1."""
    logger.error(message)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1) from error


@app.command()
def shell(
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """
    Start the interactive menu.

    Loads existing data, then lets you create, read, update, delete,
    load and save entries until you choose Exit.
    """
    try:
        param_loader = init_config(config_path)
        storage_config = param_loader.get_storage_config()
        store = CSVStore(storage_config)
        FitnessShell(store, FitnessLog(), file or storage_config.default_file).run()

    except FitnessLoggerError as e:
        fail(str(e), e)


@app.command("list")
def list_entries(
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """List all entries with their numbers."""
    try:
        _, log, _ = open_log(config_path, file)
    except FitnessLoggerError as e:
        fail(str(e), e)

    if not len(log):
        typer.echo("No entries found.")
        return

    for number, entry in enumerate(log, start=1):
        typer.echo(f"{number}. {entry}")


@app.command()
def add(
    date: str = typer.Option(..., help="Date label, e.g. 2024-01-01"),
    heart_rate: int = typer.Option(..., help="Heart rate (bpm)"),
    steps: int = typer.Option(..., help="Steps taken"),
    calories: int = typer.Option(..., help="Calories burned"),
    sleep_hours: float = typer.Option(..., help="Hours of sleep (0-24)"),
    weight_kg: float = typer.Option(..., help="Weight in kilograms"),
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """Add a new entry and save the data file."""
    try:
        store, log, filename = open_log(config_path, file)
        entry = FitnessEntry(
            date=date,
            heart_rate=heart_rate,
            steps=steps,
            calories=calories,
            sleep_hours=sleep_hours,
            weight_kg=weight_kg,
        )
    except FitnessLoggerError as e:
        fail(str(e), e)

    log.add(entry)
    typer.echo(f"Entry created: {entry}")
    save_log(store, log, filename)


@app.command()
def update(
    number: int = typer.Argument(..., help="Entry number as shown by 'list'"),
    date: str | None = typer.Option(None, help="New date label"),
    heart_rate: int | None = typer.Option(None, help="New heart rate"),
    steps: int | None = typer.Option(None, help="New step count"),
    calories: int | None = typer.Option(None, help="New calories"),
    sleep_hours: float | None = typer.Option(None, help="New sleep hours"),
    weight_kg: float | None = typer.Option(None, help="New weight"),
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """Update fields of an entry and save the data file."""
    changes = {
        name: value
        for name, value in {
            "date": date,
            "heart_rate": heart_rate,
            "steps": steps,
            "calories": calories,
            "sleep_hours": sleep_hours,
            "weight_kg": weight_kg,
        }.items()
        if value is not None
    }
    if not changes:
        typer.echo("Nothing to update.")
        return

    try:
        store, log, filename = open_log(config_path, file)
        updated = log.update(number - 1, **changes)
    except IndexError as e:
        fail("Invalid entry number.", e)
    except FitnessLoggerError as e:
        fail(str(e), e)

    typer.echo(f"Entry updated: {updated}")
    save_log(store, log, filename)


@app.command()
def delete(
    number: int = typer.Argument(..., help="Entry number as shown by 'list'"),
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """Delete an entry and save the data file."""
    try:
        store, log, filename = open_log(config_path, file)
        deleted = log.remove(number - 1)
    except IndexError as e:
        fail("Invalid entry number.", e)
    except FitnessLoggerError as e:
        fail(str(e), e)

    typer.echo(f"Deleted: {deleted}")
    save_log(store, log, filename)


@app.command("import")
def import_entries(
    source: str = typer.Argument(..., help="CSV file to import entries from"),
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """Append entries from another CSV file to the data file."""
    try:
        store, log, filename = open_log(config_path, file)
    except FitnessLoggerError as e:
        fail(str(e), e)

    added = log.extend(store.load(source))
    if not added:
        typer.echo("No data loaded.")
        return

    typer.echo(f"Loaded {added} entries.")
    save_log(store, log, filename)


@app.command()
def stats(
    config_path: str = CONFIG_OPTION,
    file: str | None = FILE_OPTION,
) -> None:
    """Show count, mean, min and max for each metric."""
    try:
        _, log, _ = open_log(config_path, file)
    except FitnessLoggerError as e:
        fail(str(e), e)

    summaries = SummaryService().summarize(log)
    if not summaries:
        typer.echo("No entries found.")
        return

    typer.echo(f"{'Metric':<12} {'Count':>6} {'Mean':>10} {'Min':>10} {'Max':>10}")
    for summary in summaries:
        typer.echo(
            f"{summary.metric:<12} {summary.count:>6} {summary.mean:>10.1f} "
            f"{summary.minimum:>10.1f} {summary.maximum:>10.1f}"
        )


if __name__ == "__main__":
    app()
