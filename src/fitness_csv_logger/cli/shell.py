"""
Interactive menu for managing fitness entries.

All console interaction lives here; the log and the store are driven
through their public operations only.
"""

import typer

from fitness_csv_logger.domain.fitness_entry import FitnessEntry
from fitness_csv_logger.infrastructure.csv_store import CSVStore
from fitness_csv_logger.services.fitness_log import FitnessLog
from fitness_csv_logger.utils.exceptions import ValidationError

CREATE_ENTRY = 1
READ_ENTRIES = 2
UPDATE_ENTRY = 3
DELETE_ENTRY = 4
LOAD_FROM_FILE = 5
SAVE_TO_FILE = 6
EXIT = 7


def parse_decimal_input(text: str) -> float:
    """Parse a float typed by the user, accepting ',' or '.' as decimal mark."""
    return float(text.strip().replace(",", "."))


def _ask(label: str) -> str:
    return typer.prompt(label, default="", show_default=False).strip()


class FitnessShell:
    """
    Menu-driven shell over a fitness log.

    Loads the default file on start, then loops over the menu until the
    user picks Exit.
    """

    def __init__(self, store: CSVStore, log: FitnessLog, data_file: str) -> None:
        self.store = store
        self.log = log
        self.data_file = data_file

    def run(self) -> None:
        """Run the menu loop."""
        self.load_data()

        while True:
            self.show_menu()
            choice = self.get_menu_choice()

            if choice == EXIT:
                return

            actions = {
                CREATE_ENTRY: self.create_entry,
                READ_ENTRIES: self.read_all_entries,
                UPDATE_ENTRY: self.update_entry,
                DELETE_ENTRY: self.delete_entry,
                LOAD_FROM_FILE: self.load_from_file,
                SAVE_TO_FILE: self.save_data,
            }
            action = actions.get(choice)
            if action is None:
                typer.echo("Invalid choice! Please select 1-7.")
                continue

            action()
            _ask("\nPress Enter to continue...")

    def load_data(self) -> None:
        """Replace the log with the default file's entries when it exists."""
        if not self.store.exists(self.data_file):
            return

        loaded = self.store.load(self.data_file)
        self.log.replace_all(loaded)
        if loaded:
            typer.echo(f"Loaded {len(loaded)} entries.")

    def show_menu(self) -> None:
        typer.echo(f"\n=== Fitness Tracker ({len(self.log)} entries) ===")
        typer.echo("1. Create  2. Read  3. Update  4. Delete  5. Load  6. Save  7. Exit")

    def get_menu_choice(self) -> int:
        try:
            return int(_ask("Choice"))
        except ValueError:
            return -1

    def create_entry(self) -> None:
        try:
            entry = FitnessEntry(
                date=_ask("Date (YYYY-MM-DD)"),
                heart_rate=int(_ask("Heart rate")),
                steps=int(_ask("Steps")),
                calories=int(_ask("Calories")),
                sleep_hours=parse_decimal_input(_ask("Sleep hours")),
                weight_kg=parse_decimal_input(_ask("Weight")),
            )
        except ValidationError as e:
            typer.echo(f"Error: {e}")
            return
        except ValueError:
            typer.echo("Error: Invalid number format.")
            return

        self.log.add(entry)
        typer.echo("Entry created!")

    def read_all_entries(self) -> None:
        if not len(self.log):
            typer.echo("No entries found.")
            return

        for number, entry in enumerate(self.log, start=1):
            typer.echo(f"{number}. {entry}")

    def update_entry(self) -> None:
        """Update one entry, keeping every field left blank."""
        if not len(self.log):
            typer.echo("No entries to update.")
            return

        self.read_all_entries()

        try:
            number = int(_ask("Entry number to update"))
            if not 1 <= number <= len(self.log):
                typer.echo("Invalid entry number.")
                return

            current = self.log.get(number - 1)
            typer.echo(f"Current: {current}")
            typer.echo("Enter new values (press Enter to keep current):")

            changes: dict[str, object] = {}
            fields = [
                ("date", "Date", str),
                ("heart_rate", "Heart rate", int),
                ("steps", "Steps", int),
                ("calories", "Calories", int),
                ("sleep_hours", "Sleep", parse_decimal_input),
                ("weight_kg", "Weight", parse_decimal_input),
            ]
            for field, label, convert in fields:
                text = _ask(f"{label} ({getattr(current, field)})")
                if text:
                    changes[field] = convert(text)

            self.log.update(number - 1, **changes)
        except ValidationError as e:
            typer.echo(f"Error: {e}")
            return
        except ValueError:
            typer.echo("Error: Invalid number.")
            return

        typer.echo("Entry updated!")

    def delete_entry(self) -> None:
        typer.echo("\n=== Delete Fitness Entry ===")

        if not len(self.log):
            typer.echo("No entries to delete.")
            return

        self.read_all_entries()

        try:
            number = int(_ask(f"\nEntry number to delete (1-{len(self.log)})"))
        except ValueError:
            typer.echo("Please enter a valid number.")
            return

        if not 1 <= number <= len(self.log):
            typer.echo(f"Invalid entry number. Please select 1-{len(self.log)}.")
            return

        deleted = self.log.remove(number - 1)
        typer.echo("Entry deleted successfully!")
        typer.echo(f"Deleted: {deleted}")

    def load_from_file(self) -> None:
        """Append entries from a file chosen by the user."""
        filename = _ask("Filename (Enter for default)") or self.data_file

        loaded = self.store.load(filename)
        if loaded:
            self.log.extend(loaded)
            typer.echo(f"Loaded {len(loaded)} entries.")
        else:
            typer.echo("No data loaded.")

    def save_data(self) -> None:
        if not len(self.log):
            typer.echo("No data to save.")
            return

        if self.store.save(self.log.entries, self.data_file):
            typer.echo(f"Saved {len(self.log)} entries.")
        else:
            typer.echo("Save failed.")
