"""
CSV store for fitness entries.

Saves collections of entries to a header-prefixed CSV file inside the data
directory and loads them back, skipping malformed lines instead of failing.
"""

import logging
import math
import os
import re
from collections.abc import Iterable
from pathlib import Path

from fitness_csv_logger.domain.fitness_entry import FitnessEntry
from fitness_csv_logger.utils.exceptions import ParsingError, ValidationError
from fitness_csv_logger.utils.parameters import StorageConfig

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class CSVStore:
    """
    Persistence for fitness entries in the data directory.

    Writing reports failure through its return value; reading never raises
    for I/O problems and degrades to an empty or partial result.
    """

    def __init__(self, config: StorageConfig | None = None) -> None:
        """
        Initialize CSV store.

        Args:
            config: Storage configuration. Defaults are used when omitted.
        """
        self.config = config or StorageConfig()
        self.data_dir = self.config.data_dir

    def ensure_data_directory(self) -> None:
        """Create the data directory (and parents) if it does not exist."""
        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

    def resolve_path(self, filename: str) -> Path:
        """
        Resolve a filename into the data directory.

        Args:
            filename: Bare filename or one already prefixed with the data directory.

        Returns:
            Path inside the data directory.
        """
        if filename.startswith(self.data_dir + "/") or filename.startswith(self.data_dir + "\\"):
            return Path(filename)
        return Path(self.data_dir) / filename

    def save(self, entries: Iterable[FitnessEntry] | None, filename: str) -> bool:
        """
        Save entries to a CSV file, overwriting it.

        Args:
            entries: Entries to write in order. An empty collection writes a header-only file.
            filename: Target filename (data directory prefix added automatically).

        Returns:
            True if the file was written, False if an I/O error occurred.

        Raises:
            ValueError: If entries is None.
        """
        if entries is None:
            raise ValueError("Entries list cannot be None")

        lines = [FitnessEntry.csv_header()]
        lines.extend(entry.to_csv_line() for entry in entries)

        try:
            self.ensure_data_directory()
            full_path = self.resolve_path(filename)

            with open(full_path, "w", encoding=self.config.encoding, newline="") as f:
                for line in lines:
                    f.write(line + "\n")

        except (OSError, ValueError, LookupError) as e:
            logger.error(f"Save failed for file '{filename}': {e}")
            return False

        logger.info(f"Saved {len(lines) - 1} entries to {full_path}")
        return True

    def load(self, filename: str) -> list[FitnessEntry]:
        """
        Load entries from a CSV file.

        The first line is treated as the header and skipped without being
        checked. Blank lines are ignored and invalid lines are logged and
        skipped.

        Args:
            filename: CSV filename (data directory prefix added automatically).

        Returns:
            Successfully parsed entries in file order (empty on any I/O error).
        """
        full_path = self.resolve_path(filename)
        entries: list[FitnessEntry] = []

        try:
            with open(full_path, encoding=self.config.encoding) as f:
                f.readline()

                for line_number, line in enumerate(f, start=2):
                    line = line.rstrip("\r\n")
                    if not line.strip():
                        continue

                    try:
                        entries.append(self.parse_line(line))
                    except (ParsingError, ValidationError) as e:
                        logger.warning(f"Skipping invalid line {line_number} '{line}' - {e}")

        except (OSError, ValueError, LookupError) as e:
            logger.error(f"Load failed for file '{filename}': {e}")
            return []

        logger.info(f"Loaded {len(entries)} entries from {full_path}")
        return entries

    def parse_line(self, line: str) -> FitnessEntry:
        """
        Parse a single CSV data line into an entry.

        Args:
            line: CSV data line.

        Returns:
            Validated fitness entry.

        Raises:
            ParsingError: If the column count or a number format is invalid.
            ValidationError: If a parsed value violates an entry constraint.
        """
        if not line or not line.strip():
            raise ParsingError("Line cannot be empty")

        parts = line.split(",")
        expected = self.config.expected_columns
        if len(parts) != expected:
            raise ParsingError(
                f"Invalid CSV format - expected {expected} columns, got {len(parts)}"
            )

        try:
            heart_rate = self._parse_integer(parts[1])
            steps = self._parse_integer(parts[2])
            calories = self._parse_integer(parts[3])
            sleep_hours = self._parse_decimal(parts[4])
            weight_kg = self._parse_decimal(parts[5])
        except ValueError as e:
            raise ParsingError(f"Invalid number format in line: {line}") from e

        return FitnessEntry(
            date=parts[0],
            heart_rate=heart_rate,
            steps=steps,
            calories=calories,
            sleep_hours=sleep_hours,
            weight_kg=weight_kg,
        )

    def exists(self, filename: str) -> bool:
        """
        Check whether a CSV file exists in the data directory.

        Returns:
            True if the resolved path is an existing, readable file.
        """
        full_path = self.resolve_path(filename)
        return full_path.is_file() and os.access(full_path, os.R_OK)

    @staticmethod
    def _parse_integer(value: str) -> int:
        """Parse a plain signed integer (no underscores or other digit forms)."""
        text = value.strip()
        if not INTEGER_PATTERN.fullmatch(text):
            raise ValueError(f"Invalid integer: {value!r}")
        return int(text)

    @staticmethod
    def _parse_decimal(value: str) -> float:
        """
        Parse a finite decimal accepting either '.' or ',' as separator.

        Underscores, inf and nan are rejected.
        """
        text = value.strip().replace(",", ".")
        if not DECIMAL_PATTERN.fullmatch(text):
            raise ValueError(f"Invalid decimal: {value!r}")
        result = float(text)
        if not math.isfinite(result):
            raise ValueError(f"Decimal out of range: {value!r}")
        return result
