"""
In-memory fitness log.

Owns the ordered collection of entries the user is working on. Positions
are 0-based and follow insertion/file order.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from fitness_csv_logger.domain.fitness_entry import FitnessEntry

logger = logging.getLogger(__name__)


class FitnessLog:
    """Ordered, explicitly owned collection of fitness entries."""

    def __init__(self, entries: Iterable[FitnessEntry] | None = None) -> None:
        self._entries: list[FitnessEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FitnessEntry]:
        return iter(list(self._entries))

    @property
    def entries(self) -> list[FitnessEntry]:
        """Get a copy of the current entries."""
        return list(self._entries)

    def add(self, entry: FitnessEntry) -> None:
        """Append an entry."""
        self._entries.append(entry)
        logger.debug(f"Added entry for {entry.date}")

    def get(self, index: int) -> FitnessEntry:
        """
        Get the entry at a position.

        Raises:
            IndexError: If index is out of range.
        """
        self._check_index(index)
        return self._entries[index]

    def update(self, index: int, **changes: Any) -> FitnessEntry:
        """
        Replace the entry at a position with a re-validated copy.

        Args:
            index: Position of the entry to update.
            **changes: Field values to override.

        Returns:
            The new entry.

        Raises:
            IndexError: If index is out of range.
            ValidationError: If the updated values are invalid. The log is left unchanged.
        """
        self._check_index(index)
        updated = self._entries[index].with_changes(**changes)
        self._entries[index] = updated
        logger.debug(f"Updated entry {index} ({updated.date})")
        return updated

    def remove(self, index: int) -> FitnessEntry:
        """
        Remove and return the entry at a position.

        Raises:
            IndexError: If index is out of range.
        """
        self._check_index(index)
        removed = self._entries.pop(index)
        logger.debug(f"Removed entry {index} ({removed.date})")
        return removed

    def extend(self, entries: Iterable[FitnessEntry]) -> int:
        """Append entries in order and return how many were added."""
        added = list(entries)
        self._entries.extend(added)
        return len(added)

    def replace_all(self, entries: Iterable[FitnessEntry]) -> None:
        """Discard current entries and take the given ones."""
        self._entries = list(entries)

    def _check_index(self, index: int) -> None:
        # Negative indexes are rejected, not counted from the end.
        if not 0 <= index < len(self._entries):
            raise IndexError(f"Entry index {index} out of range (0-{len(self._entries) - 1})")
