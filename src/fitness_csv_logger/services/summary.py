"""
Summary service.

Computes descriptive statistics for each numeric metric of a set of entries.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pandas as pd

from fitness_csv_logger.domain.fitness_entry import FitnessEntry

logger = logging.getLogger(__name__)

METRIC_COLUMNS = ["heart_rate", "steps", "calories", "sleep_hours", "weight_kg"]


@dataclass(frozen=True)
class MetricSummary:
    """Statistics for one metric."""

    metric: str
    count: int
    mean: float
    minimum: float
    maximum: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "metric": self.metric,
            "count": self.count,
            "mean": self.mean,
            "min": self.minimum,
            "max": self.maximum,
        }


class SummaryService:
    """Service for summarizing fitness entries."""

    def summarize(self, entries: Iterable[FitnessEntry]) -> list[MetricSummary]:
        """
        Summarize each numeric metric.

        Args:
            entries: Entries to summarize.

        Returns:
            One summary per metric, in column order. Empty when there are no entries.
        """
        df = pd.DataFrame([entry.model_dump() for entry in entries])

        if df.empty:
            logger.info("No entries to summarize")
            return []

        stats = df[METRIC_COLUMNS].agg(["count", "mean", "min", "max"])
        logger.info(f"Summarized {len(df)} entries")

        return [
            MetricSummary(
                metric=column,
                count=int(stats.at["count", column]),
                mean=float(stats.at["mean", column]),
                minimum=float(stats.at["min", column]),
                maximum=float(stats.at["max", column]),
            )
            for column in METRIC_COLUMNS
        ]
