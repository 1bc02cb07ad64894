"""
Fitness entry domain model.

This module defines the validated, immutable record for one day's
fitness measurements and its CSV line representation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fitness_csv_logger.utils.exceptions import ValidationError

CSV_HEADER = "Date,HeartRate,Steps,Calories,Sleep,Weight"

MAX_SLEEP_HOURS = 24.0


class FitnessEntry(BaseModel):
    """
    One day's fitness measurements.

    Construction is the only validation gate: constraints are checked in
    field order and the first violation raises ValidationError naming the
    field. Instances are frozen; an edit builds a new entry.
    """

    date: str = Field(description="Free-form date label (trimmed, non-blank)")
    heart_rate: int = Field(description="Heart rate in beats per minute")
    steps: int = Field(description="Steps taken")
    calories: int = Field(description="Calories burned")
    sleep_hours: float = Field(description="Hours of sleep")
    weight_kg: float = Field(description="Weight in kilograms")

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    @field_validator("date", mode="before")
    @classmethod
    def date_not_blank(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("date", "Date cannot be null or empty")
        return value

    @model_validator(mode="after")
    def check_ranges(self) -> "FitnessEntry":
        # Negated comparisons so NaN is rejected too.
        if not self.heart_rate > 0:
            raise ValidationError("heart_rate", "Heart rate must be positive")
        if not self.steps >= 0:
            raise ValidationError("steps", "Steps cannot be negative")
        if not self.calories >= 0:
            raise ValidationError("calories", "Calories cannot be negative")
        if not 0 <= self.sleep_hours <= MAX_SLEEP_HOURS:
            raise ValidationError("sleep_hours", "Sleep must be between 0 and 24 hours")
        if not self.weight_kg > 0:
            raise ValidationError("weight_kg", "Weight must be positive")
        return self

    @staticmethod
    def csv_header() -> str:
        """Get the CSV header line."""
        return CSV_HEADER

    def to_csv_line(self) -> str:
        """
        Convert entry to a CSV data line.

        Floats are written with one decimal and always use '.' as the
        decimal separator, independent of the host locale.

        Returns:
            Comma-separated line without a trailing newline.
        """
        return (
            f"{self.date},{self.heart_rate},{self.steps},{self.calories},"
            f"{self.sleep_hours:.1f},{self.weight_kg:.1f}"
        )

    def with_changes(self, **changes: Any) -> "FitnessEntry":
        """
        Build a new entry from this one with some fields replaced.

        Unlike model_copy(update=...), the result is fully re-validated.

        Raises:
            ValidationError: If the merged values violate a constraint.
        """
        values = self.model_dump()
        values.update(changes)
        return FitnessEntry(**values)

    def __str__(self) -> str:
        return (
            f"{self.date} | HR: {self.heart_rate} | Steps: {self.steps} | "
            f"Calories: {self.calories} | Sleep: {self.sleep_hours:.1f}h | "
            f"Weight: {self.weight_kg:.1f}kg"
        )
