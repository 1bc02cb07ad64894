"""Custom exceptions for the fitness CSV logger."""


class FitnessLoggerError(Exception):
    """Base exception for all fitness CSV logger errors."""

    pass


class ConfigurationError(FitnessLoggerError):
    """Raised when there is a configuration error."""

    pass


class ParsingError(FitnessLoggerError):
    """Raised when a stored CSV line cannot be parsed."""

    pass


class ValidationError(FitnessLoggerError):
    """
    Raised when a fitness entry field fails validation.

    Not a ValueError subclass, so pydantic validators let it through
    unwrapped and callers see the offending field directly.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
