"""Low-level exceptions raised by grove utilities."""


class DateTimeParsingError(ValueError):
    """Raised when a value cannot be parsed into a datetime."""

    def __init__(self, value: str, original_exception: Exception | None = None) -> None:
        self.value = value
        self.original_exception = original_exception
        super().__init__(f"Failed to parse datetime from '{value}'")


class InvalidDateTimeInputError(ValueError):
    """Raised when the input to the datetime parser is empty or missing."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid datetime input '{value}': {reason}")


class PathTraversalError(Exception):
    """Raised when a path would escape its intended directory."""
