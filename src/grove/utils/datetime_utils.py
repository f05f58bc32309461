"""Date and time utilities."""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from typing import TYPE_CHECKING, Any

from dateutil import parser as dateutil_parser

from grove.utils.exceptions import (
    DateTimeParsingError,
    InvalidDateTimeInputError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_datetime_flexible(
    value: datetime | date | str | float | Any | None,
    *,
    default_timezone: tzinfo = UTC,
    parser_kwargs: Mapping[str, Any] | None = None,
) -> datetime:
    """Parse a datetime value using a flexible approach.

    Args:
        value: Datetime-like input (datetime/date/str/epoch seconds). ``None`` or
            empty strings will raise an exception.
        default_timezone: Timezone assigned to naive datetimes and used for
            normalization when a timezone is present.
        parser_kwargs: Additional keyword arguments forwarded to ``dateutil.parser``.

    Returns:
        A timezone-normalized ``datetime``.

    Raises:
        InvalidDateTimeInputError: if the input is None or an empty string.
        DateTimeParsingError: if parsing fails.
    """
    dt = _to_datetime(value, default_timezone=default_timezone, parser_kwargs=parser_kwargs)
    try:
        return normalize_timezone(dt, default_timezone=default_timezone)
    except (OverflowError, ValueError) as e:
        # Aware values at the edge of the supported range cannot be shifted.
        raise DateTimeParsingError(str(value), e) from e


def _to_datetime(
    value: Any,
    *,
    default_timezone: tzinfo = UTC,
    parser_kwargs: Mapping[str, Any] | None = None,
) -> datetime:
    """Convert a value to a datetime object without timezone normalization."""
    if value is None:
        raise InvalidDateTimeInputError("None", "Input value cannot be None")

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())

    # bool is an int subclass; a YAML ``true`` is not a timestamp.
    if isinstance(value, bool):
        raise DateTimeParsingError(str(value))
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value, tz=default_timezone)
        except (OverflowError, OSError, ValueError) as e:
            raise DateTimeParsingError(str(value), e) from e

    raw = str(value).strip()
    if not raw:
        raise InvalidDateTimeInputError(
            str(value), "Input value cannot be an empty or whitespace-only string"
        )

    try:
        return dateutil_parser.parse(raw, **(parser_kwargs or {}))
    except (TypeError, ValueError, OverflowError) as e:
        raise DateTimeParsingError(raw, e) from e


def normalize_timezone(dt: datetime, *, default_timezone: tzinfo = UTC) -> datetime:
    """Normalize a datetime to a specific timezone.

    - If the datetime is naive, it's made aware in the `default_timezone`.
    - If the datetime is aware, it's converted to the `default_timezone`.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=default_timezone)
    return dt.astimezone(default_timezone)


def is_epoch(dt: datetime) -> bool:
    """Return True for the zero timestamp, which sources use to mean 'unknown'."""
    return normalize_timezone(dt) == EPOCH


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


__all__ = ["EPOCH", "is_epoch", "normalize_timezone", "parse_datetime_flexible", "utcnow"]
