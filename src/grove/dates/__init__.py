"""Document date resolution."""

from grove.dates.context import BuildContext
from grove.dates.resolver import (
    DateResolution,
    DateResolver,
    ResolutionReport,
    coerce_date,
    emit_warnings,
    merge_candidates,
    resolve_dates,
    resolve_field,
)
from grove.dates.sources import DateCandidates, DateWarning, WarningKind

__all__ = [
    "BuildContext",
    "DateCandidates",
    "DateResolution",
    "DateResolver",
    "DateWarning",
    "ResolutionReport",
    "WarningKind",
    "coerce_date",
    "emit_warnings",
    "merge_candidates",
    "resolve_dates",
    "resolve_field",
]
