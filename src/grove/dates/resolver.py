"""Created/modified/published date resolution.

For every document, candidate values are collected from the configured sources
in priority order and folded field by field: the first non-empty value wins,
so a lower-priority source only fills gaps. Values are then coerced to aware
datetimes; anything unparseable (or the zero timestamp) becomes "now" and
produces a warning record.

``resolve_dates`` is pure: it returns the warnings instead of logging them.
``DateResolver`` is the per-build driver that runs the blocking lookups in
worker threads, emits the warnings and attaches the result to each document.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from grove.constants import DateSource, DateType
from grove.data_primitives.document import ResolvedDates
from grove.dates.sources import (
    DateCandidates,
    DateWarning,
    RawDate,
    WarningKind,
    filesystem_candidates,
    first_non_empty,
    frontmatter_candidates,
    git_candidates,
    is_empty,
)
from grove.exceptions import SourceFileInaccessibleError
from grove.utils.datetime_utils import is_epoch, parse_datetime_flexible
from grove.utils.exceptions import DateTimeParsingError, InvalidDateTimeInputError
from grove.utils.text import truncate_title

if TYPE_CHECKING:
    from grove.config.settings import DatesSettings
    from grove.data_primitives.document import Document
    from grove.dates.context import BuildContext

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS_HINT = "Supported formats: ISO 8601 dates and datetimes, or epoch seconds"


@dataclass(frozen=True, slots=True)
class DateResolution:
    """Resolved dates plus the recoverable problems met along the way."""

    dates: ResolvedDates
    warnings: tuple[DateWarning, ...] = ()


@dataclass
class ResolutionReport:
    """Outcome of resolving a whole collection."""

    resolved: list[Document] = field(default_factory=list)
    failed: list[tuple[Document, SourceFileInaccessibleError]] = field(default_factory=list)


def resolve_field(candidates: Iterable[DateCandidates], date_type: DateType) -> RawDate:
    """First non-empty value for one field, candidates taken in priority order."""
    return first_non_empty(candidate.get(date_type) for candidate in candidates)


def merge_candidates(candidates: Sequence[DateCandidates]) -> dict[DateType, RawDate]:
    """Fold every field independently over the priority-ordered candidates."""
    return {date_type: resolve_field(candidates, date_type) for date_type in DateType}


def coerce_date(
    file_path: str, value: RawDate, *, now: datetime
) -> tuple[datetime, DateWarning | None]:
    """Coerce a raw candidate into an aware datetime.

    Missing values become ``now`` silently. Values that fail to parse, or that
    parse to the epoch, become ``now`` with a warning naming the file.
    """
    if is_empty(value):
        return now, None

    try:
        parsed = parse_datetime_flexible(value)
    except (DateTimeParsingError, InvalidDateTimeInputError):
        parsed = None

    if parsed is None or is_epoch(parsed):
        warning = DateWarning(
            file_path,
            WarningKind.INVALID_DATE,
            f'found invalid date "{value}" in `{file_path}`. {SUPPORTED_FORMATS_HINT}',
            raw_value=str(value),
        )
        return now, warning
    return parsed, None


def resolve_dates(
    file_path: str, candidates: Sequence[DateCandidates], *, now: datetime
) -> DateResolution:
    """Merge priority-ordered candidates into one authoritative record.

    ``published`` uses its own sources when any supplies it, and otherwise
    takes the resolved ``created`` value.
    """
    merged = merge_candidates(candidates)
    warnings: list[DateWarning] = []

    def _coerce(date_type: DateType) -> datetime:
        value, warning = coerce_date(file_path, merged[date_type], now=now)
        if warning is not None:
            warnings.append(warning)
        return value

    created = _coerce(DateType.CREATED)
    modified = _coerce(DateType.MODIFIED)
    if is_empty(merged[DateType.PUBLISHED]):
        published = created
    else:
        published = _coerce(DateType.PUBLISHED)

    return DateResolution(
        ResolvedDates(created=created, modified=modified, published=published),
        tuple(warnings),
    )


def collect_candidates(
    document: Document, priority: Sequence[DateSource], context: BuildContext
) -> tuple[list[DateCandidates], list[DateWarning]]:
    """Query each source in priority order. Blocking (stat and git subprocess).

    Git is only asked when no higher-priority source has supplied ``modified``,
    the one field it can provide.

    Raises:
        SourceFileInaccessibleError: If the filesystem source is configured and
            the file cannot be stat'ed.

    """
    file_path = document.resolve_path(context.cwd)
    candidates: list[DateCandidates] = []
    warnings: list[DateWarning] = []

    for source in priority:
        if source is DateSource.FRONTMATTER:
            candidates.append(frontmatter_candidates(document.frontmatter))
        elif source is DateSource.FILESYSTEM:
            candidates.append(filesystem_candidates(file_path))
        elif source is DateSource.GIT:
            if not is_empty(resolve_field(candidates, DateType.MODIFIED)):
                continue
            git_result, git_warnings = git_candidates(file_path, document.raw_path, context)
            candidates.append(git_result)
            warnings.extend(git_warnings)

    return candidates, warnings


def emit_warnings(warnings: Iterable[DateWarning]) -> None:
    for warning in warnings:
        logger.warning("%s", warning.message)


class DateResolver:
    """Resolves dates (and bounds titles) for the documents of one build."""

    def __init__(self, settings: DatesSettings, context: BuildContext) -> None:
        self.settings = settings
        self.context = context

    def resolve(self, document: Document) -> DateResolution:
        """Collect and merge candidates for one document without touching it."""
        candidates, source_warnings = collect_candidates(
            document, self.settings.priority, self.context
        )
        resolution = resolve_dates(document.raw_path, candidates, now=self.context.now())
        return DateResolution(resolution.dates, (*source_warnings, *resolution.warnings))

    def apply_title_limit(self, document: Document) -> None:
        max_length = self.settings.max_title_length
        if max_length is not None and document.title:
            document.title = truncate_title(document.title, max_length)

    async def resolve_document(self, document: Document) -> Document:
        """Populate ``document.dates`` once; an already-dated document is left alone.

        Raises:
            SourceFileInaccessibleError: If the file's metadata cannot be read.

        """
        if self.settings.enabled and document.dates is None:
            resolution = await asyncio.to_thread(self.resolve, document)
            emit_warnings(resolution.warnings)
            document.dates = resolution.dates
        self.apply_title_limit(document)
        return document

    async def resolve_all(self, documents: Iterable[Document]) -> ResolutionReport:
        """Resolve every document concurrently and wait for all of them.

        Inaccessible files are collected in the report rather than raised so
        the caller can apply its own policy.
        """
        semaphore = asyncio.Semaphore(self.settings.concurrency)
        report = ResolutionReport()

        async def _one(document: Document) -> None:
            async with semaphore:
                try:
                    await self.resolve_document(document)
                except SourceFileInaccessibleError as exc:
                    report.failed.append((document, exc))
                    return
            report.resolved.append(document)

        await asyncio.gather(*(_one(document) for document in documents))
        report.resolved.sort(key=lambda document: document.slug)
        return report
