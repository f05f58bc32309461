"""Candidate date extraction, one function per metadata source.

Each extractor returns the raw, uncoerced values a single source can supply.
Merging and coercion happen in :mod:`grove.dates.resolver`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

from grove.constants import DateSource, DateType
from grove.exceptions import (
    GitHistoryUnavailableError,
    RepositoryNotFoundError,
    SourceFileInaccessibleError,
)

if TYPE_CHECKING:
    from pathlib import Path

    from grove.dates.context import BuildContext

RawDate: TypeAlias = str | int | float | date | datetime | None

FRONTMATTER_CREATED_KEYS = ("date", "created")
FRONTMATTER_MODIFIED_KEYS = ("lastmod", "updated", "last-modified", "modified")
FRONTMATTER_PUBLISHED_KEYS = ("publishDate", "published")


class WarningKind(str, Enum):
    INVALID_DATE = "invalid_date"
    UNTRACKED = "untracked"
    NO_REPOSITORY = "no_repository"


@dataclass(frozen=True, slots=True)
class DateWarning:
    """A recoverable problem found while resolving one document's dates."""

    file_path: str
    kind: WarningKind
    message: str
    raw_value: str | None = None


@dataclass(frozen=True, slots=True)
class DateCandidates:
    """Raw values one source supplies for each date field."""

    source: DateSource
    created: RawDate = None
    modified: RawDate = None
    published: RawDate = None

    def get(self, date_type: DateType) -> RawDate:
        return getattr(self, DateType(date_type).value)


def is_empty(value: Any) -> bool:
    """Whether a raw value counts as "not provided".

    Empty and whitespace-only strings, empty lists, ``False`` and zero are all
    treated like a missing key.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, list | tuple):
        return len(value) == 0
    return False


def first_non_empty(values: Iterable[Any]) -> Any:
    """Return the first value that is not empty, or None."""
    for value in values:
        if not is_empty(value):
            return value
    return None


def frontmatter_candidates(frontmatter: Mapping[str, Any] | None) -> DateCandidates:
    """Author-declared dates. Unknown keys are ignored."""
    if not frontmatter:
        return DateCandidates(DateSource.FRONTMATTER)
    return DateCandidates(
        DateSource.FRONTMATTER,
        created=first_non_empty(frontmatter.get(key) for key in FRONTMATTER_CREATED_KEYS),
        modified=first_non_empty(frontmatter.get(key) for key in FRONTMATTER_MODIFIED_KEYS),
        published=first_non_empty(frontmatter.get(key) for key in FRONTMATTER_PUBLISHED_KEYS),
    )


def git_candidates(
    file_path: Path, display_path: str, context: BuildContext
) -> tuple[DateCandidates, list[DateWarning]]:
    """Last commit time touching the file.

    Never raises for missing history: an untracked file or a path outside any
    repository produces a warning and no value.
    """
    try:
        repository = context.repository_for(file_path)
    except RepositoryNotFoundError:
        warning = DateWarning(
            display_path,
            WarningKind.NO_REPOSITORY,
            f"{display_path} is not inside a git repository, "
            "last modification date is not available from git",
        )
        return DateCandidates(DateSource.GIT), [warning]

    try:
        modified = repository.latest_commit_time(file_path)
    except GitHistoryUnavailableError:
        warning = DateWarning(
            display_path,
            WarningKind.UNTRACKED,
            f"{display_path} isn't yet tracked by git, "
            "last modification date is not available for this file",
        )
        return DateCandidates(DateSource.GIT), [warning]

    return DateCandidates(DateSource.GIT, modified=modified), []


def filesystem_candidates(file_path: Path) -> DateCandidates:
    """Birth and last-write time from the operating system.

    Platforms without a birth time (most Linux filesystems through ``os.stat``)
    use the earlier of the inode change and modification times instead.

    Raises:
        SourceFileInaccessibleError: If the file cannot be stat'ed.

    """
    try:
        st = file_path.stat()
    except OSError as exc:
        raise SourceFileInaccessibleError(str(file_path), exc) from exc

    birth = getattr(st, "st_birthtime", None)
    if not birth:
        birth = min(st.st_ctime, st.st_mtime)

    return DateCandidates(
        DateSource.FILESYSTEM,
        created=datetime.fromtimestamp(birth, tz=UTC),
        modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
    )
