"""Document primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable

from grove.constants import INDEX_SLUG_MARKER, DateType
from grove.utils.paths import simplify_slug, slug_segments, strip_slashes

# Accepted shapes of author-declared metadata. Other YAML values are preserved
# in the mapping but ignored by the date and listing code.
FrontmatterValue: TypeAlias = str | int | float | bool | date | datetime | list[str] | None
Frontmatter: TypeAlias = dict[str, FrontmatterValue]


@runtime_checkable
class ParsedTree(Protocol):
    """Parsed document body, opaque apart from emptiness and rendering."""

    def is_empty(self) -> bool: ...

    def render(self) -> str: ...


@dataclass(frozen=True, slots=True)
class ResolvedDates:
    """Authoritative dates of a document. Always timezone-aware."""

    created: datetime
    modified: datetime
    published: datetime

    def get(self, date_type: DateType) -> datetime:
        return getattr(self, DateType(date_type).value)


@dataclass(eq=False)
class Document:
    """One source content unit.

    Documents compare and hash by identity; ``slug`` is the join key used by
    grouping and listing code.
    """

    raw_path: str
    slug: str
    frontmatter: Frontmatter = field(default_factory=dict)
    tree: ParsedTree | None = None
    title: str | None = None
    description: str | None = None
    dates: ResolvedDates | None = None

    @property
    def canonical_slug(self) -> str:
        """Slug with boundary separators and a trailing ``index`` removed."""
        return strip_slashes(simplify_slug(self.slug))

    @property
    def is_folder_index(self) -> bool:
        return slug_segments(self.slug.lower())[-1:] == [INDEX_SLUG_MARKER]

    def resolve_path(self, cwd: Path) -> Path:
        """Absolute path of the source file, relative paths taken from ``cwd``."""
        path = Path(self.raw_path)
        return path if path.is_absolute() else cwd / path

    def css_classes(self) -> list[str]:
        classes = self.frontmatter.get("cssclasses")
        if isinstance(classes, str):
            return classes.split()
        if isinstance(classes, list):
            return [str(item) for item in classes if item]
        return []

    def has_empty_tree(self) -> bool:
        return self.tree is None or self.tree.is_empty()
