"""Central location for the enums shared across the build.

Type-safe constants used instead of magic strings in configuration,
date resolution and listing code.
"""

from enum import Enum


class DateSource(str, Enum):
    """Metadata sources a document's dates can be resolved from."""

    FRONTMATTER = "frontmatter"
    GIT = "git"
    FILESYSTEM = "filesystem"


class DateType(str, Enum):
    """Resolved date fields."""

    CREATED = "created"
    MODIFIED = "modified"
    PUBLISHED = "published"


class InaccessiblePolicy(str, Enum):
    """What the build does with a document whose file cannot be stat'ed."""

    SKIP = "skip"
    FAIL = "fail"


class FileFormat(str, Enum):
    """Supported source file extensions."""

    MARKDOWN = ".md"
    MARKDOWN_LONG = ".markdown"


DEFAULT_DATE_PRIORITY: tuple[DateSource, ...] = (
    DateSource.FRONTMATTER,
    DateSource.GIT,
    DateSource.FILESYSTEM,
)

TITLE_CONTINUATION_MARKER = "..."
INDEX_SLUG_MARKER = "index"
