"""Slug model and path safety utilities.

Slugs are the join key of the whole build: every function here is pure and
deterministic, the same input path always yields the same slug.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

from pymdownx.slugs import slugify as _md_slugify

from grove.constants import INDEX_SLUG_MARKER, FileFormat
from grove.utils.exceptions import PathTraversalError

SLUG_SEPARATOR = "/"

_REPEATED_SEPARATORS = re.compile(r"/{2,}")

# Pre-configure a slugify instance for reuse.
# 'NFC' keeps composed Unicode letters intact, so non-Latin names stay distinct.
slugify_lower = _md_slugify(case="lower", separator="-", normalize="NFC")

_SOURCE_SUFFIXES = frozenset(fmt.value for fmt in FileFormat)


def slugify_segment(text: str) -> str:
    """Slugify a single path segment using MkDocs/Python Markdown semantics.

    Unicode word characters are kept; punctuation is dropped and spaces become
    hyphens.

    Examples:
        >>> slugify_segment("Hello World")
        'hello-world'
        >>> slugify_segment("Café à Paris")
        'café-à-paris'
        >>> slugify_segment("오늘의 메모")
        '오늘의-메모'

    """
    slug = slugify_lower(text, sep="-").strip("-")
    return slug or "untitled"


def _normalize_separators(path: str) -> str:
    path = path.replace("\\", SLUG_SEPARATOR)
    return _REPEATED_SEPARATORS.sub(SLUG_SEPARATOR, path)


def strip_slashes(slug: str) -> str:
    """Remove leading and trailing separators without touching inner structure.

    >>> strip_slashes("/notes/daily/")
    'notes/daily'
    """
    return slug.strip(SLUG_SEPARATOR)


def simplify_slug(path: str) -> str:
    """Canonicalize a slug: collapse separators, lowercase, drop a trailing ``index``.

    >>> simplify_slug("Notes//Daily/index")
    'notes/daily'
    >>> simplify_slug("index")
    ''
    """
    slug = strip_slashes(_normalize_separators(path)).lower()
    parts = slug_segments(slug)
    if parts and parts[-1] == INDEX_SLUG_MARKER:
        parts = parts[:-1]
    return SLUG_SEPARATOR.join(parts)


def slug_segments(slug: str) -> list[str]:
    """Split a slug into its path segments. The root (empty) slug has none."""
    stripped = strip_slashes(slug)
    if not stripped:
        return []
    return stripped.split(SLUG_SEPARATOR)


def is_path_prefix(prefix: str, slug: str) -> bool:
    """Return True when ``prefix`` is a whole-segment ancestor (or equal) of ``slug``."""
    prefix_parts = slug_segments(prefix)
    return slug_segments(slug)[: len(prefix_parts)] == prefix_parts


def slugify_file_path(path: str | Path) -> str:
    """Derive a document slug from its path relative to the content root.

    The source extension is removed and each segment is slugified.

    >>> slugify_file_path("Notes/My First Post.md")
    'notes/my-first-post'
    >>> slugify_file_path("Notes/index.md")
    'notes/index'
    """
    posix = PurePosixPath(_normalize_separators(str(path)))
    parts = list(posix.parts)
    if not parts:
        return ""
    if posix.suffix.lower() in _SOURCE_SUFFIXES:
        parts[-1] = posix.stem
    segments = [slugify_segment(part) for part in parts if part not in ("", SLUG_SEPARATOR, ".")]
    return strip_slashes(SLUG_SEPARATOR.join(segments))


def safe_path_join(base_dir: Path, *parts: str) -> Path:
    r"""Safely join path parts and ensure result stays within base_dir.

    Raises:
        PathTraversalError: If resulting path would escape base_dir

    Examples:
        >>> base = Path("/output")
        >>> safe_path_join(base, "notes", "index.html")
        PosixPath('/output/notes/index.html')

    """
    if any(Path(part).is_absolute() for part in parts):
        absolute_part = next(part for part in parts if Path(part).is_absolute())
        msg = f"Absolute paths not allowed: {absolute_part}"
        raise PathTraversalError(msg)

    base_resolved = base_dir.resolve()
    candidate_path = base_resolved.joinpath(*parts)

    try:
        candidate_resolved = candidate_path.resolve()
        candidate_resolved.relative_to(base_resolved)
    except (ValueError, OSError) as err:
        msg = f"Path traversal detected: joining {parts} to {base_dir} would escape base directory"
        raise PathTraversalError(msg) from err

    return candidate_resolved
