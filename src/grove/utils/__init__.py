"""Utility modules for grove."""

from grove.utils.datetime_utils import parse_datetime_flexible
from grove.utils.paths import (
    safe_path_join,
    simplify_slug,
    slug_segments,
    slugify_file_path,
    strip_slashes,
)
from grove.utils.text import truncate_title

__all__ = [
    "parse_datetime_flexible",
    "safe_path_join",
    "simplify_slug",
    "slug_segments",
    "slugify_file_path",
    "strip_slashes",
    "truncate_title",
]
