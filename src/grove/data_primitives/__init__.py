"""Core data types shared by the build pipeline."""

from grove.data_primitives.document import (
    Document,
    Frontmatter,
    FrontmatterValue,
    ParsedTree,
    ResolvedDates,
)

__all__ = ["Document", "Frontmatter", "FrontmatterValue", "ParsedTree", "ResolvedDates"]
