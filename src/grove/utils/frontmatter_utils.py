"""Helpers for parsing YAML frontmatter from Markdown content."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def parse_frontmatter(content: str, *, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter using python-frontmatter.

    Args:
        content: Markdown content that may include frontmatter.
        source: Label used in warnings (usually the file path).

    Returns:
        Tuple of (metadata dict, body string). If parsing fails or metadata is not a
        mapping, metadata will be an empty dict and the original content is returned.

    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError) as exc:
        logger.warning("Failed to parse frontmatter in %s: %s", source, exc)
        return {}, content

    raw_metadata = parsed.metadata or {}
    if not isinstance(raw_metadata, dict):
        logger.warning(
            "Frontmatter in %s is not a mapping: %s", source, type(raw_metadata).__name__
        )
        metadata: dict[str, Any] = {}
    else:
        metadata = {str(key): value for key, value in raw_metadata.items()}

    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return metadata, body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its frontmatter.

    Raises:
        OSError: If the file cannot be read.

    """
    content = path.read_text(encoding=encoding)
    return parse_frontmatter(content, source=str(path))
