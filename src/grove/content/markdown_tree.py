"""Markdown body wrapper implementing the opaque ``ParsedTree`` interface."""

from __future__ import annotations

from dataclasses import dataclass

from markdown_it import MarkdownIt

# --- Markdown Renderer ---
_md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


@dataclass(frozen=True, slots=True)
class MarkdownTree:
    """Markdown source rendered lazily with markdown-it."""

    source: str

    def is_empty(self) -> bool:
        return not self.source.strip()

    def render(self) -> str:
        if self.is_empty():
            return ""
        return _md.render(self.source).strip()
