"""Text processing utilities."""

from __future__ import annotations

import re

from grove.constants import TITLE_CONTINUATION_MARKER

_WHITESPACE = re.compile(r"\s+")
_HTML_TAG = re.compile(r"<[^>]+>")


def truncate_title(title: str, max_length: int, marker: str = TITLE_CONTINUATION_MARKER) -> str:
    """Bound a title's display length.

    A title of at most ``max_length`` characters is returned unchanged; a longer
    one is cut to ``max_length`` characters and ``marker`` is appended.

    >>> truncate_title("Gardening", 20)
    'Gardening'
    >>> truncate_title("Composting for beginners", 10)
    'Composting...'
    """
    if len(title) <= max_length:
        return title
    return title[:max_length] + marker


def excerpt(text: str, max_chars: int = 160) -> str:
    """Plain-text excerpt of rendered or raw markup, cut on a word boundary."""
    plain = _WHITESPACE.sub(" ", _HTML_TAG.sub(" ", text)).strip()
    if len(plain) <= max_chars:
        return plain
    cut = plain[:max_chars].rsplit(" ", 1)[0]
    return cut.rstrip(".,;:") + TITLE_CONTINUATION_MARKER
