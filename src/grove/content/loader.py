"""Discovers Markdown sources and turns them into ``Document`` objects."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from grove.constants import FileFormat, InaccessiblePolicy
from grove.content.markdown_tree import MarkdownTree
from grove.data_primitives.document import Document
from grove.exceptions import ContentLoadError
from grove.utils.frontmatter_utils import parse_frontmatter_file
from grove.utils.paths import slugify_file_path
from grove.utils.text import excerpt

logger = logging.getLogger(__name__)

_SOURCE_SUFFIXES = frozenset(fmt.value for fmt in FileFormat)


def _is_ignored(relative: Path, ignore_patterns: Iterable[str]) -> bool:
    posix = relative.as_posix()
    for pattern in ignore_patterns:
        if fnmatch.fnmatch(posix, pattern):
            return True
        if any(fnmatch.fnmatch(part, pattern) for part in relative.parts):
            return True
    return False


def iter_source_files(content_dir: Path, ignore_patterns: Iterable[str] = ()) -> Iterator[Path]:
    """Yield Markdown files under ``content_dir`` in a stable order."""
    patterns = tuple(ignore_patterns)
    for path in sorted(content_dir.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in _SOURCE_SUFFIXES:
            continue
        if _is_ignored(path.relative_to(content_dir), patterns):
            logger.debug("Ignoring %s", path)
            continue
        yield path


def _text_field(metadata: dict[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _display_path(path: Path, cwd: Path | None) -> str:
    if cwd is not None:
        try:
            return path.resolve().relative_to(cwd.resolve()).as_posix()
        except ValueError:
            pass
    return str(path)


def load_document(path: Path, content_dir: Path, *, cwd: Path | None = None) -> Document:
    """Parse one source file.

    Raises:
        ContentLoadError: If the file cannot be read or decoded.

    """
    try:
        metadata, body = parse_frontmatter_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentLoadError(str(path), exc) from exc

    tree = MarkdownTree(body)
    return Document(
        raw_path=_display_path(path, cwd),
        slug=slugify_file_path(path.relative_to(content_dir)),
        frontmatter=metadata,
        tree=tree,
        title=_text_field(metadata, "title") or path.stem,
        description=_text_field(metadata, "description") or (excerpt(tree.render()) or None),
    )


def load_documents(
    content_dir: Path,
    *,
    cwd: Path | None = None,
    ignore_patterns: Iterable[str] = (),
    on_error: InaccessiblePolicy = InaccessiblePolicy.SKIP,
) -> list[Document]:
    """Load every source document.

    Documents are keyed by their canonical slug, so ``a/b.md`` and
    ``a/b/index.md`` collide. A folder index wins over a plain page; otherwise
    the first file found is kept. Unreadable files are skipped with a warning,
    or re-raised when ``on_error`` is ``fail``.

    Raises:
        ContentLoadError: If a file cannot be read and ``on_error`` is ``fail``.

    """
    by_slug: dict[str, Document] = {}

    for path in iter_source_files(content_dir, ignore_patterns):
        try:
            document = load_document(path, content_dir, cwd=cwd)
        except ContentLoadError as exc:
            if on_error is InaccessiblePolicy.FAIL:
                raise
            logger.warning("Skipping unreadable source: %s", exc)
            continue

        slug = document.canonical_slug
        existing = by_slug.get(slug)
        if existing is None:
            by_slug[slug] = document
            continue

        kept, dropped = existing, document
        if document.is_folder_index and not existing.is_folder_index:
            kept, dropped = document, existing
            by_slug[slug] = document
        logger.warning(
            "Skipping %s: slug '%s' already used by %s",
            dropped.raw_path,
            slug,
            kept.raw_path,
        )

    documents = list(by_slug.values())
    logger.info("Loaded %d documents from %s", len(documents), content_dir)
    return documents
