"""Full site build: load, date, group, render.

Grouping and rendering only start once every document has finished date
resolution, since listings sort and count over the complete, dated collection.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from grove.config.settings import GroveConfig
from grove.constants import InaccessiblePolicy
from grove.content.loader import load_documents
from grove.data_primitives.document import Document
from grove.dates.context import BuildContext
from grove.dates.resolver import DateResolver
from grove.listing.aggregator import build_folder_listing
from grove.listing.grouping import folder_slugs
from grove.listing.i18n import PhraseLookup, items_under_folder
from grove.rendering.renderer import SiteRenderer

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    documents: list[Document] = field(default_factory=list)
    pages_written: int = 0
    folders_written: int = 0
    skipped: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0


def _containers(documents: list[Document]) -> tuple[set[str], dict[str, Document]]:
    """Folder slugs to render, and the document acting as each folder's index."""
    folders = folder_slugs(documents)
    folders.update(document.canonical_slug for document in documents if document.is_folder_index)
    # Canonical slugs are unique after loading.
    index_documents = {
        document.canonical_slug: document
        for document in documents
        if document.canonical_slug in folders
    }
    return folders, index_documents


async def resolve_collection(
    documents: list[Document], config: GroveConfig, context: BuildContext
) -> tuple[list[Document], list[str]]:
    """Date every document, applying the inaccessible-file policy.

    Raises:
        SourceFileInaccessibleError: If a file cannot be stat'ed and the policy is ``fail``.

    """
    resolver = DateResolver(config.dates, context)
    report = await resolver.resolve_all(documents)

    skipped: list[str] = []
    for document, error in report.failed:
        if config.build.on_inaccessible is InaccessiblePolicy.FAIL:
            raise error
        logger.warning("Skipping %s: %s", document.raw_path, error)
        skipped.append(document.raw_path)
    return report.resolved, skipped


async def run_build_async(
    config: GroveConfig,
    site_root: Path,
    *,
    phrases: PhraseLookup = items_under_folder,
) -> BuildResult:
    started = time.perf_counter()
    content_dir = site_root / config.paths.content_dir
    output_dir = site_root / config.paths.output_dir

    documents = load_documents(
        content_dir,
        cwd=site_root,
        ignore_patterns=config.build.ignore_patterns,
        on_error=config.build.on_inaccessible,
    )
    context = BuildContext(cwd=site_root, git_timeout=config.dates.git_timeout)
    documents, skipped = await resolve_collection(documents, config, context)

    folders, index_documents = _containers(documents)
    renderer = SiteRenderer(
        output_dir, config.site, folders=folders, sort_by=config.listing.sort_by
    )

    result = BuildResult(documents=documents, skipped=skipped)
    for document in documents:
        if document.canonical_slug in index_documents:
            continue
        renderer.render_page(document)
        result.pages_written += 1

    for folder in sorted(folders):
        container = index_documents.get(folder)
        listing = build_folder_listing(
            container if container is not None else folder,
            documents,
            locale=config.site.locale,
            phrases=phrases,
            show_folder_count=config.listing.show_folder_count,
            sort_by=config.listing.sort_by,
        )
        renderer.render_folder(listing, title=container.title if container else None)
        result.folders_written += 1

    result.elapsed_seconds = time.perf_counter() - started
    logger.info(
        "Built %d pages and %d folder listings into %s",
        result.pages_written,
        result.folders_written,
        output_dir,
    )
    return result


def run_build(
    config: GroveConfig, site_root: Path, *, phrases: PhraseLookup = items_under_folder
) -> BuildResult:
    return asyncio.run(run_build_async(config, site_root, phrases=phrases))
