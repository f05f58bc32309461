"""Folder grouping: which documents sit directly under a container."""

from __future__ import annotations

from collections.abc import Iterable

from grove.data_primitives.document import Document
from grove.utils.paths import SLUG_SEPARATOR, is_path_prefix, simplify_slug, slug_segments, strip_slashes


def normalize_container_slug(slug: str) -> str:
    return strip_slashes(simplify_slug(slug))


def is_direct_child(container_slug: str, candidate_slug: str) -> bool:
    """Whether ``candidate_slug`` is exactly one segment below ``container_slug``.

    Both slugs are expected to be normalized already. A slug is never its own
    child, and grandchildren are excluded.
    """
    if candidate_slug == container_slug:
        return False
    if not is_path_prefix(container_slug, candidate_slug):
        return False
    return len(slug_segments(candidate_slug)) == len(slug_segments(container_slug)) + 1


def direct_children(container_slug: str, documents: Iterable[Document]) -> set[Document]:
    """Documents that are direct children of the container.

    The root container (empty slug) yields every top-level document. No match
    yields an empty set.
    """
    folder = normalize_container_slug(container_slug)
    return {
        document
        for document in documents
        if is_direct_child(folder, document.canonical_slug)
    }


def direct_child_slugs(container_slug: str, slugs: Iterable[str]) -> set[str]:
    folder = normalize_container_slug(container_slug)
    return {slug for slug in slugs if is_direct_child(folder, normalize_container_slug(slug))}


def folder_slugs(documents: Iterable[Document]) -> set[str]:
    """Every container implied by the collection: the root plus each proper ancestor."""
    folders = {""}
    for document in documents:
        parts = slug_segments(document.canonical_slug)
        for depth in range(1, len(parts)):
            folders.add(SLUG_SEPARATOR.join(parts[:depth]))
    return folders
