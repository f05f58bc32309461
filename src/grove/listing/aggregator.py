"""Folder listing payloads handed to the rendering layer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from grove.constants import DateType
from grove.data_primitives.document import Document, ResolvedDates
from grove.listing.grouping import direct_children, normalize_container_slug
from grove.listing.i18n import PhraseLookup, items_under_folder
from grove.utils.paths import slug_segments

LISTING_CSS_CLASS = "popover-hint"


@dataclass(frozen=True, slots=True)
class ListingEntry:
    slug: str
    title: str
    dates: ResolvedDates | None = None

    @classmethod
    def from_document(cls, document: Document) -> ListingEntry:
        slug = document.canonical_slug
        segments = slug_segments(slug)
        fallback = segments[-1] if segments else slug
        return cls(slug=slug, title=document.title or fallback, dates=document.dates)

    def as_payload(self) -> dict[str, Any]:
        dates = None
        if self.dates is not None:
            dates = {
                "created": self.dates.created.isoformat(),
                "modified": self.dates.modified.isoformat(),
                "published": self.dates.published.isoformat(),
            }
        return {"slug": self.slug, "title": self.title, "dates": dates}


@dataclass(frozen=True, slots=True)
class FolderListing:
    """Everything a folder page needs: summary, count and ordered children."""

    container_slug: str
    summary_content: str | None
    item_count: int
    children: tuple[ListingEntry, ...]
    item_count_label: str | None = None
    css_classes: tuple[str, ...] = (LISTING_CSS_CLASS,)

    def as_payload(self) -> dict[str, Any]:
        return {
            "summary_content": self.summary_content,
            "item_count": self.item_count,
            "item_count_label": self.item_count_label,
            "css_classes": " ".join(self.css_classes),
            "children": [entry.as_payload() for entry in self.children],
        }


def listing_sort_key(entry: ListingEntry, sort_by: DateType = DateType.CREATED) -> tuple:
    """Dated entries first, newest first; then case-insensitive title order."""
    if entry.dates is not None:
        return (0, -entry.dates.get(sort_by).timestamp(), entry.title.lower(), entry.slug)
    return (1, 0.0, entry.title.lower(), entry.slug)


def sort_entries(
    entries: Iterable[ListingEntry], sort_by: DateType = DateType.CREATED
) -> list[ListingEntry]:
    return sorted(entries, key=lambda entry: listing_sort_key(entry, sort_by))


def summary_for(container: Document) -> str | None:
    """Rendered body when the container has content, its description otherwise."""
    if container.has_empty_tree():
        return container.description
    return container.tree.render()


def build_folder_listing(
    container: Document | str,
    documents: Iterable[Document],
    *,
    locale: str = "en-US",
    phrases: PhraseLookup = items_under_folder,
    show_folder_count: bool = True,
    sort_by: DateType = DateType.CREATED,
) -> FolderListing:
    """Compute the listing for ``container`` over ``documents``.

    ``container`` is either the folder's own document or, for a folder without
    an index page, its slug. The child set and its count are computed on every
    call, so a filtered ``documents`` collection is always reflected exactly.
    """
    if isinstance(container, Document):
        container_slug = container.canonical_slug
        summary = summary_for(container)
        css_classes = (LISTING_CSS_CLASS, *container.css_classes())
    else:
        container_slug = normalize_container_slug(container)
        summary = None
        css_classes = (LISTING_CSS_CLASS,)

    children = direct_children(container_slug, documents)
    entries = sort_entries((ListingEntry.from_document(child) for child in children), sort_by)
    item_count = len(entries)

    return FolderListing(
        container_slug=container_slug,
        summary_content=summary,
        item_count=item_count,
        children=tuple(entries),
        item_count_label=phrases(locale, item_count) if show_folder_count else None,
        css_classes=css_classes,
    )
