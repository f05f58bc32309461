"""Folder grouping and listing."""

from grove.listing.aggregator import (
    FolderListing,
    ListingEntry,
    build_folder_listing,
    sort_entries,
)
from grove.listing.grouping import direct_child_slugs, direct_children, folder_slugs
from grove.listing.i18n import PhraseLookup, items_under_folder

__all__ = [
    "FolderListing",
    "ListingEntry",
    "PhraseLookup",
    "build_folder_listing",
    "direct_child_slugs",
    "direct_children",
    "folder_slugs",
    "items_under_folder",
    "sort_entries",
]
