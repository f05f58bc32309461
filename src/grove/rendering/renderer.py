"""Jinja2 rendering of content and folder pages."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape

from grove.constants import DateType
from grove.utils.paths import safe_path_join, slug_segments

if TYPE_CHECKING:
    from grove.config.settings import SiteSettings
    from grove.data_primitives.document import Document
    from grove.listing.aggregator import FolderListing

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "page.html.jinja"
FOLDER_TEMPLATE = "folder.html.jinja"


def page_output_parts(slug: str) -> list[str]:
    """``notes/daily`` -> ``["notes", "daily.html"]``."""
    parts = slug_segments(slug)
    if not parts:
        return ["index.html"]
    return [*parts[:-1], f"{parts[-1]}.html"]


def folder_output_parts(slug: str) -> list[str]:
    """``notes`` -> ``["notes", "index.html"]``; the root folder is ``index.html``."""
    return [*slug_segments(slug), "index.html"]


class SiteRenderer:
    """Writes rendered pages below ``output_dir``."""

    def __init__(
        self,
        output_dir: Path,
        site: SiteSettings,
        *,
        folders: Collection[str] = (),
        sort_by: DateType = DateType.CREATED,
    ) -> None:
        self.output_dir = output_dir
        self.site = site
        self.folders = frozenset(folders)
        self.sort_by = sort_by
        self.env = Environment(
            loader=PackageLoader("grove", "rendering/templates"),
            autoescape=select_autoescape(["html", "jinja"]),
            keep_trailing_newline=True,
        )
        self.env.globals.update(site=site, href=self.href, root_href=self.href(""))

    def href(self, slug: str) -> str:
        base = (self.site.base_url or "").rstrip("/")
        if slug in self.folders or not slug:
            path = "/".join(folder_output_parts(slug)[:-1])
            return f"{base}/{path}/" if path else f"{base}/"
        return f"{base}/" + "/".join(page_output_parts(slug))

    def _write(self, parts: list[str], html: str) -> Path:
        target = safe_path_join(self.output_dir, *parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        logger.debug("Wrote %s", target)
        return target

    def render_page(self, document: Document) -> Path:
        template = self.env.get_template(PAGE_TEMPLATE)
        html = template.render(
            page_title=document.title or document.canonical_slug,
            css_classes=" ".join(["popover-hint", *document.css_classes()]),
            dates=document.dates,
            body=document.tree.render() if document.tree is not None else "",
        )
        return self._write(page_output_parts(document.canonical_slug), html)

    def render_folder(self, listing: FolderListing, *, title: str | None = None) -> Path:
        template = self.env.get_template(FOLDER_TEMPLATE)
        parts = slug_segments(listing.container_slug)
        html = template.render(
            page_title=title or (parts[-1] if parts else self.site.title),
            listing=listing,
            sort_by=self.sort_by,
        )
        return self._write(folder_output_parts(listing.container_slug), html)
