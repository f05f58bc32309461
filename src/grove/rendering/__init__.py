"""Default rendering layer (Jinja2)."""

from grove.rendering.renderer import SiteRenderer, folder_output_parts, page_output_parts

__all__ = ["SiteRenderer", "folder_output_parts", "page_output_parts"]
