"""Source document discovery and parsing."""

from grove.content.loader import iter_source_files, load_document, load_documents
from grove.content.markdown_tree import MarkdownTree

__all__ = ["MarkdownTree", "iter_source_files", "load_document", "load_documents"]
