"""HTML rendering of the document model."""

from .html import INDEX_PAGE, HtmlRenderer, page_name
from .links import SymbolLinker

__all__ = ["HtmlRenderer", "INDEX_PAGE", "SymbolLinker", "page_name"]
