"""
Conversion between editable markup, canonical Markdown and export markup.

Everything in this package is pure and stateless; both document surfaces share it.
"""

from .compiler import EMPTY_MARKUP, MarkdownToMarkupCompiler, markdown_to_markup
from .export import (
    MEDIA_TYPES,
    PDF_CONTAINER_STYLE,
    ExportProfile,
    coerce_profile,
    export_filename,
    render,
    render_body,
)
from .stats import document_stats
from .walker import MarkupTreeWalker, markup_to_markdown, parse_markup

__all__ = [
    "EMPTY_MARKUP",
    "MarkdownToMarkupCompiler",
    "markdown_to_markup",
    "MarkupTreeWalker",
    "markup_to_markdown",
    "parse_markup",
    "ExportProfile",
    "coerce_profile",
    "export_filename",
    "render",
    "render_body",
    "MEDIA_TYPES",
    "PDF_CONTAINER_STYLE",
    "document_stats",
]
