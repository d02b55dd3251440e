"""
Markdown → editable markup compiler.

Turns canonical Markdown into the block-level HTML injected into the live
editable surface. The result is always a sequence of block nodes, never bare
inline text, so the caller can put the cursor after the last block.
"""

import logging
from typing import Optional

from .rules import render_blocks

EMPTY_MARKUP = "<p><br></p>"


class MarkdownToMarkupCompiler:
    """
    Best-effort compiler for the supported Markdown dialect.

    Malformed or unrecognized constructs degrade to plain paragraphs holding the
    literal text; compilation never fails.
    """

    def compile(self, markdown: Optional[str]) -> str:
        """
        Compile Markdown into editable markup.

        Args:
            markdown: Canonical Markdown, possibly empty

        Returns:
            Newline-separated block markup, or a single empty paragraph for
            empty input
        """
        if not markdown or not markdown.strip():
            return EMPTY_MARKUP

        blocks = render_blocks(markdown, {})
        logging.debug(f"Compiled {len(markdown)} characters of Markdown into {len(blocks)} blocks")
        return "\n".join(blocks) or EMPTY_MARKUP


_compiler = MarkdownToMarkupCompiler()


def markdown_to_markup(markdown: Optional[str]) -> str:
    """Compile Markdown with the shared compiler instance."""
    return _compiler.compile(markdown)
