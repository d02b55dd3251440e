"""
Editable markup → Markdown serializer.

Walks the node tree of the editable surface depth-first and emits the supported
Markdown dialect. Tags without a rule pass their children through, so anything
the surface produces serializes to something.
"""

import logging
import re
import warnings
from typing import Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

MarkupNode = Union[str, PageElement]

_BLANK_RUN_RE = re.compile(r"\n{3,}")


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse an editable snapshot into a node tree."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        return BeautifulSoup(markup, "html.parser")


class MarkupTreeWalker:
    """
    Serializes a rich-text node tree into Markdown.

    Underline has no Markdown form and is dropped; nested lists flatten into
    their parent item's text.
    """

    def __init__(self):
        self._rules: Dict[str, Callable[[Tag], str]] = {
            "b": self._bold,
            "strong": self._bold,
            "i": self._italic,
            "em": self._italic,
            "s": self._strikethrough,
            "del": self._strikethrough,
            "strike": self._strikethrough,
            "h1": self._heading,
            "h2": self._heading,
            "h3": self._heading,
            "h4": self._heading,
            "p": self._paragraph,
            "div": self._division,
            "br": self._line_break,
            "ul": self._unordered_list,
            "ol": self._ordered_list,
            "blockquote": self._blockquote,
            "code": self._inline_code,
            "pre": self._code_block,
            "a": self._link,
            "hr": self._horizontal_rule,
        }

    def serialize(self, markup: Optional[MarkupNode]) -> str:
        """
        Serialize markup into Markdown.

        Args:
            markup: A snapshot string or an already parsed node

        Returns:
            Markdown with blank-line runs collapsed and outer whitespace removed
        """
        if markup is None:
            return ""
        if isinstance(markup, PageElement):
            root = markup
        else:
            if not markup.strip():
                return ""
            root = parse_markup(markup)

        try:
            text = self._walk(root)
        except RecursionError:
            logging.warning("Markup nested too deeply to serialize; falling back to plain text")
            text = root.get_text() if isinstance(root, Tag) else str(root)

        return _BLANK_RUN_RE.sub("\n\n", text).strip()

    def _walk(self, node: PageElement) -> str:
        if isinstance(node, PreformattedString):
            # comments, doctypes, CDATA
            return ""
        if isinstance(node, NavigableString):
            return str(node)
        if not isinstance(node, Tag):
            return ""

        rule = self._rules.get(node.name.lower())
        if rule is None:
            return self._children(node)
        return rule(node)

    def _children(self, node: Tag) -> str:
        return "".join(self._walk(child) for child in node.children)

    def _element_children(self, node: Tag) -> List[Tag]:
        return [child for child in node.children if isinstance(child, Tag)]

    def _bold(self, node: Tag) -> str:
        return f"**{self._children(node)}**"

    def _italic(self, node: Tag) -> str:
        return f"*{self._children(node)}*"

    def _strikethrough(self, node: Tag) -> str:
        return f"~~{self._children(node)}~~"

    def _heading(self, node: Tag) -> str:
        level = int(node.name[1])
        return f"{'#' * level} {self._children(node)}\n\n"

    def _paragraph(self, node: Tag) -> str:
        return f"{self._children(node)}\n\n"

    def _division(self, node: Tag) -> str:
        # browsers wrap typed lines in divs; each one ends a line
        content = self._children(node)
        return content if content.endswith("\n") else f"{content}\n"

    def _line_break(self, node: Tag) -> str:
        return "\n"

    def _unordered_list(self, node: Tag) -> str:
        items = [f"- {self._walk(item).strip()}" for item in self._element_children(node)]
        return "\n".join(items) + "\n\n"

    def _ordered_list(self, node: Tag) -> str:
        items = [
            f"{number}. {self._walk(item).strip()}"
            for number, item in enumerate(self._element_children(node), start=1)
        ]
        return "\n".join(items) + "\n\n"

    def _blockquote(self, node: Tag) -> str:
        lines = [line for line in self._children(node).strip().split("\n") if line]
        return "\n".join(f"> {line}" for line in lines) + "\n\n"

    def _inline_code(self, node: Tag) -> str:
        parent = node.parent
        if parent is not None and parent.name and parent.name.lower() == "pre":
            return node.get_text()
        return f"`{self._children(node)}`"

    def _code_block(self, node: Tag) -> str:
        return f"```\n{node.get_text().strip()}\n```\n\n"

    def _link(self, node: Tag) -> str:
        href = node.get("href", "")
        if isinstance(href, list):
            href = " ".join(href)
        return f"[{self._children(node)}]({href})"

    def _horizontal_rule(self, node: Tag) -> str:
        return "\n---\n\n"


_walker = MarkupTreeWalker()


def markup_to_markdown(markup: Optional[MarkupNode]) -> str:
    """Serialize markup with the shared walker instance."""
    return _walker.serialize(markup)
