"""
Shared Markdown substitution rules.

The editor compiler and the export formatters run Markdown through the same
staged substitutions. They differ only in the inline ``style`` attributes
attached to the emitted tags, which are looked up by tag name in a style table
(an empty table produces bare tags for the editable surface).

Stage order is load-bearing: fenced code is lifted out before anything else so
that later stages never see it, and longer emphasis delimiters are matched
before shorter ones.
"""

import html
import re
from typing import List, Mapping, Optional, Tuple

Styles = Mapping[str, str]

CODE_FENCE_RE = re.compile(r"```([\s\S]*?)```")
PLACEHOLDER_RE = re.compile(r"%%CODEBLOCK(\d+)%%")
PLACEHOLDER_LINE_RE = re.compile(r"^%%CODEBLOCK\d+%%$")

HEADING_RULES = [
    (re.compile(r"^#### (.+)$", re.M), "h4"),
    (re.compile(r"^### (.+)$", re.M), "h3"),
    (re.compile(r"^## (.+)$", re.M), "h2"),
    (re.compile(r"^# (.+)$", re.M), "h1"),
]
HORIZONTAL_RULE_RE = re.compile(r"^---$", re.M)

INLINE_RULES = [
    (re.compile(r"\*\*\*(.+?)\*\*\*"), ("strong", "em")),
    (re.compile(r"\*\*(.+?)\*\*"), ("strong",)),
    (re.compile(r"\*(.+?)\*"), ("em",)),
    (re.compile(r"~~(.+?)~~"), ("del",)),
    (re.compile(r"`([^`]+)`"), ("code",)),
]

QUOTE_RE = re.compile(r"^&gt; (.+)$", re.M)
BULLET_GROUP_RE = re.compile(r"(?:^- .+\n?)+", re.M)
BULLET_MARKER_RE = re.compile(r"^- ")
NUMBERED_GROUP_RE = re.compile(r"(?:^\d+\. .+\n?)+", re.M)
NUMBERED_MARKER_RE = re.compile(r"^\d+\.\s")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

BLOCK_START_RE = re.compile(r"^<(h[1-6]|ul|ol|blockquote|hr|pre|p|div)")


def open_tag(name: str, styles: Styles, key: Optional[str] = None, attrs: str = "") -> str:
    """Build an opening tag, with the style registered under ``key`` (or ``name``)."""
    style = styles.get(key or name)
    if style:
        attrs += f' style="{style}"'
    return f"<{name}{attrs}>"


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``; quotes are left alone."""
    return html.escape(text, quote=False)


def extract_code_blocks(text: str) -> Tuple[str, List[str]]:
    """
    Lift fenced code blocks out of the text.

    Each block is replaced by a placeholder on its own line. The block content is
    trimmed and HTML-escaped, and returned in placeholder order.
    """
    blocks: List[str] = []

    def replace(match: re.Match) -> str:
        blocks.append(escape_html(match.group(1).strip()))
        return f"\n%%CODEBLOCK{len(blocks) - 1}%%\n"

    return CODE_FENCE_RE.sub(replace, text), blocks


def convert_block_markers(text: str, styles: Styles) -> str:
    for pattern, tag in HEADING_RULES:
        opening = open_tag(tag, styles)
        text = pattern.sub(lambda m, o=opening, t=tag: f"{o}{m.group(1)}</{t}>", text)
    return HORIZONTAL_RULE_RE.sub(open_tag("hr", styles), text)


def convert_inline(text: str, styles: Styles) -> str:
    for pattern, tags in INLINE_RULES:
        opening = "".join(open_tag(tag, styles) for tag in tags)
        closing = "".join(f"</{tag}>" for tag in reversed(tags))
        text = pattern.sub(lambda m, o=opening, c=closing: f"{o}{m.group(1)}{c}", text)
    return text


def convert_blockquotes(text: str, styles: Styles) -> str:
    """Wrap quoted lines and merge runs of adjacent quotes into one block."""
    opening = open_tag("blockquote", styles)
    inner = open_tag("p", styles, key="blockquote_p")
    text = QUOTE_RE.sub(lambda m: f"{opening}{inner}{m.group(1)}</p></blockquote>", text)
    return text.replace(f"</blockquote>\n{opening}", "\n")


def _list_replacer(kind: str, marker: re.Pattern, styles: Styles):
    opening = open_tag(kind, styles)
    item_opening = open_tag("li", styles)

    def replace(match: re.Match) -> str:
        lines = match.group(0).strip().split("\n")
        items = "".join(f"{item_opening}{marker.sub('', line, count=1)}</li>" for line in lines)
        return f"{opening}{items}</{kind}>\n"

    return replace


def convert_lists(text: str, styles: Styles) -> str:
    """Group contiguous bullet lines and contiguous numbered lines into lists."""
    text = BULLET_GROUP_RE.sub(_list_replacer("ul", BULLET_MARKER_RE, styles), text)
    return NUMBERED_GROUP_RE.sub(_list_replacer("ol", NUMBERED_MARKER_RE, styles), text)


def convert_links(text: str, styles: Styles) -> str:
    def replace(match: re.Match) -> str:
        # text is already escaped apart from quotes
        href = match.group(2).replace('"', "&quot;").replace("'", "&#x27;")
        opening = open_tag("a", styles, attrs=f' href="{href}"')
        return f"{opening}{match.group(1)}</a>"

    return LINK_RE.sub(replace, text)


def wrap_paragraphs(text: str, styles: Styles) -> List[str]:
    """
    Wrap every non-empty line that is not already a block in a paragraph.

    Code block placeholders count as blocks. Empty lines are dropped.
    """
    out: List[str] = []
    paragraph = open_tag("p", styles)
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if BLOCK_START_RE.match(stripped) or PLACEHOLDER_LINE_RE.match(stripped):
            out.append(stripped)
        else:
            out.append(f"{paragraph}{stripped}</p>")
    return out


def inject_code_blocks(text: str, blocks: List[str], styles: Styles) -> str:
    """Swap placeholders back for ``pre``/``code`` blocks; unknown indices stay literal."""
    pre = open_tag("pre", styles)
    code = open_tag("code", styles, key="pre_code")

    def replace(match: re.Match) -> str:
        index = int(match.group(1))
        if index >= len(blocks):
            return match.group(0)
        return f"{pre}{code}{blocks[index]}</code></pre>"

    return PLACEHOLDER_RE.sub(replace, text)


def render_blocks(markdown: str, styles: Styles) -> List[str]:
    """
    Run the full staged conversion and return one markup string per block.

    Paragraph wrapping runs while code placeholders are still in place, so
    multi-line code content is never split into paragraphs when it is injected.
    """
    text, code_blocks = extract_code_blocks(normalize_newlines(markdown))
    text = escape_html(text)
    text = convert_block_markers(text, styles)
    text = convert_inline(text, styles)
    text = convert_blockquotes(text, styles)
    text = convert_lists(text, styles)
    text = convert_links(text, styles)
    return [inject_code_blocks(line, code_blocks, styles) for line in wrap_paragraphs(text, styles)]
