"""
Export formatters.

One-way Markdown → presentational markup for the file-generation collaborators:

- ``pdf``: a styled HTML fragment, wrapped in a page-width container, for an
  HTML-to-PDF renderer
- ``print``: a complete HTML page with a print stylesheet
- ``word``: a complete Word-compatible HTML document

The block and inline rules are the ones the editor compiler uses; only the
inline styles differ per profile.
"""

import html
import logging
import re
from datetime import date
from enum import Enum
from typing import Dict, Optional, Union

from .rules import render_blocks


class ExportProfile(str, Enum):
    PRINT = "print"
    PDF = "pdf"
    WORD = "word"


PDF_STYLES: Dict[str, str] = {
    "h1": "margin:28px 0 12px;font-size:22px;font-weight:700;color:#1a1a1a",
    "h2": "margin:22px 0 10px;font-size:18px;font-weight:600;color:#1a1a1a",
    "h3": "margin:18px 0 8px;font-size:16px;font-weight:600;color:#1a1a1a",
    "h4": "margin:14px 0 6px;font-size:15px;font-weight:600;color:#1a1a1a",
    "hr": "border:none;border-top:1px solid #e5e7eb;margin:20px 0",
    "code": "background:#f3f4f6;padding:2px 6px;border-radius:4px;font-size:13px;font-family:monospace",
    "pre": "background:#f3f4f6;padding:12px 16px;border-radius:6px;margin:12px 0;white-space:pre-wrap",
    "pre_code": "font-size:13px;font-family:monospace",
    "blockquote": "border-left:3px solid #d1d5db;padding-left:16px;color:#6b7280;font-style:italic;margin:12px 0",
    "blockquote_p": "margin:4px 0",
    "ul": "margin:10px 0 10px 20px;padding:0;list-style:disc",
    "ol": "margin:10px 0 10px 20px;padding:0;list-style:decimal",
    "li": "margin:4px 0;padding-left:4px",
    "a": "color:#2563eb;text-decoration:underline",
    "p": "margin:8px 0;line-height:1.7;color:#374151",
}

WORD_STYLES: Dict[str, str] = {
    "h1": "font-size:18pt;font-weight:bold;margin:24pt 0 10pt",
    "h2": "font-size:14pt;font-weight:bold;margin:18pt 0 8pt",
    "h3": "font-size:12pt;font-weight:bold;margin:14pt 0 6pt",
    "h4": "font-size:11pt;font-weight:bold;margin:12pt 0 6pt",
    "hr": "border:none;border-top:1pt solid #e5e7eb;margin:16pt 0",
    "code": "font-family:'Courier New',monospace;font-size:9pt;background:#f3f4f6;padding:1pt 3pt",
    "pre": "background:#f3f4f6;padding:6pt 8pt;margin:8pt 0",
    "pre_code": "font-family:'Courier New',monospace;font-size:9pt",
    "blockquote": "border-left:3pt solid #d1d5db;padding-left:10pt;color:#6b7280;font-style:italic;margin:10pt 0",
    "blockquote_p": "margin:3pt 0",
    "ul": "margin:8pt 0;padding-left:20pt",
    "ol": "margin:8pt 0;padding-left:20pt",
    "li": "margin:3pt 0",
    "a": "color:#2563eb;text-decoration:underline",
    "p": "margin:6pt 0",
}

PROFILE_STYLES: Dict[ExportProfile, Dict[str, str]] = {
    ExportProfile.PDF: PDF_STYLES,
    ExportProfile.PRINT: PDF_STYLES,
    ExportProfile.WORD: WORD_STYLES,
}

PDF_CONTAINER_STYLE = (
    'padding:40px 48px;max-width:800px;'
    'font-family:-apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,"Helvetica Neue",Arial,sans-serif;'
    'font-size:14px;line-height:1.7;color:#1a1a1a;background:#fff'
)

PRINT_STYLESHEET = (
    'body{font-family:-apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,Arial,sans-serif;'
    'max-width:800px;margin:0 auto;padding:40px;color:#1a1a1a;font-size:14px;line-height:1.7}'
    'h1{font-size:22px;font-weight:700}h2{font-size:18px;font-weight:600}h3{font-size:16px;font-weight:600}'
    'ul{padding-left:20px}li{margin:4px 0}'
    'blockquote{border-left:3px solid #d1d5db;padding-left:16px;color:#6b7280;font-style:italic}'
    'hr{border:none;border-top:1px solid #e5e7eb;margin:20px 0}'
    '@media print{body{padding:0}}'
)

WORD_STYLESHEET = """
  body { font-family: "Calibri", Arial, sans-serif; font-size: 11pt; line-height: 1.6; color: #1a1a1a; max-width: 800px; margin: 0 auto; padding: 40px; }
  h1 { font-size: 18pt; font-weight: bold; margin: 24pt 0 10pt; }
  h2 { font-size: 14pt; font-weight: bold; margin: 18pt 0 8pt; }
  h3 { font-size: 12pt; font-weight: bold; margin: 14pt 0 6pt; }
  p { margin: 6pt 0; }
  ul, ol { margin: 8pt 0; padding-left: 20pt; }
  li { margin: 3pt 0; }
  blockquote { border-left: 3pt solid #d1d5db; padding-left: 10pt; color: #6b7280; font-style: italic; margin: 10pt 0; }
  hr { border: none; border-top: 1pt solid #e5e7eb; margin: 16pt 0; }
  code { font-family: "Courier New", monospace; font-size: 9pt; background: #f3f4f6; padding: 1pt 3pt; }
"""

FILE_EXTENSIONS = {
    ExportProfile.PDF: "pdf",
    ExportProfile.WORD: "doc",
}

MEDIA_TYPES = {
    "pdf": "text/html;charset=utf-8",
    "doc": "application/msword;charset=utf-8",
    "md": "text/markdown;charset=utf-8",
}

_WHITESPACE_RE = re.compile(r"\s+")


def coerce_profile(profile: Union[ExportProfile, str]) -> ExportProfile:
    """Resolve a profile name, falling back to pdf for unknown names."""
    try:
        return ExportProfile(profile)
    except ValueError:
        logging.warning(f"Unknown export profile '{profile}', using pdf")
        return ExportProfile.PDF


def render_body(markdown: Optional[str], profile: Union[ExportProfile, str] = ExportProfile.PDF) -> str:
    """
    Render Markdown into a styled HTML fragment for a profile.

    Args:
        markdown: Canonical Markdown
        profile: Export profile whose inline styles to apply

    Returns:
        One block per line; empty for empty input
    """
    if not markdown or not markdown.strip():
        return ""
    styles = PROFILE_STYLES[coerce_profile(profile)]
    return "\n".join(render_blocks(markdown, styles))


def render(
    markdown: Optional[str],
    profile: Union[ExportProfile, str] = ExportProfile.PDF,
    title: Optional[str] = None,
) -> str:
    """
    Render Markdown for export.

    Args:
        markdown: Canonical Markdown
        profile: "print", "pdf" or "word"
        title: Document title used by the full-page profiles

    Returns:
        Presentational markup for the file-generation collaborator
    """
    profile = coerce_profile(profile)
    body = render_body(markdown, profile)
    safe_title = html.escape(title or "Document")

    if profile is ExportProfile.PRINT:
        return (
            f"<!DOCTYPE html><html><head><title>{safe_title}</title>\n"
            f"<style>{PRINT_STYLESHEET}</style>\n"
            f"</head><body>{body}</body></html>"
        )

    if profile is ExportProfile.WORD:
        return f"""<!DOCTYPE html>
<html xmlns:w="urn:schemas-microsoft-com:office:word" xmlns="http://www.w3.org/TR/REC-html40">
<head>
<meta charset="utf-8">
<title>{safe_title}</title>
<style>{WORD_STYLESHEET}</style>
</head>
<body>{body}</body>
</html>"""

    # single-quoted: the font stack contains double quotes
    return f"<div style='{PDF_CONTAINER_STYLE}'>{body}</div>"


def export_filename(title: str, extension: str, today: Optional[date] = None) -> str:
    """
    Build a download filename such as ``service-contract-2024-05-22.pdf``.

    Args:
        title: Document title; whitespace runs become dashes
        extension: File extension without the dot
        today: Date stamp, defaults to today
    """
    stamp = (today or date.today()).isoformat()
    slug = _WHITESPACE_RE.sub("-", title.strip()).lower() or "document"
    return f"{slug}-{stamp}.{extension}"
