"""Word count and reading time for Markdown documents."""

from typing import Optional

from ..config import config
from ..models import DocumentStats


def document_stats(markdown: Optional[str], words_per_minute: Optional[int] = None) -> DocumentStats:
    """
    Count words and estimate reading time.

    Args:
        markdown: Canonical Markdown
        words_per_minute: Reading speed (defaults to config value)

    Returns:
        DocumentStats with at least one minute of reading time
    """
    rate = words_per_minute or config.words_per_minute
    words = len((markdown or "").split())
    # round half up
    minutes = int(words / rate + 0.5)
    return DocumentStats(words=words, read_minutes=max(1, minutes))
