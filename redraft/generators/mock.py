"""
Mock generator for testing Redraft.

This module provides a deterministic generator that builds documents from its
inputs, so surfaces can be exercised without an AI backend.
"""

from typing import List, Optional

from ..models import DocumentTemplate, SummaryMessage
from .base import DocumentGenerator


class MockGenerator(DocumentGenerator):
    """
    Generator that returns predictable Markdown.

    Every call is recorded in ``calls`` for inspection.
    """

    def __init__(self):
        """Initialize the mock generator with an empty call log."""
        self.calls: List[dict] = []

    def generate(
        self,
        messages: List[SummaryMessage],
        template: Optional[DocumentTemplate] = None,
        custom_prompt: Optional[str] = None,
        current: Optional[str] = None,
        instruction: Optional[str] = None,
    ) -> str:
        self.calls.append({
            "messages": list(messages),
            "template": template,
            "custom_prompt": custom_prompt,
            "current": current,
            "instruction": instruction,
        })

        if current is not None and instruction:
            return f"{current.rstrip()}\n\n> Revised: {instruction}"

        title = template.name if template else "Conversation Summary"
        lines = [f"# {title}", ""]

        if custom_prompt:
            lines += [f"*{custom_prompt}*", ""]

        lines += ["## Key Points", ""]
        points = [m.content.strip().splitlines()[0] for m in messages if m.role == "user" and m.content.strip()]
        if points:
            lines += [f"- {point}" for point in points]
        else:
            lines.append("- No user messages yet")

        replies = sum(1 for m in messages if m.role == "assistant")
        lines += ["", f"The assistant replied **{replies}** times."]
        return "\n".join(lines)
