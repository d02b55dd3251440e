"""
Base generator interface for Redraft.

This module defines the abstract interface for the collaborator that produces
and refines documents, typically by calling an AI backend.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import DocumentTemplate, SummaryMessage


class DocumentGenerator(ABC):
    """
    Abstract base class for document generators.

    A generator returns a complete replacement Markdown document. The surfaces
    only consume that string; how it is produced is up to the implementation.
    """

    @abstractmethod
    def generate(
        self,
        messages: List[SummaryMessage],
        template: Optional[DocumentTemplate] = None,
        custom_prompt: Optional[str] = None,
        current: Optional[str] = None,
        instruction: Optional[str] = None,
    ) -> str:
        """
        Produce a document from a conversation, or refine an existing one.

        Args:
            messages: The conversation the document is based on
            template: Template to follow, for prepared documents
            custom_prompt: Free-form requirements for the custom template
            current: The current document, when refining
            instruction: Natural-language refinement request

        Returns:
            The full replacement Markdown document
        """
        pass
