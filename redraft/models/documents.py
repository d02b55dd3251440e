"""
Document models for Redraft.

This module defines the data structures exchanged between the document surfaces,
the generation collaborator and the archive.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class SummaryMessage(BaseModel):
    """
    A single conversation message handed to the generation collaborator.
    """

    role: Literal["user", "assistant"] = Field(
        ...,
        description="Who wrote the message"
    )

    content: str = Field(
        ...,
        description="The message text"
    )


class DocumentStats(BaseModel):
    """
    Word count and estimated reading time for a document.
    """

    words: int = Field(
        0,
        description="Number of whitespace-separated words in the Markdown source"
    )

    read_minutes: int = Field(
        1,
        description="Estimated reading time in minutes, never less than one"
    )


class ArchivedDocument(BaseModel):
    """
    A prepared document kept in the archive so it can be restored later.
    """

    doc_id: str = Field(
        ...,
        description="Unique identifier of the archive entry"
    )

    template_id: str = Field(
        ...,
        description="Identifier of the template the document was prepared from"
    )

    template_name: str = Field(
        ...,
        description="Display name of the template at the time of archiving"
    )

    content: str = Field(
        "",
        description="Canonical Markdown of the document"
    )

    custom_prompt: Optional[str] = Field(
        None,
        description="Free-form instructions given for the custom template"
    )

    conversation_id: Optional[str] = Field(
        None,
        description="Conversation the document was prepared from"
    )

    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the entry was first archived"
    )

    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="When the entry content last changed"
    )

    word_count: int = Field(
        0,
        description="Word count of the content when last updated"
    )
