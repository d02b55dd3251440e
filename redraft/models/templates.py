"""
Template models for Redraft.
"""

from typing import Optional

from pydantic import BaseModel, Field


class DocumentTemplate(BaseModel):
    """
    A kind of business document the preparation surface can generate.
    """

    template_id: str = Field(
        ...,
        description="Stable identifier, also persisted alongside the document"
    )

    name: str = Field(
        ...,
        description="Human-readable template name, used for titles and filenames"
    )

    description: str = Field(
        "",
        description="Short explanation of what the template produces"
    )

    badge: Optional[str] = Field(
        None,
        description="Category label (Legal, Business, ...)"
    )
