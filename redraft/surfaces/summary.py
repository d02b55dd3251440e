"""
Chat summary surface.
"""

from .base import DocumentSurface


class ChatSummarySurface(DocumentSurface):
    """
    Review and edit an AI summary of a conversation.

    The summary is restored from storage when the surface opens, and generated
    from the conversation when nothing is stored yet.
    """

    download_title = "chat-summary"

    @property
    def key_prefix(self) -> str:
        return self.config.summary_key_prefix
