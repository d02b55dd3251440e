"""The two document surfaces built on the shared editing stack."""

from .base import DocumentSurface
from .prepare_doc import DocumentPreparationSurface, ModalStep
from .summary import ChatSummarySurface

__all__ = [
    "DocumentSurface",
    "ChatSummarySurface",
    "DocumentPreparationSurface",
    "ModalStep"
]
