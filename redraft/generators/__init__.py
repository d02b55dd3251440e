"""Generation and refinement collaborators."""

from .base import DocumentGenerator
from .mock import MockGenerator

__all__ = ["DocumentGenerator", "MockGenerator"]
