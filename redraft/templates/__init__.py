"""Document templates for the preparation surface."""

from .registry import TemplateRegistry, template_registry

__all__ = ["TemplateRegistry", "template_registry"]
