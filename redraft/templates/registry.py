"""
Template Registry for Redraft.

This module defines the registry of document templates offered by the document
preparation surface. New templates are added by registering them here or at
runtime through the registry instance.
"""

from typing import Dict, List, Optional

from ..models import DocumentTemplate


class TemplateRegistry:
    """
    Registry of all available document templates.
    """

    def __init__(self):
        """Initialize the template registry with default templates."""
        self._templates: Dict[str, DocumentTemplate] = {}
        self._register_default_templates()

    def _register_default_templates(self):
        """Register the built-in templates."""

        self.register_template(DocumentTemplate(
            template_id="nda",
            name="Non-Disclosure Agreement",
            description="Mutual or one-way confidentiality agreement between parties",
            badge="Legal"
        ))

        self.register_template(DocumentTemplate(
            template_id="contract",
            name="Service Contract",
            description="Terms for services rendered, payment and deliverables",
            badge="Legal"
        ))

        self.register_template(DocumentTemplate(
            template_id="proposal",
            name="Business Proposal",
            description="Problem, proposed solution, pricing and timeline",
            badge="Business"
        ))

        self.register_template(DocumentTemplate(
            template_id="report",
            name="Report",
            description="Structured findings with summary, analysis and recommendations",
            badge="Business"
        ))

        self.register_template(DocumentTemplate(
            template_id="minutes",
            name="Meeting Minutes",
            description="Attendees, decisions and action items from a meeting",
            badge="Meetings"
        ))

        self.register_template(DocumentTemplate(
            template_id="email",
            name="Professional Email",
            description="A clear, courteous email ready to send",
            badge="Communication"
        ))

        self.register_template(DocumentTemplate(
            template_id="legal",
            name="Legal Brief",
            description="Facts, issues, arguments and conclusion",
            badge="Legal"
        ))

        self.register_template(DocumentTemplate(
            template_id="terms-of-service",
            name="Terms of Service",
            description="Rules and obligations for users of a product or service",
            badge="Legal"
        ))

        self.register_template(DocumentTemplate(
            template_id="sow",
            name="Statement of Work",
            description="Scope, milestones, deliverables and acceptance criteria",
            badge="Projects"
        ))

        self.register_template(DocumentTemplate(
            template_id="custom",
            name="Custom Document",
            description="Describe the document you need in your own words",
            badge="Custom"
        ))

    def register_template(self, template: DocumentTemplate) -> None:
        """
        Register a new template, replacing any template with the same ID.

        Args:
            template: The template to register
        """
        self._templates[template.template_id] = template

    def get_template(self, template_id: str) -> Optional[DocumentTemplate]:
        """
        Get a template by ID.

        Args:
            template_id: The template ID

        Returns:
            The template, or None if not found
        """
        return self._templates.get(template_id)

    def list_templates(self) -> List[DocumentTemplate]:
        """
        Get all registered templates in registration order.

        Returns:
            List of templates
        """
        return list(self._templates.values())

    def get_templates_by_badge(self, badge: str) -> List[DocumentTemplate]:
        """
        Get templates in a category.

        Args:
            badge: Category label

        Returns:
            List of templates carrying the badge
        """
        return [t for t in self._templates.values() if t.badge == badge]


# Global template registry instance
template_registry = TemplateRegistry()
