"""
Document preparation surface.

Turns a conversation into a business document based on a template, keeps every
prepared document in an archive, and restores the last document per
conversation on reopen.
"""

import json
import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..conversion.stats import document_stats
from ..database.manager import DatabaseManager
from ..models import ArchivedDocument, DocumentStats, DocumentTemplate
from ..templates import TemplateRegistry, template_registry
from .base import DocumentSurface


class ModalStep(str, Enum):
    TEMPLATE = "template"
    EDITOR = "editor"


def generate_doc_id() -> str:
    """Create a unique archive entry ID."""
    return f"doc_{int(datetime.now().timestamp() * 1000)}_{uuid.uuid4().hex[:6]}"


class DocumentPreparationSurface(DocumentSurface):
    """
    Prepare, edit and archive template-based documents.
    """

    def __init__(
        self,
        *args,
        archive: Optional[DatabaseManager] = None,
        registry: Optional[TemplateRegistry] = None,
        **kwargs
    ):
        """
        Initialize the surface on the template step.

        Args:
            archive: Archive storage; shares the document store when omitted and
                the store supports archiving
            registry: Template registry (the global one by default)

        Other arguments are passed to DocumentSurface.
        """
        super().__init__(*args, **kwargs)
        if archive is None and isinstance(self.store, DatabaseManager):
            archive = self.store
        self.archive = archive
        self.registry = registry or template_registry

        self.step = ModalStep.TEMPLATE
        self.selected_template: Optional[DocumentTemplate] = None
        self.custom_prompt = ""
        self.active_doc_id: Optional[str] = None

    @property
    def key_prefix(self) -> str:
        return self.config.prepare_doc_key_prefix

    @property
    def template_storage_key(self) -> str:
        return self._scoped_key(self.config.template_key_prefix)

    @property
    def stats(self) -> DocumentStats:
        return document_stats(self.markdown, self.config.words_per_minute)

    def _title(self) -> str:
        if self.selected_template:
            return self.selected_template.name
        return self.config.default_title

    def _generation_context(self) -> Dict[str, Any]:
        return {
            "template": self.selected_template,
            "custom_prompt": self.custom_prompt or None,
        }

    # Restoring

    def _restore(self) -> bool:
        template = self._load_template()
        if template is None:
            return False
        if not self.controller.load():
            return False
        self.selected_template = template
        self.step = ModalStep.EDITOR
        return True

    def _on_nothing_stored(self) -> None:
        # documents are only generated once a template is picked
        pass

    def _load_template(self) -> Optional[DocumentTemplate]:
        if self.store is None:
            return None
        try:
            raw = self.store.load(self.template_storage_key)
            if not raw:
                return None
            data = json.loads(raw)
        except Exception as e:
            logging.warning(f"Could not load template for '{self.storage_key}': {e}")
            return None

        template_id = data.get("id", "")
        return self.registry.get_template(template_id) or DocumentTemplate(
            template_id=template_id,
            name=data.get("name") or self.config.default_title
        )

    # Persistence hooks

    def _on_commit(self, markdown: str) -> None:
        if self.selected_template is None:
            return
        if self.store is not None:
            payload = json.dumps({"id": self.selected_template.template_id, "name": self.selected_template.name})
            try:
                self.store.save(self.template_storage_key, payload)
            except Exception as e:
                logging.warning(f"Could not persist template for '{self.storage_key}': {e}")
        if self.active_doc_id and self.archive is not None:
            self._update_archive(markdown)

    def _update_archive(self, markdown: str) -> None:
        now = datetime.now()
        entry = ArchivedDocument(
            doc_id=self.active_doc_id,
            template_id=self.selected_template.template_id,
            template_name=self.selected_template.name,
            content=markdown,
            custom_prompt=self.custom_prompt or None,
            conversation_id=self.conversation_id,
            created_at=now,
            updated_at=now,
            word_count=document_stats(markdown).words
        )
        try:
            self.archive.upsert_archived(entry)
        except Exception as e:
            logging.warning(f"Could not update archived document {self.active_doc_id}: {e}")

    # Template flow

    def select_template(self, template_id: str, custom_prompt: Optional[str] = None) -> bool:
        """
        Pick a template and generate a new document from it.

        Args:
            template_id: ID of a registered template
            custom_prompt: Requirements for the custom template

        Returns:
            True if a document was generated
        """
        self._require_open()
        template = self.registry.get_template(template_id)
        if template is None:
            self.error = f"Unknown template: {template_id}"
            return False

        self.selected_template = template
        self.custom_prompt = (custom_prompt or "").strip()
        self.active_doc_id = generate_doc_id()
        self.step = ModalStep.EDITOR
        return self.generate()

    def change_template(self) -> None:
        """Drop the current document and go back to template selection."""
        controller = self._require_open()
        self.selected_template = None
        self.active_doc_id = None
        self.custom_prompt = ""
        self.error = ""
        self.step = ModalStep.TEMPLATE

        controller.enter_preview()
        controller.replace_markdown("")
        if self.store is not None:
            try:
                self.store.delete(self.storage_key)
                self.store.delete(self.template_storage_key)
            except Exception as e:
                logging.warning(f"Could not clear stored document '{self.storage_key}': {e}")

    # Archive

    def list_archived(self) -> List[ArchivedDocument]:
        if self.archive is None:
            return []
        try:
            return self.archive.list_archived()
        except Exception as e:
            logging.warning(f"Could not list archived documents: {e}")
            return []

    def restore_archived(self, doc_id: str) -> bool:
        """
        Load an archived document into the editor, in preview mode.

        Args:
            doc_id: Archive entry ID

        Returns:
            True if the entry was found and restored
        """
        controller = self._require_open()
        entry = None
        if self.archive is not None:
            try:
                entry = self.archive.get_archived(doc_id)
            except Exception as e:
                logging.warning(f"Could not read archived document {doc_id}: {e}")
        if entry is None:
            self.error = "Archived document not found"
            return False

        # live edits still belong to the entry being left
        controller.enter_preview()

        self.selected_template = self.registry.get_template(entry.template_id) or DocumentTemplate(
            template_id=entry.template_id,
            name=entry.template_name
        )
        self.custom_prompt = entry.custom_prompt or ""
        self.active_doc_id = entry.doc_id
        self.step = ModalStep.EDITOR
        controller.replace_markdown(entry.content)
        return True

    def delete_archived(self, doc_id: str) -> bool:
        if self.archive is None:
            return False
        try:
            removed = self.archive.delete_archived(doc_id)
        except Exception as e:
            logging.warning(f"Could not delete archived document {doc_id}: {e}")
            return False
        if removed and doc_id == self.active_doc_id:
            self.active_doc_id = None
        return removed
