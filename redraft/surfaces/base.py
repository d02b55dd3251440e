"""
Document surface base class.

A surface is one reviewable document attached to a conversation: it owns its own
sync controller, history and storage key, and exposes the actions a user can
take on the document (generate, refine, copy, download, print).
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..config import ConfigManager, config
from ..conversion.export import (
    FILE_EXTENSIONS,
    MEDIA_TYPES,
    ExportProfile,
    coerce_profile,
    export_filename,
    render,
)
from ..database.store import DocumentStore
from ..editing.surface import EditableSurface, MarkupSurface
from ..editing.sync import DocumentSyncController, ViewMode
from ..generators.base import DocumentGenerator
from ..models import SummaryMessage

Clipboard = Callable[[str], None]
ArtifactWriter = Callable[[str, str, str], None]


class DocumentSurface:
    """
    Shared behaviour of the chat summary and document preparation surfaces.
    """

    #: Title used in download filenames
    download_title = "document"

    def __init__(
        self,
        conversation_id: Optional[str] = None,
        messages: Optional[Iterable[Union[SummaryMessage, Dict[str, Any]]]] = None,
        store: Optional[DocumentStore] = None,
        generator: Optional[DocumentGenerator] = None,
        clipboard: Optional[Clipboard] = None,
        artifact_writer: Optional[ArtifactWriter] = None,
        editable: Optional[EditableSurface] = None,
        scheduler: Optional[Any] = None,
        config_manager: Optional[ConfigManager] = None,
    ):
        """
        Initialize a closed surface.

        Args:
            conversation_id: Conversation the document belongs to
            messages: Conversation messages handed to the generator
            store: Persistence collaborator
            generator: Generation/refinement collaborator
            clipboard: Callable writing text to the clipboard
            artifact_writer: Callable taking filename, content and media type
            editable: The live editable region (in-memory by default)
            scheduler: call_later provider for the autosave timer
            config_manager: Configuration (the global one by default)
        """
        self.config = config_manager or config
        self.conversation_id = conversation_id
        self.messages: List[SummaryMessage] = [
            m if isinstance(m, SummaryMessage) else SummaryMessage.model_validate(m)
            for m in (messages or [])
        ]
        self.store = store
        self.generator = generator
        self.clipboard = clipboard
        self.artifact_writer = artifact_writer
        self.editable = editable or MarkupSurface()
        self.scheduler = scheduler

        self.controller: Optional[DocumentSyncController] = None
        self.is_open = False
        self.error = ""
        self.refinement_input = ""

    # Keys and state

    @property
    def key_prefix(self) -> str:
        return "document"

    def _scoped_key(self, prefix: str) -> str:
        return f"{prefix}-{self.conversation_id or self.config.default_storage_key}"

    @property
    def storage_key(self) -> str:
        """Storage key of this surface's canonical Markdown."""
        return self._scoped_key(self.key_prefix)

    @property
    def markdown(self) -> str:
        return self.controller.markdown if self.controller else ""

    @property
    def view_mode(self) -> ViewMode:
        if not self.is_open or self.controller is None:
            return ViewMode.PREVIEW
        return self.controller.mode

    def _require_open(self) -> DocumentSyncController:
        if not self.is_open or self.controller is None:
            raise RuntimeError("Surface is not open")
        return self.controller

    def _report(self, message: str, error: Exception) -> None:
        logging.error(f"{message}: {error}")
        self.error = message

    # Lifecycle

    def open(self) -> None:
        """
        Open the surface with a fresh controller.

        A stored document is restored if there is one; otherwise a new one is
        generated when the conversation has messages.
        """
        if self.is_open:
            return
        self.controller = DocumentSyncController(
            surface=self.editable,
            store=self.store,
            storage_key=self.storage_key,
            scheduler=self.scheduler,
            autosave_delay=self.config.autosave_delay,
            history_capacity=self.config.history_capacity,
        )
        self.controller.add_listener(self._on_commit)
        self.is_open = True
        self.error = ""

        if not self._restore():
            self._on_nothing_stored()

    def _restore(self) -> bool:
        return self.controller.load()

    def _on_nothing_stored(self) -> None:
        if self.messages:
            self.generate()

    def _on_commit(self, markdown: str) -> None:
        """Hook run after every change of canonical Markdown."""

    def close(self) -> None:
        """Commit any live edits, stop timers and reset transient UI state."""
        if not self.is_open:
            return
        self.controller.close()
        self.is_open = False
        self.refinement_input = ""
        self.error = ""

    # Mode switching and editing

    def toggle_mode(self) -> ViewMode:
        return self._require_open().toggle()

    def switch_to_edit(self) -> None:
        self._require_open().enter_edit()

    def switch_to_preview(self) -> None:
        self._require_open().enter_preview()

    def handle_input(self) -> None:
        self._require_open().handle_input()

    def exec_command(self, command: Callable[[EditableSurface], None]) -> None:
        self._require_open().exec_command(command)

    def undo(self) -> bool:
        return self._require_open().undo()

    def redo(self) -> bool:
        return self._require_open().redo()

    # Generation

    def _generation_context(self) -> Dict[str, Any]:
        return {}

    def generate(self) -> bool:
        """
        Generate a new document and replace the current one with it.

        Returns:
            True on success; on failure ``error`` is set and the document is kept
        """
        controller = self._require_open()
        if self.generator is None:
            return False
        self.error = ""
        try:
            document = self.generator.generate(self.messages, **self._generation_context())
        except Exception as e:
            self._report("Failed to generate document", e)
            return False
        controller.replace_markdown(document)
        logging.info(f"Generated document for '{self.storage_key}' ({len(document)} characters)")
        return True

    def refine(self, instruction: Optional[str] = None) -> bool:
        """
        Ask the generator to rework the current document.

        Args:
            instruction: Refinement request (``refinement_input`` when omitted)

        Returns:
            True on success; blank instructions are ignored
        """
        controller = self._require_open()
        request = (self.refinement_input if instruction is None else instruction).strip()
        if not request or self.generator is None:
            return False
        self.error = ""
        current = controller.latest_markdown()
        try:
            document = self.generator.generate(
                self.messages,
                current=current,
                instruction=request,
                **self._generation_context()
            )
        except Exception as e:
            self._report("Failed to refine document", e)
            return False
        controller.replace_markdown(document)
        self.refinement_input = ""
        return True

    # Export

    def copy(self) -> bool:
        """
        Copy the latest Markdown to the clipboard.

        Returns:
            True on success; on failure ``error`` is set
        """
        controller = self._require_open()
        markdown = controller.latest_markdown()
        if self.clipboard is None:
            self.error = "Clipboard is not available"
            return False
        try:
            self.clipboard(markdown)
        except Exception as e:
            self._report("Failed to copy to clipboard", e)
            return False
        return True

    def _title(self) -> str:
        return self.download_title

    def download(self, profile: Union[ExportProfile, str] = ExportProfile.PDF) -> bool:
        """
        Render the latest Markdown and hand it to the artifact writer.

        A failed PDF falls back to a Markdown download. Canonical Markdown is
        kept whatever happens, so the user can retry.

        Args:
            profile: "pdf" or "word"; unknown names download as pdf

        Returns:
            True if the requested artifact was written
        """
        controller = self._require_open()
        markdown = controller.latest_markdown()
        profile = coerce_profile(profile)
        if profile is ExportProfile.PRINT:
            logging.warning("Print profile requested as a download; use print_document()")
            self.error = "Print output cannot be downloaded"
            return False

        self.error = ""
        extension = FILE_EXTENSIONS[profile]
        filename = export_filename(self._title(), extension)
        try:
            if self.artifact_writer is None:
                raise RuntimeError("No artifact writer configured")
            content = render(markdown, profile, title=self._title())
            self.artifact_writer(filename, content, MEDIA_TYPES[extension])
            return True
        except Exception as e:
            if profile is not ExportProfile.PDF:
                self._report(f"Failed to generate {profile.value} document", e)
                return False
            self._report("Failed to generate PDF. Downloading markdown instead.", e)

        try:
            self.artifact_writer(export_filename(self._title(), "md"), markdown, MEDIA_TYPES["md"])
        except Exception as e:
            self._report("Failed to download document", e)
        return False

    def print_document(self) -> str:
        """Render the latest Markdown as a printable page."""
        controller = self._require_open()
        return render(controller.latest_markdown(), ExportProfile.PRINT, title=self._title())
