"""
Unit tests for core Redraft components.

Tests configuration management, data models and the template registry.
"""

import logging
import os
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from redraft.config import ConfigManager, get_config, setup_logging
from redraft.models import ArchivedDocument, DocumentStats, DocumentTemplate, SummaryMessage
from redraft.templates import TemplateRegistry


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.history_capacity, 100)
        self.assertEqual(config.autosave_delay, 1.5)
        self.assertEqual(config.database_filename, "redraft.db")
        self.assertEqual(config.summary_key_prefix, "summary")
        self.assertEqual(config.prepare_doc_key_prefix, "prepare-doc")
        self.assertEqual(config.template_key_prefix, "prepare-doc-template")
        self.assertEqual(config.words_per_minute, 200)

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
editing:
  history_capacity: 20
  autosave_delay: 0.5

storage:
  summary_prefix: "chat-summary"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.history_capacity, 20)
        self.assertEqual(config.autosave_delay, 0.5)
        self.assertEqual(config.summary_key_prefix, "chat-summary")
        # Keys missing from the file keep their defaults
        self.assertEqual(config.prepare_doc_key_prefix, "prepare-doc")
        self.assertEqual(config.get("documents.default_title"), "Document")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("editing.history_capacity"), 100)
        self.assertEqual(config.get("storage.default_key"), "default")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertEqual(config.get_section("documents")["words_per_minute"], 200)
        self.assertEqual(config.get_section("missing"), {})

    def test_invalid_file_uses_defaults(self):
        """Test that a malformed file does not break configuration."""
        with open(self.config_path, 'w') as f:
            f.write("editing: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.history_capacity, 100)

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("editing:\n  autosave_delay: 2")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.autosave_delay, 2.0)

        with open(self.config_path, 'w') as f:
            f.write("editing:\n  autosave_delay: 3")

        config.reload()
        self.assertEqual(config.autosave_delay, 3.0)

    def test_setup_logging_uses_config(self):
        """Test logging level and handlers come from the logging section."""
        with open(self.config_path, 'w') as f:
            f.write("logging:\n  level: 'debug'")

        config = ConfigManager(str(self.config_path))
        with patch("redraft.config.logging.basicConfig") as basic_config:
            setup_logging(config)

        kwargs = basic_config.call_args.kwargs
        self.assertEqual(kwargs["level"], logging.DEBUG)
        self.assertEqual(len(kwargs["handlers"]), 1)

    def test_global_config(self):
        """Test the global configuration accessor."""
        self.assertIsInstance(get_config(), ConfigManager)


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_summary_message_creation(self):
        """Test SummaryMessage model creation and validation."""
        message = SummaryMessage(role="user", content="Draft an NDA")

        self.assertEqual(message.role, "user")
        self.assertEqual(message.content, "Draft an NDA")

    def test_summary_message_rejects_unknown_role(self):
        """Test that only user and assistant messages are accepted."""
        with self.assertRaises(ValidationError):
            SummaryMessage(role="system", content="hidden")

    def test_document_stats_defaults(self):
        """Test DocumentStats defaults."""
        stats = DocumentStats()

        self.assertEqual(stats.words, 0)
        self.assertEqual(stats.read_minutes, 1)

    def test_archived_document_creation(self):
        """Test ArchivedDocument model creation."""
        doc = ArchivedDocument(
            doc_id="doc_1",
            template_id="nda",
            template_name="Non-Disclosure Agreement",
            content="# NDA"
        )

        self.assertEqual(doc.doc_id, "doc_1")
        self.assertIsNone(doc.custom_prompt)
        self.assertIsNone(doc.conversation_id)
        self.assertIsInstance(doc.created_at, datetime)
        self.assertEqual(doc.word_count, 0)

    def test_document_template_creation(self):
        """Test DocumentTemplate model creation."""
        template = DocumentTemplate(template_id="memo", name="Memo")

        self.assertEqual(template.description, "")
        self.assertIsNone(template.badge)


class TestTemplateRegistry(unittest.TestCase):
    """Test template registry functionality."""

    def setUp(self):
        """Set up test registry."""
        self.registry = TemplateRegistry()

    def test_default_templates_registered(self):
        """Test that default templates are registered."""
        ids = [t.template_id for t in self.registry.list_templates()]

        self.assertIn("nda", ids)
        self.assertIn("contract", ids)
        self.assertIn("custom", ids)
        self.assertEqual(len(ids), 10)

    def test_template_retrieval(self):
        """Test retrieving templates."""
        nda = self.registry.get_template("nda")

        self.assertIsNotNone(nda)
        if nda:  # Type guard for linter
            self.assertEqual(nda.name, "Non-Disclosure Agreement")
            self.assertEqual(nda.badge, "Legal")
        self.assertIsNone(self.registry.get_template("missing"))

    def test_custom_template_registration(self):
        """Test registering custom templates."""
        self.registry.register_template(DocumentTemplate(
            template_id="memo",
            name="Internal Memo",
            badge="Business"
        ))

        retrieved = self.registry.get_template("memo")
        self.assertIsNotNone(retrieved)
        if retrieved:  # Type guard for linter
            self.assertEqual(retrieved.name, "Internal Memo")
        self.assertEqual(self.registry.list_templates()[-1].template_id, "memo")

    def test_templates_by_badge(self):
        """Test finding templates by category."""
        legal = [t.template_id for t in self.registry.get_templates_by_badge("Legal")]

        self.assertIn("nda", legal)
        self.assertIn("terms-of-service", legal)
        self.assertNotIn("proposal", legal)


if __name__ == '__main__':
    unittest.main(verbosity=2)
