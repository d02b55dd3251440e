"""
Database manager for Redraft.

This module stores canonical Markdown and the document archive in DuckDB.
"""

import logging
from datetime import datetime
from typing import List, Optional

import duckdb

from ..config import config
from ..models import ArchivedDocument
from .store import DocumentStore


class DatabaseManager(DocumentStore):
    """
    Manages the DuckDB database holding documents and archived documents.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file (defaults to config value,
                ":memory:" for a throwaway database)
        """
        self.db_path = db_path or config.database_filename
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS documents (
                storage_key VARCHAR PRIMARY KEY,
                content TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS archived_documents (
                doc_id VARCHAR PRIMARY KEY,
                template_id VARCHAR NOT NULL,
                template_name VARCHAR NOT NULL,
                content TEXT NOT NULL,
                custom_prompt TEXT,
                conversation_id VARCHAR,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                word_count INTEGER DEFAULT 0
            )
        """)

    # Canonical Markdown

    def load(self, key: str) -> Optional[str]:
        """
        Read the document stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored Markdown, or None if absent
        """
        connection = self._require_connection()

        result = connection.execute("""
            SELECT content FROM documents WHERE storage_key = ?
        """, [key]).fetchone()

        return result[0] if result else None

    def save(self, key: str, value: str) -> None:
        """
        Insert or replace the document stored under a key.

        Args:
            key: Storage key
            value: Canonical Markdown
        """
        connection = self._require_connection()

        connection.execute("""
            INSERT INTO documents (storage_key, content, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT (storage_key) DO UPDATE SET
                content = excluded.content,
                updated_at = excluded.updated_at
        """, [key, value, datetime.now()])

    def delete(self, key: str) -> None:
        """
        Remove the document stored under a key.

        Args:
            key: Storage key
        """
        connection = self._require_connection()
        connection.execute("DELETE FROM documents WHERE storage_key = ?", [key])

    # Archive

    def upsert_archived(self, doc: ArchivedDocument) -> None:
        """
        Add an archive entry, or update content and counters of an existing one.

        The original creation time of an existing entry is kept.

        Args:
            doc: The archive entry
        """
        connection = self._require_connection()

        connection.execute("""
            INSERT INTO archived_documents (
                doc_id, template_id, template_name, content, custom_prompt,
                conversation_id, created_at, updated_at, word_count
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (doc_id) DO UPDATE SET
                content = excluded.content,
                updated_at = excluded.updated_at,
                word_count = excluded.word_count
        """, [
            doc.doc_id,
            doc.template_id,
            doc.template_name,
            doc.content,
            doc.custom_prompt,
            doc.conversation_id,
            doc.created_at,
            doc.updated_at,
            doc.word_count
        ])

    def get_archived(self, doc_id: str) -> Optional[ArchivedDocument]:
        """
        Retrieve an archive entry by ID.

        Args:
            doc_id: The entry ID

        Returns:
            The entry if found, None otherwise
        """
        connection = self._require_connection()

        result = connection.execute("""
            SELECT doc_id, template_id, template_name, content, custom_prompt,
                   conversation_id, created_at, updated_at, word_count
            FROM archived_documents
            WHERE doc_id = ?
        """, [doc_id]).fetchone()

        return self._row_to_archived(result) if result else None

    def list_archived(self, conversation_id: Optional[str] = None, limit: Optional[int] = None) -> List[ArchivedDocument]:
        """
        List archive entries, most recently updated first.

        Args:
            conversation_id: Only entries prepared from this conversation (optional)
            limit: Limit number of results

        Returns:
            List of archive entries
        """
        connection = self._require_connection()

        query = """
            SELECT doc_id, template_id, template_name, content, custom_prompt,
                   conversation_id, created_at, updated_at, word_count
            FROM archived_documents
            WHERE 1=1
        """
        params: list = []

        if conversation_id:
            query += " AND conversation_id = ?"
            params.append(conversation_id)

        query += " ORDER BY updated_at DESC"

        if limit:
            query += " LIMIT ?"
            params.append(int(limit))

        results = connection.execute(query, params).fetchall()
        return [self._row_to_archived(row) for row in results]

    def delete_archived(self, doc_id: str) -> bool:
        """
        Remove an archive entry.

        Args:
            doc_id: The entry ID

        Returns:
            True if an entry was removed
        """
        connection = self._require_connection()

        if self.get_archived(doc_id) is None:
            return False
        connection.execute("DELETE FROM archived_documents WHERE doc_id = ?", [doc_id])
        logging.info(f"Deleted archived document {doc_id}")
        return True

    def _row_to_archived(self, row) -> ArchivedDocument:
        return ArchivedDocument(
            doc_id=row[0],
            template_id=row[1],
            template_name=row[2],
            content=row[3],
            custom_prompt=row[4],
            conversation_id=row[5],
            created_at=row[6],
            updated_at=row[7],
            word_count=row[8] or 0
        )
