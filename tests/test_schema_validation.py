"""Schema validation tests to prevent SQL query mismatches."""

import sqlite3
from pathlib import Path

import pytest


def get_table_columns(db_path: Path, table_name: str) -> set:
    """
    Get all column names for a table from the database schema.
    """
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute(f"PRAGMA table_info({table_name})")
    columns = {row[1] for row in cursor.fetchall()}
    conn.close()
    return columns


EXPECTED_COLUMNS = {
    "users": {"user_id", "username", "password_hash", "api_key", "created_at", "key_updated_at"},
    "sequences": {"name", "value"},
    "files": {
        "file_id", "owner_id", "name", "content_hash", "size_bytes", "created_at",
        "modified_at", "mime_type", "description", "is_private", "is_encrypted",
        "current_version",
    },
    "file_tags": {"file_id", "position", "tag"},
    "file_versions": {
        "file_id", "version", "content_hash", "size_bytes", "changed_by", "changed_at", "note",
    },
    "file_permissions": {
        "file_id", "account_id", "can_read", "can_write", "granted_at", "expires_at",
    },
    "storage_metrics": {"account_id", "total_file_count", "total_storage_bytes", "last_activity"},
}


class TestSchema:
    @pytest.mark.parametrize("table_name", sorted(EXPECTED_COLUMNS))
    def test_table_columns(self, test_db, table_name):
        assert get_table_columns(test_db, table_name) == EXPECTED_COLUMNS[table_name]

    def test_init_is_idempotent(self, test_db):
        from registry.database import init_database

        init_database()
        assert get_table_columns(test_db, "files") == EXPECTED_COLUMNS["files"]
