"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from registry.config import DATABASE_PATH, DATABASE_TIMEOUT


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                user_id TEXT PRIMARY KEY,
                username TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                api_key TEXT UNIQUE,
                created_at TEXT NOT NULL,
                key_updated_at TEXT
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS sequences (
                name TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS files (
                file_id INTEGER PRIMARY KEY,
                owner_id TEXT NOT NULL,
                name TEXT NOT NULL,
                content_hash TEXT NOT NULL,
                size_bytes INTEGER NOT NULL,
                created_at INTEGER NOT NULL,
                modified_at INTEGER NOT NULL,
                mime_type TEXT NOT NULL,
                description TEXT NOT NULL,
                is_private INTEGER NOT NULL,
                is_encrypted INTEGER NOT NULL,
                current_version INTEGER NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS file_tags (
                file_id INTEGER NOT NULL,
                position INTEGER NOT NULL,
                tag TEXT NOT NULL,
                PRIMARY KEY(file_id, position),
                FOREIGN KEY(file_id) REFERENCES files(file_id)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS file_versions (
                file_id INTEGER NOT NULL,
                version INTEGER NOT NULL,
                content_hash TEXT NOT NULL,
                size_bytes INTEGER NOT NULL,
                changed_by TEXT NOT NULL,
                changed_at INTEGER NOT NULL,
                note TEXT NOT NULL,
                PRIMARY KEY(file_id, version),
                FOREIGN KEY(file_id) REFERENCES files(file_id)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS file_permissions (
                file_id INTEGER NOT NULL,
                account_id TEXT NOT NULL,
                can_read INTEGER NOT NULL,
                can_write INTEGER NOT NULL,
                granted_at INTEGER NOT NULL,
                expires_at INTEGER,
                PRIMARY KEY(file_id, account_id),
                FOREIGN KEY(file_id) REFERENCES files(file_id)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS storage_metrics (
                account_id TEXT PRIMARY KEY,
                total_file_count INTEGER NOT NULL,
                total_storage_bytes INTEGER NOT NULL,
                last_activity INTEGER
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_files_owner ON files(owner_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_file_tags_tag ON file_tags(tag)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_permissions_account ON file_permissions(account_id)
        """)

        conn.commit()


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(DATABASE_PATH, timeout=DATABASE_TIMEOUT)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def write_transaction() -> Generator[sqlite3.Connection, None, None]:
    """
    Open a connection holding the database write lock for one operation.

    BEGIN IMMEDIATE serializes writers, so reads made inside the block (quota
    checks, id allocation, ownership checks) cannot be invalidated before the
    commit. Any exception rolls every statement back.
    """
    with get_db_connection() as conn:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise


@contextmanager
def use_connection(conn: sqlite3.Connection = None) -> Generator[sqlite3.Connection, None, None]:
    """
    Reuse the caller's connection when given, otherwise open a short-lived one.
    """
    if conn is not None:
        yield conn
        return

    with get_db_connection() as own_conn:
        yield own_conn
