"""Append-only version history repository."""

import sqlite3
from typing import List, Optional

from registry.database import use_connection
from registry.types import VersionRecord


def _row_to_version(row: sqlite3.Row) -> VersionRecord:
    return VersionRecord(
        file_id=row["file_id"],
        version=row["version"],
        content_hash=row["content_hash"],
        size_bytes=row["size_bytes"],
        changed_by=row["changed_by"],
        changed_at=row["changed_at"],
        note=row["note"],
    )


class VersionRepository:
    @staticmethod
    def append_version(record: VersionRecord, conn: sqlite3.Connection) -> VersionRecord:
        """
        Insert a new version. The (file_id, version) primary key rejects rewrites.
        """
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO file_versions
                (file_id, version, content_hash, size_bytes, changed_by, changed_at, note)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.file_id,
                record.version,
                record.content_hash,
                record.size_bytes,
                record.changed_by,
                record.changed_at,
                record.note,
            )
        )
        return record

    @staticmethod
    def get_version(file_id: int, version: int, conn: sqlite3.Connection = None) -> Optional[VersionRecord]:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT file_id, version, content_hash, size_bytes, changed_by, changed_at, note
                FROM file_versions WHERE file_id = ? AND version = ?
                """,
                (file_id, version)
            )
            row = cursor.fetchone()
            return _row_to_version(row) if row else None

    @staticmethod
    def list_versions(file_id: int, conn: sqlite3.Connection = None) -> List[VersionRecord]:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT file_id, version, content_hash, size_bytes, changed_by, changed_at, note
                FROM file_versions WHERE file_id = ? ORDER BY version
                """,
                (file_id,)
            )
            return [_row_to_version(row) for row in cursor.fetchall()]

    @staticmethod
    def latest_version(file_id: int, conn: sqlite3.Connection = None) -> int:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT COALESCE(MAX(version), 0) AS latest FROM file_versions WHERE file_id = ?",
                (file_id,)
            )
            return cursor.fetchone()["latest"]
