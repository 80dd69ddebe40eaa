"""Permission entry repository for database operations."""

import sqlite3
from typing import Optional

from registry.database import use_connection
from registry.types import PermissionEntry


class PermissionRepository:
    @staticmethod
    def upsert(entry: PermissionEntry, conn: sqlite3.Connection) -> PermissionEntry:
        """
        Store an entry, replacing any prior entry for the same (file, account) pair.
        """
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT OR REPLACE INTO file_permissions
                (file_id, account_id, can_read, can_write, granted_at, expires_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                entry.file_id,
                entry.account_id,
                int(entry.can_read),
                int(entry.can_write),
                entry.granted_at,
                entry.expires_at,
            )
        )
        return entry

    @staticmethod
    def get(file_id: int, account_id: str, conn: sqlite3.Connection = None) -> Optional[PermissionEntry]:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT file_id, account_id, can_read, can_write, granted_at, expires_at
                FROM file_permissions WHERE file_id = ? AND account_id = ?
                """,
                (file_id, account_id)
            )
            row = cursor.fetchone()

            if row is None:
                return None

            return PermissionEntry(
                file_id=row["file_id"],
                account_id=row["account_id"],
                can_read=bool(row["can_read"]),
                can_write=bool(row["can_write"]),
                granted_at=row["granted_at"],
                expires_at=row["expires_at"],
            )

    @staticmethod
    def delete(file_id: int, account_id: str, conn: sqlite3.Connection) -> bool:
        cursor = conn.cursor()
        cursor.execute(
            "DELETE FROM file_permissions WHERE file_id = ? AND account_id = ?",
            (file_id, account_id)
        )
        return cursor.rowcount > 0
