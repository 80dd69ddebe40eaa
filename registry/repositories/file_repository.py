"""File record repository for database operations."""

import sqlite3
from typing import Optional

from common.logging_config import get_logger
from registry.database import use_connection
from registry.types import FileRecord

logger = get_logger(__name__)

FILE_ID_SEQUENCE = "file_id"

_FILE_COLUMNS = """
    file_id, owner_id, name, content_hash, size_bytes, created_at, modified_at,
    mime_type, description, is_private, is_encrypted, current_version
"""


def _row_to_file(row: sqlite3.Row) -> FileRecord:
    return FileRecord(
        file_id=row["file_id"],
        owner_id=row["owner_id"],
        name=row["name"],
        content_hash=row["content_hash"],
        size_bytes=row["size_bytes"],
        created_at=row["created_at"],
        modified_at=row["modified_at"],
        mime_type=row["mime_type"],
        description=row["description"],
        is_private=bool(row["is_private"]),
        is_encrypted=bool(row["is_encrypted"]),
        current_version=row["current_version"],
    )


class FileRepository:
    @staticmethod
    def allocate_file_id(conn: sqlite3.Connection) -> int:
        """
        Increment and read the file id counter inside the caller's transaction.

        Ids start at 1 and a rolled back allocation is undone with the rest of
        the transaction, so the issued sequence stays gapless.
        """
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO sequences (name, value) VALUES (?, 1)
            ON CONFLICT(name) DO UPDATE SET value = value + 1
            """,
            (FILE_ID_SEQUENCE,)
        )
        cursor.execute("SELECT value FROM sequences WHERE name = ?", (FILE_ID_SEQUENCE,))
        file_id = cursor.fetchone()["value"]
        logger.debug(f"Allocated file id {file_id}")
        return file_id

    @staticmethod
    def create_file(record: FileRecord, conn: sqlite3.Connection) -> FileRecord:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            INSERT INTO files ({_FILE_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.file_id,
                record.owner_id,
                record.name,
                record.content_hash,
                record.size_bytes,
                record.created_at,
                record.modified_at,
                record.mime_type,
                record.description,
                int(record.is_private),
                int(record.is_encrypted),
                record.current_version,
            )
        )
        logger.debug(f"Inserted file record [file_id={record.file_id}] [owner_id={record.owner_id}]")
        return record

    @staticmethod
    def get_by_id(file_id: int, conn: sqlite3.Connection = None) -> Optional[FileRecord]:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_FILE_COLUMNS} FROM files WHERE file_id = ?",
                (file_id,)
            )
            row = cursor.fetchone()

            if row is None:
                return None

            return _row_to_file(row)

    @staticmethod
    def update_content(
        file_id: int,
        content_hash: str,
        size_bytes: int,
        modified_at: int,
        current_version: int,
        conn: sqlite3.Connection,
    ) -> None:
        cursor = conn.cursor()
        cursor.execute(
            """
            UPDATE files
            SET content_hash = ?, size_bytes = ?, modified_at = ?, current_version = ?
            WHERE file_id = ?
            """,
            (content_hash, size_bytes, modified_at, current_version, file_id)
        )

    @staticmethod
    def update_metadata(record: FileRecord, conn: sqlite3.Connection) -> None:
        cursor = conn.cursor()
        cursor.execute(
            """
            UPDATE files
            SET name = ?, description = ?, is_private = ?
            WHERE file_id = ?
            """,
            (record.name, record.description, int(record.is_private), record.file_id)
        )

    @staticmethod
    def sum_size_by_owner(owner_id: str, conn: sqlite3.Connection = None) -> int:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT COALESCE(SUM(size_bytes), 0) AS total FROM files WHERE owner_id = ?",
                (owner_id,)
            )
            return cursor.fetchone()["total"]
