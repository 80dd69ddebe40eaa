"""Tag repository for database operations."""

import sqlite3
from typing import List

from registry.database import use_connection


class TagRepository:
    @staticmethod
    def replace_tags(file_id: int, tags: List[str], conn: sqlite3.Connection) -> None:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM file_tags WHERE file_id = ?", (file_id,))
        for position, tag in enumerate(tags):
            cursor.execute(
                "INSERT INTO file_tags (file_id, position, tag) VALUES (?, ?, ?)",
                (file_id, position, tag)
            )

    @staticmethod
    def get_tags_for_file(file_id: int, conn: sqlite3.Connection = None) -> List[str]:
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT tag FROM file_tags WHERE file_id = ? ORDER BY position",
                (file_id,)
            )
            return [row["tag"] for row in cursor.fetchall()]
