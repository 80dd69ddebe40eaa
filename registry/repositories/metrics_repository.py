"""Per-account storage metrics repository."""

import sqlite3

from registry.database import use_connection
from registry.types import StorageMetrics


class MetricsRepository:
    @staticmethod
    def get(account_id: str, conn: sqlite3.Connection = None) -> StorageMetrics:
        """
        Return the account's metrics, or zeroed metrics if none were recorded yet.
        """
        with use_connection(conn) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT account_id, total_file_count, total_storage_bytes, last_activity
                FROM storage_metrics WHERE account_id = ?
                """,
                (account_id,)
            )
            row = cursor.fetchone()

            if row is None:
                return StorageMetrics(account_id=account_id)

            return StorageMetrics(
                account_id=row["account_id"],
                total_file_count=row["total_file_count"],
                total_storage_bytes=row["total_storage_bytes"],
                last_activity=row["last_activity"],
            )

    @staticmethod
    def save(metrics: StorageMetrics, conn: sqlite3.Connection) -> StorageMetrics:
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO storage_metrics (account_id, total_file_count, total_storage_bytes, last_activity)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(account_id) DO UPDATE SET
                total_file_count = excluded.total_file_count,
                total_storage_bytes = excluded.total_storage_bytes,
                last_activity = excluded.last_activity
            """,
            (
                metrics.account_id,
                metrics.total_file_count,
                metrics.total_storage_bytes,
                metrics.last_activity,
            )
        )
        return metrics
