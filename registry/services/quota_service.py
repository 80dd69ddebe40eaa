"""Quota ledger: per-account file count and byte totals."""

import sqlite3
from dataclasses import replace

from common.constants import MAX_FILES_PER_ACCOUNT
from common.logging_config import get_logger
from registry.exceptions import StorageExceededError
from registry.repositories.file_repository import FileRepository
from registry.repositories.metrics_repository import MetricsRepository
from registry.types import StorageMetrics

logger = get_logger(__name__)


class QuotaService:
    """
    Owns the storage_metrics rows. The mutating methods take the connection of
    the file operation that triggered them and never commit on their own.
    """

    def __init__(self):
        self.metrics_repo = MetricsRepository()
        self.file_repo = FileRepository()

    def get_storage_metrics(self, account_id: str) -> StorageMetrics:
        return self.metrics_repo.get(account_id)

    def ensure_upload_allowed(self, owner_id: str, conn: sqlite3.Connection) -> None:
        metrics = self.metrics_repo.get(owner_id, conn=conn)
        if metrics.total_file_count >= MAX_FILES_PER_ACCOUNT:
            logger.warning(
                f"Upload rejected: account has {metrics.total_file_count} files [owner_id={owner_id}]"
            )
            raise StorageExceededError(
                f"Account {owner_id} already owns the maximum of {MAX_FILES_PER_ACCOUNT} files"
            )

    def record_upload(self, owner_id: str, size_bytes: int, now: int, conn: sqlite3.Connection) -> StorageMetrics:
        metrics = self.metrics_repo.get(owner_id, conn=conn)
        updated = replace(
            metrics,
            total_file_count=metrics.total_file_count + 1,
            total_storage_bytes=metrics.total_storage_bytes + size_bytes,
            last_activity=now,
        )
        return self.metrics_repo.save(updated, conn=conn)

    def record_size_change(
        self,
        owner_id: str,
        old_size: int,
        new_size: int,
        now: int,
        conn: sqlite3.Connection,
    ) -> StorageMetrics:
        metrics = self.metrics_repo.get(owner_id, conn=conn)
        total = metrics.total_storage_bytes + (new_size - old_size)

        if total < 0:
            # Ledger and file sizes disagree; clamp rather than store a negative total.
            logger.warning(
                f"Storage total would drop below zero ({total}); clamping to 0 "
                f"[owner_id={owner_id}] [recorded={metrics.total_storage_bytes}] "
                f"[old_size={old_size}] [new_size={new_size}] "
                f"[owned_bytes={self.file_repo.sum_size_by_owner(owner_id, conn=conn)}]"
            )
            total = 0

        updated = replace(metrics, total_storage_bytes=total, last_activity=now)
        return self.metrics_repo.save(updated, conn=conn)
