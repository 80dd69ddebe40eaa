"""Access control: effective read/write rights and permission grants."""

import sqlite3
from typing import Optional

from common.logging_config import get_logger
from registry import validation
from registry.clock import LogicalClock
from registry.database import use_connection, write_transaction
from registry.exceptions import AccessDeniedError, FileNotFoundError
from registry.repositories.file_repository import FileRepository
from registry.repositories.permission_repository import PermissionRepository
from registry.service_locator import get_clock
from registry.types import FileRecord, PermissionEntry

logger = get_logger(__name__)


class AccessService:
    def __init__(self, clock: Optional[LogicalClock] = None):
        self.clock = clock or get_clock()
        self.file_repo = FileRepository()
        self.permission_repo = PermissionRepository()

    def can_read(self, file: FileRecord, account_id: str, now: int, conn: sqlite3.Connection = None) -> bool:
        """
        Read rule for an already loaded record: owner, public file, or an active read entry.
        """
        if file.owner_id == account_id or not file.is_private:
            return True

        entry = self.permission_repo.get(file.file_id, account_id, conn=conn)
        return entry is not None and entry.can_read and entry.is_active(now)

    def can_write(self, file_id: int, account_id: str, now: int, conn: sqlite3.Connection = None) -> bool:
        """
        Write rule from grants alone. Ownership is checked separately by callers.
        """
        entry = self.permission_repo.get(file_id, account_id, conn=conn)
        return entry is not None and entry.can_write and entry.is_active(now)

    def has_read_access(self, file_id: int, account_id: str) -> bool:
        validation.validate_file_id(file_id)
        now = self.clock.now()
        with use_connection() as conn:
            file = self.file_repo.get_by_id(file_id, conn=conn)
            if file is None:
                return False
            return self.can_read(file, account_id, now, conn=conn)

    def has_write_access(self, file_id: int, account_id: str) -> bool:
        validation.validate_file_id(file_id)
        return self.can_write(file_id, account_id, self.clock.now())

    def check_write_access(self, file_id: int, account_id: str) -> bool:
        """
        Report whether an account holds an active write grant on a file.

        No ownership or visibility check is made, so any caller may ask about
        any account. Owners without an explicit entry report False.
        """
        allowed = self.has_write_access(file_id, account_id)
        logger.debug(f"Write access check [file_id={file_id}] [account_id={account_id}] -> {allowed}")
        return allowed

    def grant_access(
        self,
        file_id: int,
        caller_id: str,
        grantee_id: str,
        can_write: bool,
        expires_at: Optional[int] = None,
    ) -> PermissionEntry:
        """
        Grant read (and optionally write) access on a file to another account.

        Any prior entry for the same grantee is replaced wholesale: granting
        read-only access to an account that held write access removes it.
        """
        now = self.clock.now()
        validation.validate_file_id(file_id)
        validation.validate_not_admin(grantee_id)
        validation.validate_expiry(expires_at, now)

        with write_transaction() as conn:
            self._require_owner(file_id, caller_id, conn)

            entry = PermissionEntry(
                file_id=file_id,
                account_id=grantee_id,
                can_read=True,
                can_write=can_write,
                granted_at=now,
                expires_at=expires_at,
            )
            self.permission_repo.upsert(entry, conn=conn)

        logger.info(
            f"Granted {'write' if can_write else 'read'} access [file_id={file_id}] "
            f"[grantee={grantee_id}] [expires_at={expires_at}]"
        )
        return entry

    def revoke_access(self, file_id: int, caller_id: str, grantee_id: str) -> bool:
        validation.validate_file_id(file_id)

        with write_transaction() as conn:
            self._require_owner(file_id, caller_id, conn)
            removed = self.permission_repo.delete(file_id, grantee_id, conn=conn)

        logger.info(f"Revoked access [file_id={file_id}] [grantee={grantee_id}] [removed={removed}]")
        return removed

    def get_permission(self, file_id: int, caller_id: str, grantee_id: str) -> Optional[PermissionEntry]:
        """
        Return the stored entry for a grantee. Visible to the owner and the grantee.
        """
        validation.validate_file_id(file_id)

        with use_connection() as conn:
            file = self.file_repo.get_by_id(file_id, conn=conn)
            if file is None:
                raise FileNotFoundError(f"File {file_id} not found")
            if caller_id not in (file.owner_id, grantee_id):
                raise AccessDeniedError(
                    f"Account {caller_id} cannot inspect permissions of file {file_id}"
                )
            return self.permission_repo.get(file_id, grantee_id, conn=conn)

    def _require_owner(self, file_id: int, caller_id: str, conn: sqlite3.Connection) -> FileRecord:
        file = self.file_repo.get_by_id(file_id, conn=conn)
        if file is None:
            raise FileNotFoundError(f"File {file_id} not found")
        if file.owner_id != caller_id:
            logger.warning(f"Permission change rejected: caller is not owner [file_id={file_id}] [caller={caller_id}]")
            raise AccessDeniedError(f"Account {caller_id} does not own file {file_id}")
        return file
