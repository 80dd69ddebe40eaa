"""Read access to the append-only version history."""

from typing import List, Optional

from registry import validation
from registry.clock import LogicalClock
from registry.database import use_connection
from registry.exceptions import AccessDeniedError, FileNotFoundError, VersionNotFoundError
from registry.repositories.file_repository import FileRepository
from registry.repositories.version_repository import VersionRepository
from registry.service_locator import get_clock
from registry.services.access_service import AccessService
from registry.types import VersionRecord


class VersionService:
    def __init__(self, clock: Optional[LogicalClock] = None):
        self.clock = clock or get_clock()
        self.file_repo = FileRepository()
        self.version_repo = VersionRepository()
        self.access_service = AccessService(self.clock)

    def get_version(self, file_id: int, version: int, caller_id: str) -> VersionRecord:
        validation.validate_file_id(file_id)
        validation.validate_version(version)
        now = self.clock.now()

        with use_connection() as conn:
            self._require_read(file_id, caller_id, now, conn)
            record = self.version_repo.get_version(file_id, version, conn=conn)

        if record is None:
            raise VersionNotFoundError(f"Version {version} of file {file_id} not found")
        return record

    def list_versions(self, file_id: int, caller_id: str) -> List[VersionRecord]:
        validation.validate_file_id(file_id)
        now = self.clock.now()

        with use_connection() as conn:
            self._require_read(file_id, caller_id, now, conn)
            return self.version_repo.list_versions(file_id, conn=conn)

    def _require_read(self, file_id, caller_id, now, conn) -> None:
        file = self.file_repo.get_by_id(file_id, conn=conn)
        if file is None:
            raise FileNotFoundError(f"File {file_id} not found")
        if not self.access_service.can_read(file, caller_id, now, conn=conn):
            raise AccessDeniedError(f"Account {caller_id} cannot read history of file {file_id}")
