"""File registry service: upload, content updates, metadata edits and lookups."""

from dataclasses import replace
from typing import List, Optional

from common.constants import INITIAL_VERSION_NOTE
from common.logging_config import get_logger
from registry import validation
from registry.clock import LogicalClock
from registry.database import use_connection, write_transaction
from registry.exceptions import AccessDeniedError, FileNotFoundError
from registry.repositories.file_repository import FileRepository
from registry.repositories.tag_repository import TagRepository
from registry.repositories.version_repository import VersionRepository
from registry.service_locator import get_clock
from registry.services.access_service import AccessService
from registry.services.quota_service import QuotaService
from registry.types import FileRecord, MetadataPatch, VersionRecord

logger = get_logger(__name__)


class FileService:
    def __init__(self, clock: Optional[LogicalClock] = None):
        self.clock = clock or get_clock()
        self.file_repo = FileRepository()
        self.tag_repo = TagRepository()
        self.version_repo = VersionRepository()
        self.access_service = AccessService(self.clock)
        self.quota_service = QuotaService()

    def upload(
        self,
        owner_id: str,
        name: str,
        content_hash: str,
        size_bytes: int,
        mime_type: str,
        description: str,
        is_private: bool,
        is_encrypted: bool,
        tags: Optional[List[str]] = None,
    ) -> int:
        """
        Register a new file and return its id.

        The record, its tags, version 1 and the owner's storage metrics are
        written in one transaction.
        """
        tags = list(tags or [])
        validation.validate_name(name)
        validation.validate_content_hash(content_hash)
        validation.validate_size(size_bytes)
        validation.validate_mime_type(mime_type)
        validation.validate_description(description)
        validation.validate_tags(tags)

        now = self.clock.now()
        logger.info(f"Uploading file '{name}' ({size_bytes} bytes) [owner_id={owner_id}]")

        with write_transaction() as conn:
            self.quota_service.ensure_upload_allowed(owner_id, conn)

            file_id = self.file_repo.allocate_file_id(conn)
            self.file_repo.create_file(
                FileRecord(
                    file_id=file_id,
                    owner_id=owner_id,
                    name=name,
                    content_hash=content_hash,
                    size_bytes=size_bytes,
                    created_at=now,
                    modified_at=now,
                    mime_type=mime_type,
                    description=description,
                    is_private=is_private,
                    is_encrypted=is_encrypted,
                    current_version=1,
                ),
                conn=conn,
            )
            self.tag_repo.replace_tags(file_id, tags, conn=conn)
            self.version_repo.append_version(
                VersionRecord(
                    file_id=file_id,
                    version=1,
                    content_hash=content_hash,
                    size_bytes=size_bytes,
                    changed_by=owner_id,
                    changed_at=now,
                    note=INITIAL_VERSION_NOTE,
                ),
                conn=conn,
            )
            self.quota_service.record_upload(owner_id, size_bytes, now, conn=conn)

        logger.info(f"Uploaded file [file_id={file_id}] [owner_id={owner_id}]")
        return file_id

    def update(
        self,
        file_id: int,
        caller_id: str,
        content_hash: str,
        size_bytes: int,
        note: str,
    ) -> int:
        """
        Record new content for a file and return the new version number.

        Allowed for the owner and for accounts holding an active write grant.
        The size delta is charged to the owner, not to the caller.
        """
        validation.validate_file_id(file_id)
        validation.validate_content_hash(content_hash)
        validation.validate_size(size_bytes)
        validation.validate_description(note, field_name="Change note")

        now = self.clock.now()

        with write_transaction() as conn:
            file = self.file_repo.get_by_id(file_id, conn=conn)
            if file is None:
                raise FileNotFoundError(f"File {file_id} not found")

            if file.owner_id != caller_id and not self.access_service.can_write(file_id, caller_id, now, conn=conn):
                logger.warning(f"Update rejected: no write access [file_id={file_id}] [caller={caller_id}]")
                raise AccessDeniedError(f"Account {caller_id} cannot write file {file_id}")

            latest = self.version_repo.latest_version(file_id, conn=conn)
            if latest != file.current_version:
                logger.error(
                    f"History out of step with record: current_version={file.current_version} "
                    f"latest={latest} [file_id={file_id}]"
                )

            next_version = file.current_version + 1
            self.file_repo.update_content(
                file_id,
                content_hash=content_hash,
                size_bytes=size_bytes,
                modified_at=now,
                current_version=next_version,
                conn=conn,
            )
            self.version_repo.append_version(
                VersionRecord(
                    file_id=file_id,
                    version=next_version,
                    content_hash=content_hash,
                    size_bytes=size_bytes,
                    changed_by=caller_id,
                    changed_at=now,
                    note=note,
                ),
                conn=conn,
            )
            self.quota_service.record_size_change(
                file.owner_id, file.size_bytes, size_bytes, now, conn=conn
            )

        logger.info(f"Updated file to version {next_version} [file_id={file_id}] [caller={caller_id}]")
        return next_version

    def update_metadata(self, file_id: int, caller_id: str, patch: MetadataPatch) -> FileRecord:
        """
        Apply a partial metadata edit. Content, size and version are untouched.
        """
        validation.validate_file_id(file_id)
        if patch.name is not None:
            validation.validate_name(patch.name)
        if patch.description is not None:
            validation.validate_description(patch.description)
        if patch.tags is not None:
            validation.validate_tags(patch.tags)

        with write_transaction() as conn:
            file = self.file_repo.get_by_id(file_id, conn=conn)
            if file is None:
                raise FileNotFoundError(f"File {file_id} not found")
            if file.owner_id != caller_id:
                logger.warning(f"Metadata edit rejected: caller is not owner [file_id={file_id}] [caller={caller_id}]")
                raise AccessDeniedError(f"Account {caller_id} does not own file {file_id}")

            current = replace(file, tags=self.tag_repo.get_tags_for_file(file_id, conn=conn))
            if patch.is_empty():
                return current

            updated = patch.apply_to(current)
            self.file_repo.update_metadata(updated, conn=conn)
            if patch.tags is not None:
                self.tag_repo.replace_tags(file_id, updated.tags, conn=conn)

        logger.info(f"Updated metadata [file_id={file_id}]")
        return updated

    def get_file_info(self, file_id: int, caller_id: str) -> FileRecord:
        validation.validate_file_id(file_id)
        now = self.clock.now()

        with use_connection() as conn:
            file = self.file_repo.get_by_id(file_id, conn=conn)
            if file is None:
                raise FileNotFoundError(f"File {file_id} not found")
            if not self.access_service.can_read(file, caller_id, now, conn=conn):
                raise AccessDeniedError(f"Account {caller_id} cannot read file {file_id}")

            return replace(file, tags=self.tag_repo.get_tags_for_file(file_id, conn=conn))
