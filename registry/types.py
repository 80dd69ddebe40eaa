"""Registry data type definitions."""

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass(frozen=True)
class FileRecord:
    """
    Primary metadata record for a file. The content itself lives off-system.
    """
    file_id: int
    owner_id: str
    name: str
    content_hash: str
    size_bytes: int
    created_at: int
    modified_at: int
    mime_type: str
    description: str
    is_private: bool
    is_encrypted: bool
    current_version: int
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class VersionRecord:
    file_id: int
    version: int
    content_hash: str
    size_bytes: int
    changed_by: str
    changed_at: int
    note: str


@dataclass(frozen=True)
class PermissionEntry:
    file_id: int
    account_id: str
    can_read: bool
    can_write: bool
    granted_at: int
    expires_at: Optional[int] = None

    def is_active(self, now: int) -> bool:
        """An entry is active while it has no expiry or its expiry lies strictly ahead."""
        return self.expires_at is None or self.expires_at > now


@dataclass(frozen=True)
class StorageMetrics:
    account_id: str
    total_file_count: int = 0
    total_storage_bytes: int = 0
    last_activity: Optional[int] = None


@dataclass(frozen=True)
class MetadataPatch:
    """
    Partial metadata edit. Fields left as None keep their current value.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.name, self.description, self.tags, self.is_private)
        )

    def apply_to(self, record: FileRecord) -> FileRecord:
        changes = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.description is not None:
            changes["description"] = self.description
        if self.tags is not None:
            changes["tags"] = list(self.tags)
        if self.is_private is not None:
            changes["is_private"] = self.is_private
        return replace(record, **changes)
