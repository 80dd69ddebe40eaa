"""Pydantic schemas for file registry endpoints."""

from typing import List, Optional

from pydantic import BaseModel

from registry.types import FileRecord, PermissionEntry, StorageMetrics, VersionRecord


class UploadFileRequest(BaseModel):
    """Request model for registering a new file."""
    name: str
    content_hash: str
    size_bytes: int
    mime_type: str
    description: str
    is_private: bool = True
    is_encrypted: bool = False
    tags: List[str] = []


class UploadFileResponse(BaseModel):
    """Response model for file registration."""
    file_id: int


class UpdateContentRequest(BaseModel):
    """Request model for recording new file content."""
    content_hash: str
    size_bytes: int
    note: str


class UpdateContentResponse(BaseModel):
    """Response model for a content update."""
    file_id: int
    version: int


class UpdateMetadataRequest(BaseModel):
    """Request model for a partial metadata edit. Omitted fields are kept."""
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None


class FileInfoResponse(BaseModel):
    """Response model for file metadata."""
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
    tags: List[str]

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileInfoResponse":
        return cls(
            file_id=record.file_id,
            owner_id=record.owner_id,
            name=record.name,
            content_hash=record.content_hash,
            size_bytes=record.size_bytes,
            created_at=record.created_at,
            modified_at=record.modified_at,
            mime_type=record.mime_type,
            description=record.description,
            is_private=record.is_private,
            is_encrypted=record.is_encrypted,
            current_version=record.current_version,
            tags=record.tags,
        )


class VersionResponse(BaseModel):
    """Response model for one history entry."""
    file_id: int
    version: int
    content_hash: str
    size_bytes: int
    changed_by: str
    changed_at: int
    note: str

    @classmethod
    def from_record(cls, record: VersionRecord) -> "VersionResponse":
        return cls(
            file_id=record.file_id,
            version=record.version,
            content_hash=record.content_hash,
            size_bytes=record.size_bytes,
            changed_by=record.changed_by,
            changed_at=record.changed_at,
            note=record.note,
        )


class VersionListResponse(BaseModel):
    """Response model for a file's full history."""
    versions: List[VersionResponse]


class GrantAccessRequest(BaseModel):
    """Request model for granting access to another account."""
    can_write: bool = False
    expires_at: Optional[int] = None


class PermissionResponse(BaseModel):
    """Response model for a permission entry."""
    file_id: int
    account_id: str
    can_read: bool
    can_write: bool
    granted_at: int
    expires_at: Optional[int] = None

    @classmethod
    def from_entry(cls, entry: PermissionEntry) -> "PermissionResponse":
        return cls(
            file_id=entry.file_id,
            account_id=entry.account_id,
            can_read=entry.can_read,
            can_write=entry.can_write,
            granted_at=entry.granted_at,
            expires_at=entry.expires_at,
        )


class RevokeAccessResponse(BaseModel):
    """Response model for revoking access."""
    removed: bool


class WriteAccessResponse(BaseModel):
    """Response model for a write access check."""
    file_id: int
    account_id: str
    has_write_access: bool


class StorageMetricsResponse(BaseModel):
    """Response model for an account's storage usage."""
    account_id: str
    total_file_count: int
    total_storage_bytes: int
    last_activity: Optional[int] = None

    @classmethod
    def from_metrics(cls, metrics: StorageMetrics) -> "StorageMetricsResponse":
        return cls(
            account_id=metrics.account_id,
            total_file_count=metrics.total_file_count,
            total_storage_bytes=metrics.total_storage_bytes,
            last_activity=metrics.last_activity,
        )
