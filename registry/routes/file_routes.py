"""File registry API routes."""

from fastapi import APIRouter, Depends, status

from registry.auth import get_current_user
from registry.schemas.files import (
    FileInfoResponse,
    GrantAccessRequest,
    PermissionResponse,
    RevokeAccessResponse,
    UpdateContentRequest,
    UpdateContentResponse,
    UpdateMetadataRequest,
    UploadFileRequest,
    UploadFileResponse,
    VersionListResponse,
    VersionResponse,
    WriteAccessResponse,
)
from registry.exceptions import PermissionNotFoundError
from registry.schemas.common import ErrorResponse
from registry.services.access_service import AccessService
from registry.services.file_service import FileService
from registry.services.version_service import VersionService
from registry.types import MetadataPatch

router = APIRouter(
    prefix="/files",
    tags=["Files"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.post("", response_model=UploadFileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    request: UploadFileRequest,
    current_user: str = Depends(get_current_user)
):
    """
    Register a new file owned by the caller.

    Raises:
        - 400: Invalid parameters
        - 401: Invalid or missing API Key
        - 507: Account already owns the maximum number of files
    """
    file_service = FileService()

    file_id = file_service.upload(
        owner_id=current_user,
        name=request.name,
        content_hash=request.content_hash,
        size_bytes=request.size_bytes,
        mime_type=request.mime_type,
        description=request.description,
        is_private=request.is_private,
        is_encrypted=request.is_encrypted,
        tags=request.tags,
    )

    return UploadFileResponse(file_id=file_id)


@router.get("/{file_id}", response_model=FileInfoResponse)
async def get_file_info(
    file_id: int,
    current_user: str = Depends(get_current_user)
):
    """
    Fetch a file's metadata and tags.

    Raises:
        - 403: File is private and the caller has no active grant
        - 404: File not found
    """
    record = FileService().get_file_info(file_id, current_user)
    return FileInfoResponse.from_record(record)


@router.put("/{file_id}/content", response_model=UpdateContentResponse)
async def update_content(
    file_id: int,
    request: UpdateContentRequest,
    current_user: str = Depends(get_current_user)
):
    """
    Record new content for a file, appending one version.

    Raises:
        - 400: Invalid parameters
        - 403: Caller is neither owner nor holder of an active write grant
        - 404: File not found
    """
    version = FileService().update(
        file_id,
        current_user,
        content_hash=request.content_hash,
        size_bytes=request.size_bytes,
        note=request.note,
    )
    return UpdateContentResponse(file_id=file_id, version=version)


@router.patch("/{file_id}", response_model=FileInfoResponse)
async def update_metadata(
    file_id: int,
    request: UpdateMetadataRequest,
    current_user: str = Depends(get_current_user)
):
    """
    Edit name, description, tags or visibility. Owner only.
    """
    patch = MetadataPatch(
        name=request.name,
        description=request.description,
        tags=request.tags,
        is_private=request.is_private,
    )
    record = FileService().update_metadata(file_id, current_user, patch)
    return FileInfoResponse.from_record(record)


@router.get("/{file_id}/versions", response_model=VersionListResponse)
async def list_versions(
    file_id: int,
    current_user: str = Depends(get_current_user)
):
    versions = VersionService().list_versions(file_id, current_user)
    return VersionListResponse(versions=[VersionResponse.from_record(v) for v in versions])


@router.get("/{file_id}/versions/{version}", response_model=VersionResponse)
async def get_version(
    file_id: int,
    version: int,
    current_user: str = Depends(get_current_user)
):
    record = VersionService().get_version(file_id, version, current_user)
    return VersionResponse.from_record(record)


@router.put("/{file_id}/permissions/{grantee_id}", response_model=PermissionResponse)
async def grant_access(
    file_id: int,
    grantee_id: str,
    request: GrantAccessRequest,
    current_user: str = Depends(get_current_user)
):
    """
    Grant read, and optionally write, access. Replaces any existing grant.

    Raises:
        - 400: Grantee is the administrator or expiry is not in the future
        - 403: Caller does not own the file
        - 404: File not found
    """
    entry = AccessService().grant_access(
        file_id,
        current_user,
        grantee_id,
        can_write=request.can_write,
        expires_at=request.expires_at,
    )
    return PermissionResponse.from_entry(entry)


@router.delete("/{file_id}/permissions/{grantee_id}", response_model=RevokeAccessResponse)
async def revoke_access(
    file_id: int,
    grantee_id: str,
    current_user: str = Depends(get_current_user)
):
    removed = AccessService().revoke_access(file_id, current_user, grantee_id)
    return RevokeAccessResponse(removed=removed)


@router.get("/{file_id}/permissions/{grantee_id}", response_model=PermissionResponse)
async def get_permission(
    file_id: int,
    grantee_id: str,
    current_user: str = Depends(get_current_user)
):
    entry = AccessService().get_permission(file_id, current_user, grantee_id)
    if entry is None:
        raise PermissionNotFoundError(f"No permission entry for {grantee_id} on file {file_id}")
    return PermissionResponse.from_entry(entry)


@router.get("/{file_id}/write-access/{account_id}", response_model=WriteAccessResponse)
async def check_write_access(
    file_id: int,
    account_id: str,
    current_user: str = Depends(get_current_user)
):
    """
    Whether an account holds an active write grant. Callable by any account.
    """
    allowed = AccessService().check_write_access(file_id, account_id)
    return WriteAccessResponse(file_id=file_id, account_id=account_id, has_write_access=allowed)
