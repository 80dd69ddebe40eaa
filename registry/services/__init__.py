"""Service layer for business logic."""

from registry.services.auth_service import AuthService
from registry.services.quota_service import QuotaService
from registry.services.access_service import AccessService
from registry.services.version_service import VersionService
from registry.services.file_service import FileService

__all__ = [
    "AuthService",
    "QuotaService",
    "AccessService",
    "VersionService",
    "FileService",
]
