"""Repository layer for data access."""

from registry.repositories.user_repository import UserRepository
from registry.repositories.file_repository import FileRepository
from registry.repositories.tag_repository import TagRepository
from registry.repositories.version_repository import VersionRepository
from registry.repositories.permission_repository import PermissionRepository
from registry.repositories.metrics_repository import MetricsRepository

__all__ = [
    "UserRepository",
    "FileRepository",
    "TagRepository",
    "VersionRepository",
    "PermissionRepository",
    "MetricsRepository",
]
