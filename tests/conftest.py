"""Shared pytest fixtures for all tests."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from registry.clock import ManualClock
from registry.database import get_db_connection, init_database
from registry.repositories.file_repository import FILE_ID_SEQUENCE
from registry.services.access_service import AccessService
from registry.services.file_service import FileService
from registry.services.quota_service import QuotaService
from registry.services.version_service import VersionService

HASH_A = "a" * 64
HASH_B = "b" * 64
HASH_C = "c" * 64


def last_file_id() -> int:
    """
    Last issued file id, or 0 before the first upload.
    """
    with get_db_connection() as conn:
        row = conn.execute("SELECT value FROM sequences WHERE name = ?", (FILE_ID_SEQUENCE,)).fetchone()
        return row["value"] if row else 0


@pytest.fixture
def test_db(monkeypatch) -> Generator[Path, None, None]:
    """
    Create a temporary registry database for each test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        monkeypatch.setattr("registry.database.DATABASE_PATH", str(db_path))
        monkeypatch.setattr("registry.config.DATABASE_PATH", str(db_path))
        init_database()
        yield db_path


@pytest.fixture
def clock() -> ManualClock:
    """
    Logical clock starting at t=1000 that tests advance explicitly.
    """
    return ManualClock(start=1000)


@pytest.fixture
def file_service(test_db, clock) -> FileService:
    return FileService(clock)


@pytest.fixture
def access_service(test_db, clock) -> AccessService:
    return AccessService(clock)


@pytest.fixture
def version_service(test_db, clock) -> VersionService:
    return VersionService(clock)


@pytest.fixture
def quota_service(test_db) -> QuotaService:
    return QuotaService()


@pytest.fixture
def upload(file_service):
    """
    Upload helper with valid defaults; keyword arguments override them.
    """
    def _upload(owner_id: str = "alice", **overrides) -> int:
        params = {
            "name": "report.pdf",
            "content_hash": HASH_A,
            "size_bytes": 1000,
            "mime_type": "application/pdf",
            "description": "Quarterly report",
            "is_private": True,
            "is_encrypted": False,
            "tags": ["finance", "q3"],
        }
        params.update(overrides)
        return file_service.upload(owner_id=owner_id, **params)

    return _upload
