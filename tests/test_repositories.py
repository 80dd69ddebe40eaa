"""Integration tests for database repositories."""

from datetime import datetime, timezone

import pytest
import sqlite3

from registry.database import get_db_connection, write_transaction
from registry.repositories.file_repository import FileRepository
from registry.repositories.metrics_repository import MetricsRepository
from registry.repositories.permission_repository import PermissionRepository
from registry.repositories.tag_repository import TagRepository
from registry.repositories.user_repository import UserRepository
from registry.repositories.version_repository import VersionRepository
from registry.types import FileRecord, PermissionEntry, StorageMetrics, VersionRecord
from tests.conftest import last_file_id


def make_record(file_id: int, owner_id: str = "alice") -> FileRecord:
    return FileRecord(
        file_id=file_id,
        owner_id=owner_id,
        name="notes.txt",
        content_hash="0" * 64,
        size_bytes=12,
        created_at=10,
        modified_at=10,
        mime_type="text/plain",
        description="Meeting notes",
        is_private=False,
        is_encrypted=True,
        current_version=1,
    )


class TestFileRepository:
    def test_allocate_file_id_is_sequential(self, test_db):
        with write_transaction() as conn:
            assert FileRepository.allocate_file_id(conn) == 1
            assert FileRepository.allocate_file_id(conn) == 2
        assert last_file_id() == 2

    def test_rolled_back_allocation_is_reused(self, test_db):
        with pytest.raises(RuntimeError):
            with write_transaction() as conn:
                FileRepository.allocate_file_id(conn)
                raise RuntimeError("abort")

        assert last_file_id() == 0
        with write_transaction() as conn:
            assert FileRepository.allocate_file_id(conn) == 1

    def test_create_and_get(self, test_db):
        with write_transaction() as conn:
            FileRepository.create_file(make_record(1), conn=conn)

        fetched = FileRepository.get_by_id(1)
        assert fetched == make_record(1)
        assert fetched.is_private is False
        assert fetched.is_encrypted is True

    def test_get_nonexistent(self, test_db):
        assert FileRepository.get_by_id(404) is None

    def test_update_content(self, test_db):
        with write_transaction() as conn:
            FileRepository.create_file(make_record(1), conn=conn)
            FileRepository.update_content(1, "9" * 64, 99, modified_at=20, current_version=2, conn=conn)

        fetched = FileRepository.get_by_id(1)
        assert (fetched.content_hash, fetched.size_bytes, fetched.modified_at, fetched.current_version) == (
            "9" * 64, 99, 20, 2
        )

    def test_sum_size_by_owner(self, test_db):
        with write_transaction() as conn:
            FileRepository.create_file(make_record(1, "alice"), conn=conn)
            FileRepository.create_file(make_record(2, "alice"), conn=conn)
            FileRepository.create_file(make_record(3, "bob"), conn=conn)

        assert FileRepository.sum_size_by_owner("alice") == 24
        assert FileRepository.sum_size_by_owner("carol") == 0


class TestTagRepository:
    def test_replace_keeps_order(self, test_db):
        with write_transaction() as conn:
            FileRepository.create_file(make_record(1), conn=conn)
            TagRepository.replace_tags(1, ["zeta", "alpha", "mid"], conn=conn)

        assert TagRepository.get_tags_for_file(1) == ["zeta", "alpha", "mid"]

    def test_replace_is_wholesale(self, test_db):
        with write_transaction() as conn:
            FileRepository.create_file(make_record(1), conn=conn)
            TagRepository.replace_tags(1, ["a", "b"], conn=conn)
            TagRepository.replace_tags(1, ["c"], conn=conn)

        assert TagRepository.get_tags_for_file(1) == ["c"]


class TestVersionRepository:
    def test_versions_cannot_be_rewritten(self, test_db):
        version = VersionRecord(1, 1, "0" * 64, 12, "alice", 10, "Initial file upload")
        with write_transaction() as conn:
            FileRepository.create_file(make_record(1), conn=conn)
            VersionRepository.append_version(version, conn=conn)

        with pytest.raises(sqlite3.IntegrityError):
            with write_transaction() as conn:
                VersionRepository.append_version(version, conn=conn)

        assert VersionRepository.list_versions(1) == [version]
        assert VersionRepository.get_version(1, 2) is None


class TestPermissionRepository:
    def test_upsert_overwrites(self, test_db):
        with write_transaction() as conn:
            PermissionRepository.upsert(PermissionEntry(1, "bob", True, True, 10, 50), conn=conn)
            PermissionRepository.upsert(PermissionEntry(1, "bob", True, False, 11), conn=conn)

        assert PermissionRepository.get(1, "bob") == PermissionEntry(1, "bob", True, False, 11, None)

    def test_entry_activity(self):
        entry = PermissionEntry(1, "bob", True, True, granted_at=10, expires_at=20)
        assert entry.is_active(19) is True
        assert entry.is_active(20) is False
        assert PermissionEntry(1, "bob", True, True, granted_at=10).is_active(10 ** 9) is True


class TestMetricsRepository:
    def test_missing_row_is_zero(self, test_db):
        assert MetricsRepository.get("ghost") == StorageMetrics(account_id="ghost")

    def test_save_and_overwrite(self, test_db):
        with write_transaction() as conn:
            MetricsRepository.save(StorageMetrics("alice", 1, 100, 5), conn=conn)
            MetricsRepository.save(StorageMetrics("alice", 2, 150, 6), conn=conn)

        assert MetricsRepository.get("alice") == StorageMetrics("alice", 2, 150, 6)


class TestUserRepository:
    def test_create_and_lookup(self, test_db):
        created = UserRepository.create_user(
            user_id="user-123",
            username="testuser",
            password_hash="hash123",
            api_key="key123",
            created_at=datetime.now(timezone.utc),
        )

        assert UserRepository.get_by_username("testuser").user_id == created.user_id
        assert UserRepository.get_by_api_key("key123").username == "testuser"
        assert UserRepository.get_by_username("testuser").password_hash == "hash123"
        assert UserRepository.get_by_username("nobody") is None

    def test_duplicate_username(self, test_db):
        now = datetime.now(timezone.utc)
        UserRepository.create_user("u1", "dup", "h", "k1", now)
        with pytest.raises(sqlite3.IntegrityError):
            UserRepository.create_user("u2", "dup", "h", "k2", now)

    def test_update_api_key(self, test_db):
        now = datetime.now(timezone.utc)
        UserRepository.create_user("u1", "name", "h", "old-key", now)
        UserRepository.update_api_key("u1", "new-key", now)

        assert UserRepository.get_by_api_key("old-key") is None
        assert UserRepository.get_by_api_key("new-key").user_id == "u1"


class TestWriteTransaction:
    def test_rollback_discards_all_statements(self, test_db):
        with pytest.raises(ValueError):
            with write_transaction() as conn:
                FileRepository.create_file(make_record(1), conn=conn)
                MetricsRepository.save(StorageMetrics("alice", 1, 12, 10), conn=conn)
                raise ValueError("abort")

        with get_db_connection() as conn:
            assert conn.execute("SELECT COUNT(*) FROM files").fetchone()[0] == 0
            assert conn.execute("SELECT COUNT(*) FROM storage_metrics").fetchone()[0] == 0
