"""Tests for read-gated version history lookups."""

import pytest

from registry.exceptions import AccessDeniedError, FileNotFoundError, InvalidParametersError, VersionNotFoundError
from tests.conftest import HASH_A, HASH_B


class TestVersionHistory:
    def test_point_lookup(self, upload, file_service, version_service, clock):
        file_id = upload(size_bytes=10)
        clock.advance(2)
        file_service.update(file_id, "alice", HASH_B, 20, "Fix typo")

        first = version_service.get_version(file_id, 1, "alice")
        second = version_service.get_version(file_id, 2, "alice")

        assert (first.content_hash, first.size_bytes, first.changed_at) == (HASH_A, 10, 1000)
        assert (second.content_hash, second.size_bytes, second.changed_at) == (HASH_B, 20, 1002)
        assert second.note == "Fix typo"

    def test_unknown_version(self, upload, version_service):
        file_id = upload()
        with pytest.raises(VersionNotFoundError):
            version_service.get_version(file_id, 2, "alice")

    def test_unknown_version_is_a_file_not_found(self, upload, version_service):
        file_id = upload()
        with pytest.raises(FileNotFoundError):
            version_service.get_version(file_id, 9, "alice")

    @pytest.mark.parametrize("version", [0, 2 ** 63])
    def test_version_out_of_range(self, upload, version_service, version):
        file_id = upload()
        with pytest.raises(InvalidParametersError):
            version_service.get_version(file_id, version, "alice")

    def test_unknown_file(self, version_service):
        with pytest.raises(FileNotFoundError):
            version_service.list_versions(8, "alice")

    def test_private_history_denied_to_strangers(self, upload, version_service):
        file_id = upload(is_private=True)
        with pytest.raises(AccessDeniedError):
            version_service.get_version(file_id, 1, "bob")
        with pytest.raises(AccessDeniedError):
            version_service.list_versions(file_id, "bob")

    def test_public_history_readable(self, upload, version_service):
        file_id = upload(is_private=False)
        assert [v.version for v in version_service.list_versions(file_id, "bob")] == [1]

    def test_grantee_loses_history_on_expiry(self, upload, access_service, version_service, clock):
        file_id = upload(is_private=True)
        access_service.grant_access(file_id, "alice", "bob", can_write=False, expires_at=1001)

        assert version_service.get_version(file_id, 1, "bob").version == 1
        clock.advance(1)
        with pytest.raises(AccessDeniedError):
            version_service.get_version(file_id, 1, "bob")
