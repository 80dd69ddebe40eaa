"""Stateless input checks shared by every public registry operation.

Each check raises InvalidParametersError on failure and returns nothing on
success, so callers simply run the checks they need before touching storage.
"""

from typing import List, Optional

from common.constants import (
    CONTENT_HASH_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_FILE_SIZE_BYTES,
    MAX_MIME_TYPE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SQLITE_INTEGER,
    MAX_TAG_LENGTH,
    MAX_TAGS,
)
from registry import config
from registry.exceptions import InvalidParametersError


def validate_name(name: str) -> None:
    if not 1 <= len(name) <= MAX_NAME_LENGTH:
        raise InvalidParametersError(
            f"File name must be 1-{MAX_NAME_LENGTH} characters, got {len(name)}"
        )


def validate_description(description: str, field_name: str = "Description") -> None:
    if not 1 <= len(description) <= MAX_DESCRIPTION_LENGTH:
        raise InvalidParametersError(
            f"{field_name} must be 1-{MAX_DESCRIPTION_LENGTH} characters, got {len(description)}"
        )


def validate_mime_type(mime_type: str) -> None:
    if len(mime_type) > MAX_MIME_TYPE_LENGTH:
        raise InvalidParametersError(
            f"MIME type must be at most {MAX_MIME_TYPE_LENGTH} characters, got {len(mime_type)}"
        )


def validate_content_hash(content_hash: str) -> None:
    if len(content_hash) != CONTENT_HASH_LENGTH:
        raise InvalidParametersError(
            f"Content hash must be exactly {CONTENT_HASH_LENGTH} characters, got {len(content_hash)}"
        )


def validate_tags(tags: List[str]) -> None:
    if len(tags) > MAX_TAGS:
        raise InvalidParametersError(f"At most {MAX_TAGS} tags are allowed, got {len(tags)}")
    for tag in tags:
        if len(tag) > MAX_TAG_LENGTH:
            raise InvalidParametersError(
                f"Tag '{tag[:MAX_TAG_LENGTH]}...' exceeds {MAX_TAG_LENGTH} characters"
            )


def validate_file_id(file_id: int) -> None:
    if not 0 < file_id <= MAX_SQLITE_INTEGER:
        raise InvalidParametersError(f"File id must be between 1 and {MAX_SQLITE_INTEGER}, got {file_id}")


def validate_version(version: int) -> None:
    if not 0 < version <= MAX_SQLITE_INTEGER:
        raise InvalidParametersError(f"Version must be between 1 and {MAX_SQLITE_INTEGER}, got {version}")


def validate_size(size_bytes: int) -> None:
    if not 0 <= size_bytes <= MAX_FILE_SIZE_BYTES:
        raise InvalidParametersError(
            f"File size must be between 0 and {MAX_FILE_SIZE_BYTES} bytes, got {size_bytes}"
        )


def validate_not_admin(account_id: str) -> None:
    if account_id == config.ADMIN_ACCOUNT_ID:
        raise InvalidParametersError("The administrator account cannot be granted file access")


def validate_expiry(expires_at: Optional[int], now: int) -> None:
    if expires_at is not None and expires_at <= now:
        raise InvalidParametersError(
            f"Expiry {expires_at} must be later than the current time {now}"
        )
    if expires_at is not None and expires_at > MAX_SQLITE_INTEGER:
        raise InvalidParametersError(f"Expiry must be at most {MAX_SQLITE_INTEGER}, got {expires_at}")
