"""Project-wide limits for file metadata records."""

MAX_NAME_LENGTH: int = 64
MAX_DESCRIPTION_LENGTH: int = 256
MAX_MIME_TYPE_LENGTH: int = 32
CONTENT_HASH_LENGTH: int = 64  # hex-encoded SHA-256
MAX_TAGS: int = 10
MAX_TAG_LENGTH: int = 32
MAX_FILE_SIZE_BYTES: int = 1024 * 1024 * 1024  # 1 GiB
MAX_FILES_PER_ACCOUNT: int = 100

INITIAL_VERSION_NOTE: str = "Initial file upload"

MAX_SQLITE_INTEGER: int = 2 ** 63 - 1
