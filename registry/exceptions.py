"""Custom exception classes for the registry."""


class RegistryError(Exception):
    """
    Base exception class for all registry errors.
    """
    pass


class AdminOnlyError(RegistryError):
    """
    Raised when an operation is restricted to the administrator account.
    """
    pass


class FileNotFoundError(RegistryError):
    """
    Raised when a referenced file id has no record.
    """
    pass


class VersionNotFoundError(FileNotFoundError):
    """
    Raised when a file exists but the requested version does not.
    """
    pass


class PermissionNotFoundError(FileNotFoundError):
    """
    Raised when a file exists but holds no entry for the requested grantee.
    """
    pass


class AccessDeniedError(RegistryError):
    """
    Raised when the caller lacks the required read, write or ownership rights.
    """
    pass


class InvalidParametersError(RegistryError):
    """
    Raised when an input fails validation.
    """
    pass


class DuplicateFileError(RegistryError):
    """
    Raised when a file duplicates an existing one.
    """
    pass


class StorageExceededError(RegistryError):
    """
    Raised when an account has reached its file count quota.
    """
    pass


class UserAlreadyExistsError(RegistryError):
    """
    Raised when attempting to register a username that already exists.
    """
    pass


class InvalidCredentialsError(RegistryError):
    """
    Raised when login credentials are invalid.
    """
    pass


class InvalidAPIKeyError(RegistryError):
    """
    Raised when an API Key is invalid.
    """
    pass
