"""Authentication and security utilities."""

import uuid

import bcrypt
from fastapi import Header, Request

from registry.config import API_KEY_PREFIX
from registry.exceptions import InvalidAPIKeyError


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: Plain text password to verify
        password_hash: Bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


def generate_api_key() -> str:
    """
    Generate a new API Key with the configured prefix.

    Returns:
        API Key string in format: {prefix}{uuid4}
    """
    return f"{API_KEY_PREFIX}{uuid.uuid4()}"


async def get_current_user(request: Request, authorization: str = Header(...)) -> str:
    """
    FastAPI dependency resolving the calling account from its API Key.

    Args:
        authorization: Authorization header value (format: "Bearer <api_key>")

    Returns:
        account id of the authenticated user

    Raises:
        InvalidAPIKeyError: if the header is malformed or the key is unknown
    """
    from registry.services.auth_service import AuthService

    if not authorization.startswith("Bearer "):
        raise InvalidAPIKeyError("Invalid authorization header format")

    api_key = authorization[len("Bearer "):]
    user_id = AuthService().validate_api_key(api_key)
    if user_id is None:
        raise InvalidAPIKeyError("Invalid or expired API key")

    request.state.user_id = user_id
    return user_id
