"""Authentication API routes."""

from fastapi import APIRouter, status

from registry.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse
)
from registry.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """
    Register a new account.

    Returns:
        - api_key: Generated API Key with 'fmr_' prefix
        - user_id: Account id used as the owner/grantee identity

    Raises:
        - 400: Username already exists
    """
    auth_service = AuthService()
    api_key, user_id = auth_service.register_user(request.username, request.password)

    return RegisterResponse(api_key=api_key, user_id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """
    Authenticate and issue a new API Key, replacing the previous one.

    Raises:
        - 401: Invalid credentials
    """
    auth_service = AuthService()
    api_key = auth_service.login_user(request.username, request.password)

    return LoginResponse(api_key=api_key)
