"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    """Request model for account registration."""
    username: str
    password: str


class RegisterResponse(BaseModel):
    """Response model for account registration."""
    api_key: str
    user_id: str


class LoginRequest(BaseModel):
    """Request model for login."""
    username: str
    password: str


class LoginResponse(BaseModel):
    """Response model for login."""
    api_key: str
