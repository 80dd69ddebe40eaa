"""API routes package."""

from registry.routes.auth_routes import router as auth_router
from registry.routes.file_routes import router as file_router
from registry.routes.account_routes import router as account_router

__all__ = ["auth_router", "file_router", "account_router"]
