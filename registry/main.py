"""Entry point for the registry service."""

import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from registry.config import REGISTRY_HOST, REGISTRY_PORT
from registry.database import init_database
from registry.exceptions import (
    RegistryError,
    AdminOnlyError,
    FileNotFoundError,
    PermissionNotFoundError,
    AccessDeniedError,
    InvalidParametersError,
    DuplicateFileError,
    StorageExceededError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    InvalidAPIKeyError,
)
from registry.routes import account_router, auth_router, file_router

logger = setup_logging('registry')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Initialize the database before serving requests.
    """
    logger.info("Registry service starting up...")
    init_database()
    logger.info("Database initialized")
    yield
    logger.info("Registry service shutting down")


app = FastAPI(
    title="File Metadata Registry",
    description="Ownership, versioning, access grants and quotas for off-chain files",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time
    user_id = getattr(request.state, 'user_id', None)

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s "
        f"[request_id={request_id}] [user_id={user_id or 'anonymous'}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


def _error_response(request: Request, exc: Exception, status_code: int, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    user_id = getattr(request.state, 'user_id', 'unknown')
    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc} [request_id={request_id}] [user_id={user_id}] path={request.url.path}"
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": code})


@app.exception_handler(AdminOnlyError)
async def admin_only_handler(request: Request, exc: AdminOnlyError):
    return _error_response(request, exc, status.HTTP_403_FORBIDDEN, "ADMIN_ONLY")


@app.exception_handler(FileNotFoundError)
async def file_not_found_handler(request: Request, exc: FileNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "FILE_NOT_FOUND")


@app.exception_handler(PermissionNotFoundError)
async def permission_not_found_handler(request: Request, exc: PermissionNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "PERMISSION_NOT_FOUND")


@app.exception_handler(AccessDeniedError)
async def access_denied_handler(request: Request, exc: AccessDeniedError):
    return _error_response(request, exc, status.HTTP_403_FORBIDDEN, "ACCESS_DENIED")


@app.exception_handler(InvalidParametersError)
async def invalid_parameters_handler(request: Request, exc: InvalidParametersError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_PARAMETERS")


@app.exception_handler(DuplicateFileError)
async def duplicate_file_handler(request: Request, exc: DuplicateFileError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "DUPLICATE_FILE")


@app.exception_handler(StorageExceededError)
async def storage_exceeded_handler(request: Request, exc: StorageExceededError):
    return _error_response(request, exc, status.HTTP_507_INSUFFICIENT_STORAGE, "STORAGE_EXCEEDED")


@app.exception_handler(UserAlreadyExistsError)
async def user_already_exists_handler(request: Request, exc: UserAlreadyExistsError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "USER_ALREADY_EXISTS")


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS")


@app.exception_handler(InvalidAPIKeyError)
async def invalid_api_key_handler(request: Request, exc: InvalidAPIKeyError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "INVALID_API_KEY")


@app.exception_handler(RegistryError)
async def registry_error_handler(request: Request, exc: RegistryError):
    return _error_response(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR")


app.include_router(auth_router)
app.include_router(file_router)
app.include_router(account_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "File Metadata Registry API", "status": "running"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "registry.main:app",
        host=REGISTRY_HOST,
        port=REGISTRY_PORT,
        log_level="info",
    )


if __name__ == "__main__":
    main()
