"""Entry point for the emulator gateway service."""

import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.constants import SERVICE_NAME
from common.logging_config import setup_logging
from gateway.config import EMULATOR_HOST, EMULATOR_PORT, EMULATOR_RELOAD
from gateway.routes import container_router, path_router, webhdfs_router
from gateway.schemas.common import ErrorResponse, HealthResponse
from storage_engine.engine import StorageEngine
from storage_engine.exceptions import (
    StorageException,
    ContainerNotFoundError,
    PathNotFoundError,
    ContainerAlreadyExistsError,
    TypeMismatchError,
    DirectoryNotEmptyError,
    InvalidPathError,
    InvalidNameError,
)

logger = setup_logging('gateway')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Log startup and tear the engine down on shutdown.
    """
    logger.info(f"{SERVICE_NAME} starting up on {EMULATOR_HOST}:{EMULATOR_PORT}")
    yield
    logger.info(f"{SERVICE_NAME} shutting down...")
    app.state.engine.close()
    logger.info("Storage engine closed")


async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"

    logger.info(f"Request started: {request.method} {target} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


def _error_response(request: Request, exc: Exception, status_code: int, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"{type(exc).__name__}: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code).model_dump()
    )


async def container_not_found_handler(request: Request, exc: ContainerNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "CONTAINER_NOT_FOUND")


async def path_not_found_handler(request: Request, exc: PathNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "PATH_NOT_FOUND")


async def container_already_exists_handler(request: Request, exc: ContainerAlreadyExistsError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "CONTAINER_ALREADY_EXISTS")


async def type_mismatch_handler(request: Request, exc: TypeMismatchError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "TYPE_MISMATCH")


async def directory_not_empty_handler(request: Request, exc: DirectoryNotEmptyError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "DIRECTORY_NOT_EMPTY")


async def invalid_path_handler(request: Request, exc: InvalidPathError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_PATH")


async def invalid_name_handler(request: Request, exc: InvalidNameError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_NAME")


async def storage_exception_handler(request: Request, exc: StorageException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(detail=str(exc), code="INTERNAL_ERROR").model_dump()
    )


async def not_implemented_handler(request: Request, exc: NotImplementedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Not implemented: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content=ErrorResponse(detail=str(exc), code="NOT_IMPLEMENTED").model_dump()
    )


async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(timezone.utc),
    )


def create_app(engine: Optional[StorageEngine] = None) -> FastAPI:
    """
    Build the gateway application around a storage engine.

    Args:
        engine: Engine to serve; a new empty one is created when None

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="Local hierarchical-namespace object store emulator",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine if engine is not None else StorageEngine()

    app.middleware("http")(log_requests)

    app.add_exception_handler(ContainerNotFoundError, container_not_found_handler)
    app.add_exception_handler(PathNotFoundError, path_not_found_handler)
    app.add_exception_handler(ContainerAlreadyExistsError, container_already_exists_handler)
    app.add_exception_handler(TypeMismatchError, type_mismatch_handler)
    app.add_exception_handler(DirectoryNotEmptyError, directory_not_empty_handler)
    app.add_exception_handler(InvalidPathError, invalid_path_handler)
    app.add_exception_handler(InvalidNameError, invalid_name_handler)
    app.add_exception_handler(StorageException, storage_exception_handler)
    app.add_exception_handler(NotImplementedError, not_implemented_handler)

    # must precede the container routes, which would otherwise capture these paths
    app.add_api_route("/health", health_check, methods=["GET"], response_model=HealthResponse)
    app.include_router(webhdfs_router)
    app.include_router(container_router)
    app.include_router(path_router)

    return app


app = create_app()


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "gateway.main:app",
        host=EMULATOR_HOST,
        port=EMULATOR_PORT,
        reload=EMULATOR_RELOAD
    )


if __name__ == "__main__":
    main()
