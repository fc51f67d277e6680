"""API routes package."""

from gateway.routes.container_routes import router as container_router
from gateway.routes.path_routes import router as path_router
from gateway.routes.webhdfs_routes import router as webhdfs_router

__all__ = ["container_router", "path_router", "webhdfs_router"]
