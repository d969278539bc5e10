"""API routes package."""

from hostnote.routes.file_routes import router as file_router
from hostnote.routes.public_routes import router as public_router
from hostnote.routes.user_routes import router as user_router

__all__ = ["file_router", "public_router", "user_router"]
