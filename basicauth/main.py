"""
FastAPI Application Entrypoint.

Includes the auth, users and health routers, registers the error handlers,
and creates the user table on startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from basicauth.api import auth_router, health_router, users_router
from basicauth.core.config import get_settings
from basicauth.core.database import init_db
from basicauth.core.exceptions import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: create tables on startup."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    init_db()
    logger.info("Database tables initialized")

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Build the application with all routers and handlers attached."""
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Registration, login, password recovery and user listing.",
        lifespan=lifespan,
    )
    register_exception_handlers(application)

    # The mobile contract expects the endpoints at the server root
    application.include_router(health_router)
    application.include_router(auth_router)
    application.include_router(users_router)
    return application


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on port 8080."""
    import uvicorn

    uvicorn.run("basicauth.main:app", host="0.0.0.0", port=8080)


if __name__ == "__main__":
    run()
