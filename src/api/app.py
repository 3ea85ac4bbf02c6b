"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapter.mongodb.connection import ping
from adapter.mongodb.indexes import ensure_all_indexes
from api.container import build_container
from api.errors import register_exception_handlers
from api.middleware.request_id import RequestIdMiddleware
from api.routes import auth, health
from api.settings import Settings
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

SERVICE_NAME = "Identity Service"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    container = app.state.container
    client = container.mongo_client
    if client is not None:
        if ping(client):
            db = client[container.settings.mongo_database]
            if ensure_all_indexes(db):
                logger.info("MongoDB indexes verified/created successfully")
            else:
                logger.warning("Failed to create some MongoDB indexes")
        else:
            logger.warning("MongoDB unavailable, skipping index creation")

    yield  # App runs here

    if client is not None:
        client.close()


def _cors_options(cors_origins: str) -> dict:
    # Browsers don't support credentials with a wildcard origin
    if cors_origins == "*":
        logger.warning(
            "CORS configured with wildcard origin ('*'). "
            "For production, set CORS_ORIGINS to specific domains"
        )
        return {"allow_origins": ["*"], "allow_credentials": False}

    origins = [origin.strip() for origin in cors_origins.split(",") if origin.strip()]
    return {"allow_origins": origins, "allow_credentials": True}


def create_app(settings: Settings | None = None, user_repo: UserRepository | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: configuration, read from the environment when omitted
        user_repo: store override (tests pass FakeUserRepository)
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Registers users, authenticates them and issues bearer tokens",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.container = build_container(settings, user_repo=user_repo)

    app.add_middleware(
        CORSMiddleware,
        allow_methods=["*"],
        allow_headers=["*"],
        **_cors_options(settings.cors_origins),
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(health.router)

    @app.get("/")
    def root():
        """Root endpoint."""
        return {"message": "Hello world", "service": SERVICE_NAME, "version": VERSION}

    return app
