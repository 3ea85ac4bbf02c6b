"""Startup wiring.

Builds every collaborator once per process, leaf components first and the
identity service last. The result is stored on ``app.state.container`` and
handed to routes through ``api.dependencies``.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from pymongo import MongoClient

from adapter.mongodb.connection import create_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.bcrypt_hasher import BcryptPasswordHasher
from adapter.security.jwt_token_service import JWTTokenService
from api.settings import Settings
from port.password_hasher import PasswordHasher
from port.token_service import TokenService
from port.user_repository import UserRepository
from services.identity_service import IdentityService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    settings: Settings
    password_hasher: PasswordHasher
    token_service: TokenService
    user_repo: UserRepository
    identity_service: IdentityService
    mongo_client: MongoClient | None = None


def build_container(settings: Settings, user_repo: UserRepository | None = None) -> Container:
    """Construct all dependencies. ``user_repo`` overrides the MongoDB store."""
    if settings.uses_default_secret:
        logger.warning(
            "JWT_SECRET not set, using the development fallback secret. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    token_service = JWTTokenService(
        settings.jwt_secret, ttl=timedelta(hours=settings.token_ttl_hours)
    )

    mongo_client = None
    if user_repo is None:
        mongo_client = create_mongodb_client(settings.mongo_url)
        user_repo = MongoUserRepository(mongo_client[settings.mongo_database])

    identity_service = IdentityService(user_repo, password_hasher, token_service)

    return Container(
        settings=settings,
        password_hasher=password_hasher,
        token_service=token_service,
        user_repo=user_repo,
        identity_service=identity_service,
        mongo_client=mongo_client,
    )
