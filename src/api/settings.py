"""Application settings loaded from environment variables.

Values come from the process environment (populated from a ``.env`` file by
``load_dotenv()`` in the entry point). Every setting has a documented
fallback so the service starts with no configuration at all; the JWT
fallback secret is for local development only and triggers a warning.
"""

import os
from dataclasses import dataclass

DEFAULT_JWT_SECRET = "dev-insecure-secret"
MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 31


def _get_int(env: dict, key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _get_bcrypt_rounds(env: dict, default: int) -> int:
    rounds = _get_int(env, "BCRYPT_ROUNDS", default)
    if not MIN_BCRYPT_ROUNDS <= rounds <= MAX_BCRYPT_ROUNDS:
        raise ValueError(
            f"BCRYPT_ROUNDS must be between {MIN_BCRYPT_ROUNDS} and {MAX_BCRYPT_ROUNDS}, got {rounds}"
        )
    return rounds


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = DEFAULT_JWT_SECRET
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 12
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "identity"
    host: str = "0.0.0.0"
    port: int = 3333
    cors_origins: str = "*"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: dict | None = None) -> "Settings":
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            jwt_secret=env.get("JWT_SECRET") or defaults.jwt_secret,
            token_ttl_hours=_get_int(env, "JWT_TTL_HOURS", defaults.token_ttl_hours),
            bcrypt_rounds=_get_bcrypt_rounds(env, defaults.bcrypt_rounds),
            mongo_url=env.get("MONGO_URL") or defaults.mongo_url,
            mongo_database=env.get("MONGODB_DATABASE") or defaults.mongo_database,
            host=env.get("SERVER_HOST") or defaults.host,
            port=_get_int(env, "SERVER_PORT", defaults.port),
            cors_origins=env.get("CORS_ORIGINS") or defaults.cors_origins,
            log_level=env.get("LOG_LEVEL") or defaults.log_level,
        )

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET
