"""Process configuration.

Values come from the environment (optionally a .env file loaded by
``api.main``) and are frozen into a single Settings object at startup.
Everything that needs configuration receives it through ``get_settings()``
or FastAPI dependencies, never through ad hoc ``os.getenv`` calls.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    mongo_url: str | None = None
    database_name: str = 'volunteer_connect'
    jwt_secret: str | None = None
    jwt_algorithm: str = 'HS256'
    token_ttl_minutes: int = 60
    bcrypt_rounds: int = 10
    cors_origins: str = '*'
    enforce_donation_ownership: bool = False
    log_level: str = 'INFO'
    port: int = 8000

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            # MONGO_URL is what Railway-style add-ons inject
            mongo_url=os.getenv('MONGO_URI') or os.getenv('MONGO_URL'),
            database_name=os.getenv('MONGODB_DATABASE', cls.database_name),
            jwt_secret=os.getenv('JWT_SECRET') or None,
            jwt_algorithm=os.getenv('JWT_ALGORITHM', cls.jwt_algorithm),
            token_ttl_minutes=_env_int('TOKEN_TTL_MINUTES', cls.token_ttl_minutes),
            bcrypt_rounds=_env_int('BCRYPT_ROUNDS', cls.bcrypt_rounds),
            cors_origins=os.getenv('CORS_ORIGINS', cls.cors_origins),
            enforce_donation_ownership=_env_bool('ENFORCE_DONATION_OWNERSHIP'),
            log_level=os.getenv('LOG_LEVEL', cls.log_level).upper(),
            port=_env_int('PORT', cls.port),
        )


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read once."""
    return Settings.from_env()
