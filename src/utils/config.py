"""Process configuration loaded once from the environment."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from domain.model.errors import ConfigurationError

DEFAULT_DATABASE_NAME = 'sharir'


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = field(repr=False)
    mongo_url: str = field(default='', repr=False)
    database_name: str = DEFAULT_DATABASE_NAME
    mongo_timeout_seconds: float = 5.0
    bcrypt_rounds: int = 12
    token_expiry_hours: int = 72
    redis_url: str = field(default='', repr=False)

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from the environment (and a .env file if present).

        Raises:
            ConfigurationError: JWT_SECRET is missing or a numeric value is malformed
        """
        load_dotenv()

        jwt_secret = os.getenv('JWT_SECRET', '')
        if not jwt_secret:
            raise ConfigurationError(
                "JWT_SECRET environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return cls(
            jwt_secret=jwt_secret,
            mongo_url=os.getenv('MONGO_URL', ''),
            database_name=os.getenv('MONGODB_DATABASE', DEFAULT_DATABASE_NAME),
            mongo_timeout_seconds=_float_env('MONGO_TIMEOUT_SECONDS', 5.0),
            bcrypt_rounds=_int_env('BCRYPT_ROUNDS', 12),
            token_expiry_hours=_int_env('TOKEN_EXPIRY_HOURS', 72),
            redis_url=os.getenv('REDIS_URL', ''),
        )
