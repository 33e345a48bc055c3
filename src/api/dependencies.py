from datetime import timedelta
from functools import lru_cache, partial
from typing import Callable

from fastapi import Depends, HTTPException

from adapter.mongodb.connection import get_database
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.otp.redis_otp_verifier import RedisOtpVerifier
from port.otp_verifier import OtpVerifier
from port.user_repository import UserRepository
from services.credential_service import hash_password, to_user
from services.session_service import SessionIssuer
from utils.config import Settings


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings.from_env()


@lru_cache
def _session_issuer(settings: Settings) -> SessionIssuer:
    return SessionIssuer(settings.jwt_secret, expires_in=timedelta(hours=settings.token_expiry_hours))


@lru_cache
def _otp_verifier(redis_url: str) -> RedisOtpVerifier:
    return RedisOtpVerifier(redis_url)


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    """Get the MongoDB user repository, raising 503 if the database is unavailable."""
    db = get_database(settings)
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return MongoUserRepository(db, timeout=settings.mongo_timeout_seconds)


def get_session_issuer(settings: Settings = Depends(get_settings)) -> SessionIssuer:
    return _session_issuer(settings)


def get_otp_verifier(settings: Settings = Depends(get_settings)) -> OtpVerifier:
    return _otp_verifier(settings.redis_url)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> Callable[[str], str]:
    return partial(hash_password, rounds=settings.bcrypt_rounds)


def get_user_transform(hasher: Callable[[str], str] = Depends(get_password_hasher)):
    return partial(to_user, hasher=hasher)
