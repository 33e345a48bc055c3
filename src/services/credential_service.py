"""Credential transform — turns a signup payload into a storable identity.

Identifier generation, the clock and password hashing are passed in as
callables so callers (and tests) control them.
"""

import uuid
from datetime import datetime, timezone
from typing import Callable

import bcrypt

from domain.model.errors import ValidationError
from domain.model.user import NewUser, User

BCRYPT_ROUNDS = 12
# bcrypt only uses the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt using a fresh random salt.

    Raises:
        ValidationError: password longer than bcrypt accepts
    """
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def new_user_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_user(
    new_user: NewUser,
    *,
    clock: Callable[[], datetime] = utcnow,
    new_id: Callable[[], str] = new_user_id,
    hasher: Callable[[str], str] = hash_password,
) -> User:
    """Build the stored User for a signup payload.

    Non-secret fields are copied verbatim; the plaintext password is replaced
    by its hash. ``new_user`` is left untouched.
    """
    return User(
        id=new_id(),
        created_at=clock(),
        password_hash=hasher(new_user.password),
        name=new_user.name,
        username=new_user.username,
        email=new_user.email,
        phone_number=new_user.phone_number,
        profile_pic=new_user.profile_pic,
        user_type=new_user.user_type,
    )
