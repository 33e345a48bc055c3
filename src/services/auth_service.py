"""Auth service — signup and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from typing import Callable

from domain.model.errors import DuplicateError, InvalidCredentialsError, NotFoundError, ValidationError
from domain.model.user import NewUser, User
from port.user_repository import UserRepository
from services.credential_service import hash_password, to_user, verify_password
from services.session_service import SessionIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

# Verified against when the identifier is unknown, so every failed login runs bcrypt
_DUMMY_HASH = hash_password("unused-login-placeholder")


def sign_up(
    repo: UserRepository,
    issuer: SessionIssuer,
    new_user: NewUser,
    transform: Callable[[NewUser], User] = to_user,
) -> str:
    """Register a new user and return a session token.

    Raises:
        DuplicateError: email already registered (also raised by the store
            when a concurrent signup wins the race)
        ValidationError: no password, or neither email nor phone number
        InfrastructureError: store failure, propagated unchanged
    """
    if not new_user.password:
        raise ValidationError("Password is required")
    if not new_user.email and not new_user.phone_number:
        raise ValidationError("Email or phone number is required")

    try:
        existing = repo.get_by_email(new_user.email)
    except NotFoundError:
        existing = None

    if existing is not None and existing.email == new_user.email:
        raise DuplicateError("User with this email already exists")

    user = repo.create(transform(new_user))
    logger.info("User signed up", extra={"userId": user.id})
    return issuer.issue(user.id, user.email)


def _find_login_user(repo: UserRepository, identifier: str) -> User:
    if '@' in identifier:
        return repo.get_by_email(identifier)
    return repo.get_by_phone(identifier)


def login(repo: UserRepository, issuer: SessionIssuer, identifier: str, password: str) -> str:
    """Authenticate by email or phone number plus password.

    Doesn't reveal whether the identifier exists.

    Raises:
        InvalidCredentialsError: unknown identifier or wrong password
    """
    try:
        user = _find_login_user(repo, identifier)
    except NotFoundError:
        verify_password(password, _DUMMY_HASH)
        logger.info("Login failed: unknown identifier")
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE) from None

    if not verify_password(password, user.password_hash):
        logger.info("Login failed: password mismatch", extra={"userId": user.id})
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    logger.info("User logged in", extra={"userId": user.id})
    return issuer.issue(user.id, user.email)


def login_by_otp(repo: UserRepository, issuer: SessionIssuer, phone_number: str) -> str:
    """Issue a token for the owner of an OTP-verified phone number.

    The caller must have verified the passcode before calling this.

    Raises:
        NotFoundError: no user with this phone number
    """
    user = repo.get_by_phone(phone_number)
    logger.info("User logged in via OTP", extra={"userId": user.id})
    return issuer.issue(user.id, user.email)
