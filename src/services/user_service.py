"""User service — read, update and delete stored users."""

import logging
from typing import Callable

from domain.model.errors import ValidationError
from domain.model.user import PROFILE_FIELDS, User, check_update_fields
from port.user_repository import UserRepository
from services.credential_service import hash_password

logger = logging.getLogger(__name__)


def get_user(repo: UserRepository, user_id: str) -> User:
    return repo.get_by_id(user_id)


def list_users(repo: UserRepository) -> list[User]:
    return repo.list_all()


def update_user(
    repo: UserRepository,
    user_id: str,
    fields: dict,
    hasher: Callable[[str], str] = hash_password,
) -> User:
    """Apply a partial update.

    Accepts profile fields plus ``password``, which is stored as a hash.

    Raises:
        ValidationError: unknown or immutable field, or an empty password
        NotFoundError: no such user
        DuplicateError: new email or phone number belongs to another user
    """
    changes = dict(fields)
    password = changes.pop('password', None)
    check_update_fields(changes, PROFILE_FIELDS)

    if password is not None:
        if not password:
            raise ValidationError("Password must not be empty")
        changes['password_hash'] = hasher(password)

    return repo.update(user_id, changes)


def delete_user(repo: UserRepository, user_id: str) -> bool:
    deleted = repo.delete(user_id)
    if deleted:
        logger.info("User deleted", extra={"userId": user_id})
    return deleted
