"""User record routes.

- GET /users: list all users
- GET /users/{user_id}: read one user
- PATCH /users/{user_id}: partial update of the caller's own record
- DELETE /users/{user_id}: delete the caller's own record
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_password_hasher, get_user_repo
from api.errors import to_http_exception
from api.models import UserResponse, UserUpdateRequest
from api.security import get_current_user_required
from domain.model.errors import DomainError, NotFoundError, PermissionDeniedError
from domain.model.user import User
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _require_self(current_user: User, user_id: str) -> None:
    if current_user.id != user_id:
        raise to_http_exception(PermissionDeniedError("You can only modify your own account"))


@router.get("", response_model=list[UserResponse])
def list_users(
    repo: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(get_current_user_required),
):
    try:
        users = user_service.list_users(repo)
    except DomainError as e:
        raise to_http_exception(e) from e
    return [UserResponse.from_domain(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(get_current_user_required),
):
    try:
        user = user_service.get_user(repo, user_id)
    except DomainError as e:
        raise to_http_exception(e) from e
    return UserResponse.from_domain(user)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    request: UserUpdateRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: Callable[[str], str] = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user_required),
):
    """Update only the supplied fields of the caller's own record."""
    _require_self(current_user, user_id)
    try:
        user = user_service.update_user(repo, user_id, request.to_fields(), hasher=hasher)
    except DomainError as e:
        raise to_http_exception(e) from e

    logger.info("User updated via API", extra={"userId": user_id})
    return UserResponse.from_domain(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repo),
    current_user: User = Depends(get_current_user_required),
):
    _require_self(current_user, user_id)
    try:
        deleted = user_service.delete_user(repo, user_id)
        if not deleted:
            raise NotFoundError("User not found")
    except DomainError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
