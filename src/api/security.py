"""Bearer token authentication dependencies."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_session_issuer, get_user_repo
from api.errors import to_http_exception
from domain.model.errors import DomainError, InvalidCredentialsError, NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository
from services.session_service import SessionIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: SessionIssuer = Depends(get_session_issuer),
    user_repo: UserRepository = Depends(get_user_repo),
) -> User:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        claims = issuer.decode(credentials.credentials)
    except InvalidCredentialsError:
        raise _unauthorized("Invalid authentication credentials") from None

    try:
        return user_repo.get_by_id(claims["sub"])
    except NotFoundError:
        raise _unauthorized("User not found") from None
    except DomainError as e:
        raise to_http_exception(e) from e
