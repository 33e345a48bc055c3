"""Authentication routes (signup, password login, OTP login)."""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_otp_verifier, get_session_issuer, get_user_repo, get_user_transform
from api.errors import to_http_exception
from api.models import LoginRequest, OtpLoginRequest, SignUpRequest, TokenResponse, UserResponse
from api.security import get_current_user_required
from domain.model.errors import DomainError
from domain.model.user import NewUser, User
from port.otp_verifier import OtpVerifier
from port.user_repository import UserRepository
from services import auth_service
from services.session_service import SessionIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    request: SignUpRequest,
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionIssuer = Depends(get_session_issuer),
    transform: Callable[[NewUser], User] = Depends(get_user_transform),
):
    """Register a new user.

    Raises:
        HTTPException: 409 if the email or phone number is taken, 422 on invalid input
    """
    try:
        token = auth_service.sign_up(repo, issuer, request.to_domain(), transform=transform)
    except DomainError as e:
        raise to_http_exception(e) from e
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """Login with email or phone number and password.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        token = auth_service.login(repo, issuer, request.identifier, request.password)
    except DomainError as e:
        raise to_http_exception(e) from e
    return TokenResponse(token=token)


@router.post("/login/otp", response_model=TokenResponse)
def login_otp(
    request: OtpLoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionIssuer = Depends(get_session_issuer),
    otp_verifier: OtpVerifier = Depends(get_otp_verifier),
):
    """Login with a phone number whose one-time passcode checks out.

    Raises:
        HTTPException: 401 if the passcode is wrong or expired, 404 if no user has this phone
    """
    try:
        if not otp_verifier.verify(request.phone_number, request.code):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired passcode",
            )
        token = auth_service.login_by_otp(repo, issuer, request.phone_number)
    except DomainError as e:
        raise to_http_exception(e) from e
    return TokenResponse(token=token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user_required)):
    """Get current authenticated user info (without password_hash)."""
    return UserResponse.from_domain(current_user)
