"""Session issuer — signs bounded-lifetime JWTs for authenticated users.

Tokens are HS256-signed with one shared secret. That is only sound while a
single service both issues and verifies them.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from domain.model.errors import ConfigurationError, InvalidCredentialsError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
TOKEN_EXPIRY = timedelta(hours=72)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionIssuer:
    def __init__(
        self,
        secret_key: str,
        expires_in: timedelta = TOKEN_EXPIRY,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret_key:
            raise ConfigurationError("Signing secret is required to issue tokens")
        self._secret_key = secret_key
        self._expires_in = expires_in
        self._clock = clock

    def __repr__(self) -> str:
        return f"SessionIssuer(algorithm={JWT_ALGORITHM!r}, expires_in={self._expires_in})"

    def issue(self, user_id: str, email: str, expires_in: timedelta | None = None) -> str:
        """Create a signed token for ``user_id`` valid for ``expires_in``."""
        issued_at = self._clock()
        expire = issued_at + (expires_in if expires_in is not None else self._expires_in)
        payload = {
            "sub": user_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> dict:
        """Verify signature and expiry and return the claims.

        Raises:
            InvalidCredentialsError: token is malformed, tampered with or expired
        """
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidCredentialsError("Invalid authentication credentials") from e

        exp = claims.get("exp")
        if not isinstance(exp, int) or exp <= int(self._clock().timestamp()):
            raise InvalidCredentialsError("Token has expired")
        if not claims.get("sub"):
            raise InvalidCredentialsError("Invalid authentication credentials")
        return claims
