"""Redis implementation of OtpVerifier.

The delivery service stores each issued passcode under
``sharir:otp:{phone_number}`` with its own TTL. Verification consumes the
stored code with GETDEL, so a code is checked at most once whether or not
the attempt matches.
"""

import hmac
import logging
from typing import Optional

import redis
from redis.exceptions import RedisError

from domain.model.errors import InfrastructureError

logger = logging.getLogger(__name__)

KEY_PREFIX = 'sharir:otp:'


class RedisOtpVerifier:
    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self._redis_url = redis_url
        self._client_cache: Optional[redis.Redis] = client

    def _get_client(self) -> redis.Redis:
        if self._client_cache is not None:
            return self._client_cache

        if not self._redis_url:
            logger.error("[REDIS] REDIS_URL not configured, OTP verification unavailable")
            raise InfrastructureError("OTP store not configured")

        try:
            self._client_cache = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        except (RedisError, ValueError) as e:
            logger.error(f"[REDIS] Invalid REDIS_URL: {str(e)[:200]}")
            raise InfrastructureError("OTP store not configured") from e
        return self._client_cache

    def verify(self, phone_number: str, code: str) -> bool:
        if not phone_number or not code:
            return False

        client = self._get_client()
        try:
            stored = client.getdel(f"{KEY_PREFIX}{phone_number}")
        except RedisError as e:
            logger.error("Failed to read OTP", extra={"error": str(e)[:200]})
            raise InfrastructureError("OTP store unavailable") from e

        if stored is None:
            logger.info("No pending OTP for phone number")
            return False
        return hmac.compare_digest(stored.encode('utf-8'), code.encode('utf-8'))
