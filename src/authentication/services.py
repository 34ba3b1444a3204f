"""JWT issuance and decoding plus the Redis-backed access-token blocklist."""

import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import redis
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed

from core.redis_client import get_redis_client


class BlocklistUnavailable(Exception):
    """Raised when Redis blocklist cannot be checked (fail-closed)."""


class TokenService:
    """Issue, decode, and revoke access tokens."""

    ACCESS_TTL = timedelta(hours=1)
    ALGORITHM = "HS256"
    BLOCKLIST_PREFIX = "blocklist:token:"

    @classmethod
    def generate_access_token(cls, user) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.pk),
            "jti": str(uuid.uuid4()),
            "exp": int((now + cls.ACCESS_TTL).timestamp()),
            "iat": int(now.timestamp()),
            "username": user.username,
        }
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=cls.ALGORITHM)

    @classmethod
    def decode_token(cls, token: str) -> dict[str, Any]:
        """Decode and validate a JWT, mapping failures to ``AuthenticationFailed``."""

        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[cls.ALGORITHM])
        except jwt.ExpiredSignatureError as exc:  # pragma: no cover - simple mapping
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:  # pragma: no cover - simple mapping
            raise AuthenticationFailed("Invalid token") from exc

    @classmethod
    def block_token(cls, jti: str, exp: int) -> None:
        """Blocklist a token id until the token would have expired anyway."""

        client = get_redis_client()
        ttl_seconds = max(0, exp - int(time.time()))
        try:
            client.setex(f"{cls.BLOCKLIST_PREFIX}{jti}", ttl_seconds, "1")
        except redis.RedisError as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while blocklisting") from exc

    @classmethod
    def is_token_blocked(cls, jti: str) -> bool:
        client = get_redis_client()
        try:
            return client.get(f"{cls.BLOCKLIST_PREFIX}{jti}") is not None
        except redis.RedisError as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while checking blocklist") from exc


__all__ = ["TokenService", "BlocklistUnavailable"]
