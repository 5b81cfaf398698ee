from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import MSG_TOKEN_INVALID, TOKEN_ALGORITHM, TOKEN_TTL_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.model import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Typed view of a decoded session token."""

    user_id: int
    username: str
    role: Role
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TokenClaims":
        """Build claims from a decoded JWT payload, failing closed on any bad field."""

        user_id = payload.get("userId")
        username = payload.get("username")
        role = payload.get("role")
        iat = payload.get("iat")
        exp = payload.get("exp")

        if isinstance(user_id, bool) or not isinstance(user_id, (int, str)):
            raise AuthenticationError(MSG_TOKEN_INVALID)
        try:
            user_id = int(user_id)
        except ValueError:
            raise AuthenticationError(MSG_TOKEN_INVALID)
        if not isinstance(username, str) or not username:
            raise AuthenticationError(MSG_TOKEN_INVALID)
        try:
            role = Role(role)
        except ValueError:
            raise AuthenticationError(MSG_TOKEN_INVALID)
        for stamp in (iat, exp):
            if isinstance(stamp, bool) or not isinstance(stamp, (int, float)):
                raise AuthenticationError(MSG_TOKEN_INVALID)

        return cls(
            user_id=user_id,
            username=username,
            role=role,
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )


class TokenService:
    """Issue and verify signed, time-limited session tokens.

    Tokens are not stored server-side and cannot be revoked: a leaked token
    stays valid until it expires.
    """

    def __init__(self, secret: str, *, ttl: timedelta = timedelta(hours=TOKEN_TTL_HOURS)):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._ttl = ttl

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        issued = int((now or now_utc()).timestamp())
        payload = {
            "userId": user.user_id,
            "username": user.username or user.email or str(user.user_id),
            "role": user.role.value,
            "iat": issued,
            "exp": issued + int(self._ttl.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str, *, now: Optional[datetime] = None) -> TokenClaims:
        if not token:
            raise AuthenticationError(MSG_TOKEN_INVALID)
        try:
            # Expiry is checked below against the injectable clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as e:
            logger.info("Rejected token: %s", e)
            raise AuthenticationError(MSG_TOKEN_INVALID)

        claims = TokenClaims.from_payload(payload)
        if (now or now_utc()) >= claims.expires_at:
            logger.info("Rejected expired token for user_id=%s", claims.user_id)
            raise AuthenticationError(MSG_TOKEN_INVALID)
        return claims
