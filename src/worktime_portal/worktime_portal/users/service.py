from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from werkzeug.security import check_password_hash

from ..auth.tokens import TokenClaims, TokenService
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import MSG_LOGIN_DENIED, MSG_TOKEN_INVALID
from ..core.exceptions import AuthenticationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login) and resolve sessions from tokens."""

    def __init__(self, users: UserRepository, tokens: TokenService, *, clock: Callable[[], datetime] = now_local):
        self._users = users
        self._tokens = tokens
        self._clock = clock

    def authenticate(self, identifier: str, password: str) -> User:
        identifier = require_non_empty(identifier, "Tên đăng nhập")
        user = self._users.get_by_identifier(identifier)
        if not user:
            logger.info("Login failed: unknown identifier")
            raise AuthenticationError(MSG_LOGIN_DENIED)

        if not user.is_active:
            logger.info("Login failed: user_id=%s is inactive", user.user_id)
            raise AuthenticationError(MSG_LOGIN_DENIED)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except (ValueError, TypeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Login failed: bad password for user_id=%s", user.user_id)
            raise AuthenticationError(MSG_LOGIN_DENIED)

        logged_in_at = self._clock()
        self._users.touch_last_login(user.user_id, logged_in_at)
        logger.info("Login succeeded for user_id=%s", user.user_id)
        return User(
            user_id=user.user_id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            last_login=logged_in_at,
        )

    def login(self, identifier: str, password: str) -> tuple[str, User]:
        user = self.authenticate(identifier, password)
        return self._tokens.issue(user), user

    def verify_token(self, token: str) -> TokenClaims:
        return self._tokens.verify(token)

    def resolve_session(self, token: str) -> User:
        claims = self._tokens.verify(token)
        user = self._users.get_by_id(claims.user_id)
        if not user or not user.is_active:
            raise AuthenticationError(MSG_TOKEN_INVALID)
        return user
