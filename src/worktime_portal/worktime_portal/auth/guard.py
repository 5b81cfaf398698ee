from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..common.http import json_error
from ..core.constants import MSG_TOKEN_MISSING
from ..core.exceptions import AuthenticationError
from .tokens import TokenService


def bearer_token() -> Optional[str]:
    """Token from `Authorization: Bearer <token>`, or None when absent."""

    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def make_token_required(tokens: TokenService):
    """Build a view decorator that rejects requests without a valid bearer token.

    Verified claims are exposed as `g.claims` and the raw header as `g.authorization`.
    """

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            if not token:
                return json_error(MSG_TOKEN_MISSING, 401)
            try:
                g.claims = tokens.verify(token)
            except AuthenticationError as e:
                return json_error(str(e), 401)
            g.authorization = f"Bearer {token}"
            return view(*args, **kwargs)

        return wrapper

    return token_required


def bearer_required(view):
    """Require a bearer header but leave validation to the upstream service.

    Used by proxy routes, whose tokens are checked by the workforce API itself.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        token = bearer_token()
        if not token:
            return json_error(MSG_TOKEN_MISSING, 401)
        g.authorization = f"Bearer {token}"
        return view(*args, **kwargs)

    return wrapper
