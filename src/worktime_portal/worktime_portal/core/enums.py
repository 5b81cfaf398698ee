from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    ADMIN = "admin"
    VIEWER = "viewer"


class GateState(str, Enum):
    """Trạng thái của auth gate phía client."""

    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
