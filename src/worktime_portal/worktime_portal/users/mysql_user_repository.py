from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, username, email, password_hash, name, role, is_active, last_login"


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row.get("username"),
        email=row.get("email"),
        password_hash=row["password_hash"],
        name=row.get("name"),
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        last_login=row.get("last_login"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        # usernames match exactly, emails case-insensitively
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username=%s COLLATE utf8mb4_bin OR email=%s
                ORDER BY (username=%s COLLATE utf8mb4_bin) DESC
                LIMIT 1
                """,
                (identifier, identifier.strip().lower(), identifier),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def touch_last_login(self, user_id: int, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_login=%s WHERE user_id=%s", (at, int(user_id)))
            return cur.rowcount > 0
