from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): User.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    user_id: int
    username: Optional[str]
    email: Optional[str]
    password_hash: str
    name: Optional[str]
    role: Role
    is_active: bool = True
    last_login: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.name or self.username or ""

    def to_public_dict(self, *, include_last_login: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.user_id,
            "username": self.username,
            "email": self.email,
            "name": self.display_name,
            "role": self.role.value,
        }
        if include_last_login:
            data["lastLogin"] = self.last_login.isoformat() if self.last_login else None
        return data
