from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Giao diện repository cho User.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        """Look up by username, or by email (case-insensitive)."""

        raise NotImplementedError

    def touch_last_login(self, user_id: int, at: datetime) -> bool:
        raise NotImplementedError
