from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = Path.home() / ".worktime_portal" / "session.json"


class FileTokenStore:
    """Local token storage for client shells (the equivalent of browser localStorage)."""

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path or os.getenv("WORKTIME_TOKEN_FILE") or DEFAULT_TOKEN_PATH)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self._path, e)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def save(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({"token": token}), encoding="utf-8")

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
