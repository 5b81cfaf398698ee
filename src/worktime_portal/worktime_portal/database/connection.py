from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

from ..core.constants import DEFAULT_DB_POOL_SIZE

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_DB_POOL_SIZE

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(db_config.get("pool_size", DEFAULT_DB_POOL_SIZE)),
        )


class DatabaseConnection:
    """Store handle owned by the app factory and injected into repositories.

    The connection pool is created on first use and then reused for the
    process lifetime. Creation is guarded by a lock so concurrent first
    requests build exactly one pool; a failed attempt is not memoized.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is not None:
            return self._pool
        with self._lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="worktime_portal",
                    pool_size=int(self._config.pool_size),
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                )
                logger.info(
                    "Connected to MySQL %s@%s:%s/%s (pool_size=%s)",
                    self._config.user,
                    self._config.host,
                    self._config.port,
                    self._config.database,
                    self._config.pool_size,
                )
        return self._pool

    def connect(self):
        """Borrow a pooled connection; close() hands it back to the pool."""
        return self._get_pool().get_connection()
