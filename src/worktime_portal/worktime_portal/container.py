from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from .attendance.service import AttendanceEditService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_UPSTREAM_BASE_URL, DEFAULT_UPSTREAM_TIMEOUT
from .database.connection import DBConfig, DatabaseConnection
from .transactions.mysql_transaction_repository import MySQLTransactionRepository
from .transactions.repository import TransactionRepository
from .transactions.service import TransactionService
from .upstream.client import WorktimeClient
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    transactions_repo: TransactionRepository
    worktime_client: WorktimeClient

    token_service: TokenService
    auth_service: AuthService
    transaction_service: TransactionService
    attendance_edit_service: AttendanceEditService


def wire_container(
    *,
    users_repo: UserRepository,
    transactions_repo: TransactionRepository,
    token_service: TokenService,
    worktime_client: WorktimeClient,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services on top of already-built repositories and clients."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        transactions_repo=transactions_repo,
        worktime_client=worktime_client,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        transaction_service=TransactionService(transactions_repo),
        attendance_edit_service=AttendanceEditService(worktime_client),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL,
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
    http_session: Optional[requests.Session] = None,
) -> Container:
    # The pool is opened lazily, so building the container never touches MySQL.
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        transactions_repo=MySQLTransactionRepository(conn),
        token_service=TokenService(jwt_secret),
        worktime_client=WorktimeClient(upstream_base_url, timeout=upstream_timeout, session=http_session),
    )


def build_container_from_settings(settings: Any) -> Container:
    return build_container(
        db_config=dict(getattr(settings, "DB_CONFIG")),
        jwt_secret=str(getattr(settings, "JWT_SECRET")),
        upstream_base_url=str(getattr(settings, "UPSTREAM_BASE_URL", DEFAULT_UPSTREAM_BASE_URL)),
        upstream_timeout=float(getattr(settings, "UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT)),
    )
