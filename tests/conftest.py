from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import Any, Optional

import pytest
import requests
from werkzeug.security import generate_password_hash

from src.worktime_portal.worktime_portal.auth.tokens import TokenService
from src.worktime_portal.worktime_portal.common.datetime_utils import end_of_day, start_of_day
from src.worktime_portal.worktime_portal.container import wire_container
from src.worktime_portal.worktime_portal.core.enums import Role
from src.worktime_portal.worktime_portal.transactions.model import BankStat, Transaction, TransactionFilters
from src.worktime_portal.worktime_portal.transactions.query import SEARCH_COLUMNS
from src.worktime_portal.worktime_portal.upstream.client import WorktimeClient
from src.worktime_portal.worktime_portal.users.model import User

JWT_SECRET = "test-jwt-secret"
UPSTREAM = "https://upstream.test/api"


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.users = {u.user_id: u for u in users}
        self.last_login_updates: list[tuple[int, datetime]] = []

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(int(user_id))

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        for u in self.users.values():
            if u.username == identifier:
                return u
        for u in self.users.values():
            if u.email and u.email == identifier.strip().lower():
                return u
        return None

    def touch_last_login(self, user_id: int, at: datetime) -> bool:
        self.last_login_updates.append((user_id, at))
        return user_id in self.users


class InMemoryTransactions:
    """Mirrors the WHERE/ORDER BY semantics of the MySQL repository."""

    def __init__(self, records: list[Transaction]):
        self.records = list(records)

    def _matches(self, f: TransactionFilters, r: Transaction) -> bool:
        if f.search:
            needle = f.search.strip().lower()
            if not any(needle in str(getattr(r, col)).lower() for col in SEARCH_COLUMNS):
                return False
        if f.date_from and r.transaction_datetime < start_of_day(f.date_from):
            return False
        if f.date_to and r.transaction_datetime > end_of_day(f.date_to):
            return False
        if f.transaction_type and f.transaction_type.strip().lower() not in r.transaction_type.lower():
            return False
        if f.min_amount is not None and r.amount_numeric < f.min_amount:
            return False
        if f.max_amount is not None and r.amount_numeric > f.max_amount:
            return False
        if f.sender_bank and f.sender_bank.strip().lower() not in r.sender_bank.lower():
            return False
        return True

    def count(self, filters: TransactionFilters) -> int:
        return sum(1 for r in self.records if self._matches(filters, r))

    def find(self, filters: TransactionFilters, *, skip: int, limit: int):
        items = [r for r in self.records if self._matches(filters, r)]
        items.sort(key=lambda r: (r.transaction_datetime, r.transaction_id), reverse=True)
        return items[skip: skip + limit]

    def sum_positive_amounts(self) -> float:
        return sum(r.amount_numeric for r in self.records if r.amount_numeric > 0)

    def summary_between(self, start: datetime, end: datetime):
        today = [r for r in self.records if start <= r.transaction_datetime < end]
        return len(today), sum(r.amount_numeric for r in today if r.amount_numeric > 0)

    def top_banks(self, limit: int):
        grouped: dict[str, list[float]] = {}
        for r in self.records:
            if r.amount_numeric > 0:
                grouped.setdefault(r.sender_bank, []).append(r.amount_numeric)
        stats = [BankStat(bank=b, count=len(v), total_amount=sum(v)) for b, v in grouped.items()]
        stats.sort(key=lambda s: (-s.count, s.bank))
        return stats[:limit]


def make_response(status: int, body: Any = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    if body is None:
        resp._content = b""
    elif isinstance(body, (dict, list)):
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = str(body).encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """Stand-in for requests.Session that records calls and replays queued responses."""

    def __init__(self):
        self.calls: list[dict[str, Any]] = []
        self._queue: list[Any] = []

    def queue(self, outcome: Any) -> None:
        self._queue.append(outcome)

    def request(self, method: str, url: str, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self._queue.pop(0) if self._queue else make_response(200, {"success": True})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url: str, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self.request("POST", url, **kwargs)


def make_user(user_id: int = 1, username: str = "admin", *, password: str = "secret123", role: Role = Role.ADMIN,
              email: Optional[str] = None, is_active: bool = True, name: Optional[str] = None) -> User:
    return User(
        user_id=user_id,
        username=username,
        email=email,
        password_hash=generate_password_hash(password),
        name=name,
        role=role,
        is_active=is_active,
    )


def make_tx(tx_id: int, when: datetime, amount: float, *, sender_name: str = "NGUYEN VAN A",
            bank: str = "VCB", tx_type: str = "Chuyển khoản", description: str = "thanh toan") -> Transaction:
    return Transaction(
        transaction_id=tx_id,
        sender_account=f"00{tx_id:06d}",
        receiver_account="1903999999",
        sender_name=sender_name,
        sender_bank=bank,
        transaction_type=tx_type,
        transaction_code=f"FT{tx_id:08d}",
        transaction_datetime=when,
        amount_display=f"{amount:,.0f} VND",
        amount_numeric=amount,
        fee_display="0 VND",
        fee_numeric=0.0,
        description=description,
        source_email_id=f"email-{tx_id}",
        source_history_id=f"hist-{tx_id}",
        processed_at=when + timedelta(minutes=1),
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(1, "admin", email="admin@example.com", name="Quản trị"),
            make_user(2, "viewer", role=Role.VIEWER, email="viewer@example.com"),
            make_user(3, "disabled", is_active=False),
        ]
    )


@pytest.fixture
def transactions(fixed_now) -> InMemoryTransactions:
    return InMemoryTransactions(
        [
            make_tx(1, fixed_now - timedelta(days=2), 500_000, sender_name="LE ANH DUY", bank="Vietcombank"),
            make_tx(2, fixed_now - timedelta(days=1), 1_200_000, bank="Techcombank"),
            make_tx(3, fixed_now - timedelta(hours=1), -50_000, bank="Vietcombank", tx_type="Phí dịch vụ"),
            make_tx(4, fixed_now - timedelta(hours=2), 300_000, bank="MB Bank", description="tien hang 50%"),
        ]
    )


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(JWT_SECRET)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def container(users, transactions, token_service, fake_session):
    return wire_container(
        users_repo=users,
        transactions_repo=transactions,
        token_service=token_service,
        worktime_client=WorktimeClient(UPSTREAM, session=fake_session),
    )


@pytest.fixture
def app(monkeypatch, container):
    from src.worktime_portal.worktime_portal.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_token(token_service, users) -> str:
    return token_service.issue(users.get_by_id(1))


@pytest.fixture
def auth_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
