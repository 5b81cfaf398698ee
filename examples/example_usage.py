"""Ví dụ: dùng service layer (không qua Flask) và auth gate phía client.

Mục tiêu: minh hoạ controllers chỉ là lớp mỏng, nghiệp vụ nằm ở services.
"""

import importlib
import os

from config import get_settings_module

from src.worktime_portal.worktime_portal.client.auth_gate import AuthGate, PortalAuthClient, select_view
from src.worktime_portal.worktime_portal.client.token_store import FileTokenStore
from src.worktime_portal.worktime_portal.container import build_container_from_settings
from src.worktime_portal.worktime_portal.transactions.model import TransactionFilters


def show_ledger() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    page = container.transaction_service.list(TransactionFilters(search="DUY"), page=1, limit=5)
    print(page.pagination_dict())
    print(container.transaction_service.stats().to_dict())


def show_gate() -> None:
    gate = AuthGate(FileTokenStore(), PortalAuthClient(os.getenv("PORTAL_API_URL", "http://127.0.0.1:5000/api")))
    gate.mount()
    print(
        gate.render(
            lambda ctx: select_view(ctx, admin=lambda c: f"admin view for {c.name}", viewer=lambda c: f"viewer view for {c.name}"),
            lambda: "login form",
        )
    )


if __name__ == "__main__":
    show_ledger()
    show_gate()
