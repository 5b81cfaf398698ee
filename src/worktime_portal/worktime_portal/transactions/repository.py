from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import BankStat, Transaction, TransactionFilters


class TransactionRepository(Protocol):
    """Read-only access to the transaction ledger."""

    def count(self, filters: TransactionFilters) -> int:
        raise NotImplementedError

    def find(self, filters: TransactionFilters, *, skip: int, limit: int) -> Sequence[Transaction]:
        """Newest first (transaction_datetime DESC, then id DESC)."""

        raise NotImplementedError

    def sum_positive_amounts(self) -> float:
        raise NotImplementedError

    def summary_between(self, start: datetime, end: datetime) -> tuple[int, float]:
        """(record count, sum of positive amounts) for start <= datetime < end."""

        raise NotImplementedError

    def top_banks(self, limit: int) -> Sequence[BankStat]:
        """Positive-amount records grouped by sender bank, most records first."""

        raise NotImplementedError
