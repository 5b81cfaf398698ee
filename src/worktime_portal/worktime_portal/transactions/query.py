"""Translate transaction filters into a parameterized SQL WHERE clause."""

from __future__ import annotations

from typing import Any

from ..common.datetime_utils import end_of_day, start_of_day
from ..database.mysql_base import escape_like
from .model import TransactionFilters

# Columns matched by the free-text search (any of them may match).
SEARCH_COLUMNS = (
    "sender_name",
    "sender_account",
    "receiver_account",
    "description",
    "transaction_code",
)


def _contains(value: str) -> str:
    return f"%{escape_like(value.strip().lower())}%"


def build_where(filters: TransactionFilters) -> tuple[str, list[Any]]:
    """Return ("WHERE ...", params), or ("", []) when no filter is set."""

    clauses: list[str] = []
    params: list[Any] = []

    if filters.search and filters.search.strip():
        pattern = _contains(filters.search)
        clauses.append("(" + " OR ".join(f"LOWER({col}) LIKE %s" for col in SEARCH_COLUMNS) + ")")
        params.extend([pattern] * len(SEARCH_COLUMNS))

    if filters.date_from:
        clauses.append("transaction_datetime >= %s")
        params.append(start_of_day(filters.date_from))

    if filters.date_to:
        clauses.append("transaction_datetime <= %s")
        params.append(end_of_day(filters.date_to))

    if filters.transaction_type and filters.transaction_type.strip():
        clauses.append("LOWER(transaction_type) LIKE %s")
        params.append(_contains(filters.transaction_type))

    if filters.min_amount is not None:
        clauses.append("amount_numeric >= %s")
        params.append(filters.min_amount)

    if filters.max_amount is not None:
        clauses.append("amount_numeric <= %s")
        params.append(filters.max_amount)

    if filters.sender_bank and filters.sender_bank.strip():
        clauses.append("LOWER(sender_bank) LIKE %s")
        params.append(_contains(filters.sender_bank))

    if not clauses:
        return "", []
    return "WHERE " + " AND ".join(clauses), params
