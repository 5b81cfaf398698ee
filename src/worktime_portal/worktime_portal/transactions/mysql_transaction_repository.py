from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BankStat, Transaction, TransactionFilters
from .query import build_where
from .repository import TransactionRepository

_COLUMNS = """
    transaction_id, sender_account, receiver_account, sender_name, sender_bank,
    transaction_type, transaction_code, transaction_datetime,
    amount_display, amount_numeric, fee_display, fee_numeric,
    description, source_email_id, source_history_id, processed_at
"""


def _row_to_transaction(r: Dict[str, Any]) -> Transaction:
    return Transaction(
        transaction_id=int(r["transaction_id"]),
        sender_account=r["sender_account"],
        receiver_account=r["receiver_account"],
        sender_name=r["sender_name"],
        sender_bank=r["sender_bank"],
        transaction_type=r["transaction_type"],
        transaction_code=r["transaction_code"],
        transaction_datetime=r["transaction_datetime"],
        amount_display=r["amount_display"],
        amount_numeric=float(r["amount_numeric"]),
        fee_display=r["fee_display"],
        fee_numeric=float(r.get("fee_numeric") or 0),
        description=r["description"],
        source_email_id=r["source_email_id"],
        source_history_id=r["source_history_id"],
        processed_at=r["processed_at"],
    )


class MySQLTransactionRepository(TransactionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count(self, filters: TransactionFilters) -> int:
        where, params = build_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM transactions {where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def find(self, filters: TransactionFilters, *, skip: int, limit: int) -> Sequence[Transaction]:
        where, params = build_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM transactions
                {where}
                ORDER BY transaction_datetime DESC, transaction_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(skip)),
            )
            return [_row_to_transaction(r) for r in fetchall(cur)]

    def sum_positive_amounts(self) -> float:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(SUM(amount_numeric), 0) AS total FROM transactions WHERE amount_numeric > 0")
            row = fetchone(cur)
            return float(row["total"]) if row else 0.0

    def summary_between(self, start: datetime, end: datetime) -> tuple[int, float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total,
                       COALESCE(SUM(CASE WHEN amount_numeric > 0 THEN amount_numeric ELSE 0 END), 0) AS amount
                FROM transactions
                WHERE transaction_datetime >= %s AND transaction_datetime < %s
                """,
                (start, end),
            )
            row = fetchone(cur)
            if not row:
                return 0, 0.0
            return int(row["total"]), float(row["amount"])

    def top_banks(self, limit: int) -> Sequence[BankStat]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sender_bank, COUNT(*) AS cnt, SUM(amount_numeric) AS total_amount
                FROM transactions
                WHERE amount_numeric > 0
                GROUP BY sender_bank
                ORDER BY cnt DESC, sender_bank ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                BankStat(bank=r["sender_bank"], count=int(r["cnt"]), total_amount=float(r["total_amount"] or 0))
                for r in fetchall(cur)
            ]
