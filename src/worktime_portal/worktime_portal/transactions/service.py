from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import day_bounds, now_local
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, TOP_BANK_STATS
from ..core.exceptions import ValidationError
from .model import TransactionFilters, TransactionPage, TransactionStats
from .repository import TransactionRepository

logger = logging.getLogger(__name__)


class TransactionService:
    """Use case: browse the transaction ledger and compute dashboard statistics."""

    def __init__(self, transactions: TransactionRepository, *, clock: Callable[[], datetime] = now_local):
        self._transactions = transactions
        self._clock = clock

    def list(
        self,
        filters: Optional[TransactionFilters] = None,
        *,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> TransactionPage:
        filters = filters or TransactionFilters()
        if page < 1 or limit < 1:
            raise ValidationError("Tham số phân trang không hợp lệ")
        if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
            raise ValidationError("Khoảng ngày không hợp lệ")

        skip = (page - 1) * limit
        total_count = self._transactions.count(filters)
        items = self._transactions.find(filters, skip=skip, limit=limit) if skip < total_count else []
        total_pages = math.ceil(total_count / limit) if total_count else 0

        logger.debug("Listed %s/%s transactions (page=%s, limit=%s)", len(items), total_count, page, limit)
        return TransactionPage(
            items=list(items),
            total_count=total_count,
            total_pages=total_pages,
            page=page,
            limit=limit,
        )

    def stats(self, *, now: Optional[datetime] = None) -> TransactionStats:
        start, end = day_bounds(now or self._clock())
        today_count, today_amount = self._transactions.summary_between(start, end)
        return TransactionStats(
            total_transactions=self._transactions.count(TransactionFilters()),
            total_incoming=self._transactions.sum_positive_amounts(),
            today_transactions=today_count,
            today_amount=today_amount,
            bank_stats=list(self._transactions.top_banks(TOP_BANK_STATS)),
        )
