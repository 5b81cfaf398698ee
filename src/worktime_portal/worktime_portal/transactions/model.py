from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class Transaction:
    """Bản ghi sổ giao dịch (chỉ đọc), được job đọc email ghi vào."""

    transaction_id: int
    sender_account: str
    receiver_account: str
    sender_name: str
    sender_bank: str
    transaction_type: str
    transaction_code: str
    transaction_datetime: datetime
    amount_display: str
    amount_numeric: float
    fee_display: str
    fee_numeric: float
    description: str
    source_email_id: str
    source_history_id: str
    processed_at: datetime

    def to_dict(self) -> dict[str, Any]:
        # Wire names follow the ingestion job's documents.
        return {
            "id": self.transaction_id,
            "taiKhoanNhan": self.receiver_account,
            "taiKhoanChuyen": self.sender_account,
            "tenNguoiChuyen": self.sender_name,
            "nganHangChuyen": self.sender_bank,
            "loaiGiaoDich": self.transaction_type,
            "maGiaoDich": self.transaction_code,
            "ngayGioGiaoDich": self.transaction_datetime.isoformat(),
            "soTien": self.amount_display,
            "soTienNumber": self.amount_numeric,
            "phiGiaoDich": self.fee_display,
            "phiGiaoDichNumber": self.fee_numeric,
            "noiDungGiaoDich": self.description,
            "emailId": self.source_email_id,
            "historyId": self.source_history_id,
            "processedAt": self.processed_at.isoformat(),
        }


@dataclass(frozen=True)
class TransactionFilters:
    """Bộ lọc danh sách giao dịch; các điều kiện được AND với nhau."""

    search: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    transaction_type: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    sender_bank: Optional[str] = None


@dataclass(frozen=True)
class TransactionPage:
    items: Sequence[Transaction]
    total_count: int
    total_pages: int
    page: int
    limit: int

    def pagination_dict(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class BankStat:
    bank: str
    count: int
    total_amount: float

    def to_dict(self) -> dict[str, Any]:
        return {"bank": self.bank, "count": self.count, "totalAmount": self.total_amount}


@dataclass(frozen=True)
class TransactionStats:
    total_transactions: int
    total_incoming: float
    today_transactions: int
    today_amount: float
    bank_stats: Sequence[BankStat] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTransactions": self.total_transactions,
            "totalIncoming": self.total_incoming,
            "todayTransactions": self.today_transactions,
            "todayAmount": self.today_amount,
            "bankStats": [b.to_dict() for b in self.bank_stats],
        }
