from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import make_token_required
from ..common.datetime_utils import parse_iso_date
from ..common.http import internal_error, json_error
from ..common.validators import optional_text, parse_optional_float, parse_positive_int
from ..container import Container
from ..core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    MSG_STATS_FAILED,
    MSG_TRANSACTIONS_FAILED,
)
from ..core.exceptions import ValidationError
from .model import TransactionFilters


def parse_filters(args) -> TransactionFilters:
    date_from = optional_text(args.get("dateFrom"))
    date_to = optional_text(args.get("dateTo"))
    return TransactionFilters(
        search=optional_text(args.get("search")),
        date_from=parse_iso_date(date_from) if date_from else None,
        date_to=parse_iso_date(date_to) if date_to else None,
        transaction_type=optional_text(args.get("transactionType")),
        min_amount=parse_optional_float(args.get("minAmount"), "Số tiền tối thiểu"),
        max_amount=parse_optional_float(args.get("maxAmount"), "Số tiền tối đa"),
        sender_bank=optional_text(args.get("senderBank")),
    )


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_service)

    @app.route("/api/transactions", methods=["GET"], endpoint="api_transactions")
    @token_required
    def list_transactions():
        try:
            filters = parse_filters(request.args)
            page = parse_positive_int(request.args.get("page"), "page", default=DEFAULT_PAGE)
            limit = parse_positive_int(
                request.args.get("limit"), "limit", default=DEFAULT_PAGE_LIMIT, maximum=MAX_PAGE_LIMIT
            )
            result = container.transaction_service.list(filters, page=page, limit=limit)
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception as e:
            return internal_error(e, message=MSG_TRANSACTIONS_FAILED)

        return jsonify(
            {
                "success": True,
                "transactions": [t.to_dict() for t in result.items],
                "pagination": result.pagination_dict(),
            }
        )

    @app.route("/api/transactions/stats", methods=["GET"], endpoint="api_transactions_stats")
    @token_required
    def transaction_stats():
        try:
            stats = container.transaction_service.stats()
        except Exception as e:
            return internal_error(e, message=MSG_STATS_FAILED)

        return jsonify({"success": True, "stats": stats.to_dict()})
