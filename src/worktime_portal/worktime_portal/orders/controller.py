from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guard import bearer_required
from ..common.http import internal_error, json_error, upstream_error
from ..container import Container
from ..core.constants import (
    MSG_INVALID_BODY,
    MSG_ORDERS_CREATE_FAILED,
    MSG_ORDERS_FROM_PRINTED_FAILED,
    MSG_ORDERS_LIST_FAILED,
)
from ..core.exceptions import UpstreamError


def register(app: Flask, container: Container) -> None:
    upstream = container.worktime_client

    @app.route("/api/orders", methods=["GET"], endpoint="api_orders_list")
    @bearer_required
    def list_orders():
        try:
            result = upstream.forward(
                "GET",
                "/orders",
                authorization=g.authorization,
                params=list(request.args.items(multi=True)),
                fallback_message=MSG_ORDERS_LIST_FAILED,
            )
        except UpstreamError as e:
            return upstream_error(e)
        except Exception as e:
            return internal_error(e, message=MSG_ORDERS_LIST_FAILED)
        return jsonify(result)

    @app.route("/api/orders", methods=["POST"], endpoint="api_orders_create")
    @bearer_required
    def create_order():
        body = request.get_json(silent=True)
        if body is None:
            return json_error(MSG_INVALID_BODY, 400)
        try:
            result = upstream.forward(
                "POST",
                "/orders",
                authorization=g.authorization,
                json=body,
                fallback_message=MSG_ORDERS_CREATE_FAILED,
            )
        except UpstreamError as e:
            return upstream_error(e)
        except Exception as e:
            return internal_error(e, message=MSG_ORDERS_CREATE_FAILED)
        return jsonify(result)

    @app.route("/api/orders/create-from-printed", methods=["POST"], endpoint="api_orders_from_printed")
    @bearer_required
    def create_from_printed():
        body = request.get_json(silent=True)
        if body is None:
            return json_error(MSG_INVALID_BODY, 400)
        try:
            result = upstream.forward(
                "POST",
                "/orders/create-from-printed",
                authorization=g.authorization,
                json=body,
                fallback_message=MSG_ORDERS_FROM_PRINTED_FAILED,
            )
        except UpstreamError as e:
            # The upstream reports which existing order blocks the import.
            return upstream_error(e, "conflictOrder")
        except Exception as e:
            return internal_error(e, message=MSG_ORDERS_FROM_PRINTED_FAILED)
        return jsonify(result)
