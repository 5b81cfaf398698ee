from __future__ import annotations

import logging
from typing import Any, Optional

from flask import current_app, jsonify

from ..core.constants import MSG_SERVER_ERROR
from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return jsonify(body), status


def internal_error(exc: Exception, *, message: Optional[str] = None):
    """500 response: generic in production, detailed when DEBUG is on."""

    logger.exception("Unhandled error: %s", exc)
    generic = message or MSG_SERVER_ERROR
    if bool(current_app.config.get("DEBUG", False)):
        return json_error(f"{generic}: {exc}", 500)
    return json_error(generic, 500)


def upstream_error(exc: UpstreamError, *passthrough: str):
    """Relay an upstream failure with its status code and selected payload fields."""

    extra = {key: exc.payload.get(key) for key in passthrough}
    return json_error(str(exc), exc.status_code, **extra)
