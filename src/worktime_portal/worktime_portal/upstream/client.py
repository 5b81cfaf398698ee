from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from ..core.constants import DEFAULT_UPSTREAM_TIMEOUT
from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def parse_error_body(response: requests.Response) -> dict[str, Any]:
    """Best-effort JSON decode of an upstream error body; {} when it is not a JSON object."""

    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class WorktimeClient:
    """Thin HTTP client for the external workforce (worktime) API.

    The caller's Authorization header and JSON body are forwarded verbatim.
    Nothing is retried: transport errors propagate as requests exceptions and
    non-success responses become UpstreamError with the upstream status.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def forward(
        self,
        method: str,
        path: str,
        *,
        authorization: str,
        fallback_message: str,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        url = self.url_for(path)
        headers = {"Authorization": authorization, "Content-Type": "application/json"}
        logger.info("Forwarding %s %s", method, url)

        response = self._session.request(
            method,
            url,
            headers=headers,
            json=json,
            params=params,
            timeout=self._timeout,
        )

        if not response.ok:
            payload = parse_error_body(response)
            message = payload.get("message")
            if not isinstance(message, str) or not message:
                message = fallback_message
            logger.warning("Upstream %s %s failed with status %s: %s", method, url, response.status_code, message)
            raise UpstreamError(response.status_code, message, payload)

        try:
            return response.json()
        except ValueError:
            logger.error("Upstream %s %s returned a non-JSON body", method, url)
            raise UpstreamError(502, fallback_message)
