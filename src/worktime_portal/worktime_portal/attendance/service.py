from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_datetime, to_iso_utc
from ..core.constants import MSG_ATTENDANCE_UPDATE_FAILED, MSG_CHECKOUT_BEFORE_CHECKIN, MSG_INVALID_TIME
from ..core.exceptions import EarlyCheckoutError, ValidationError
from ..upstream.client import WorktimeClient


def combine_date_time_parts(date_part: Any, time_part: Any) -> Optional[str]:
    """Build a UTC ISO timestamp from 'YYYY-MM-DD' + 'HH:MM'; None if either is missing or invalid."""

    if not isinstance(date_part, str) or not isinstance(time_part, str):
        return None
    if not date_part.strip() or not time_part.strip():
        return None
    try:
        combined = datetime.strptime(f"{date_part.strip()} {time_part.strip()}", "%Y-%m-%d %H:%M")
    except ValueError:
        return None
    return to_iso_utc(combined.replace(tzinfo=timezone.utc))


def _parse_or_reject(value: str) -> datetime:
    try:
        return parse_iso_datetime(value)
    except (TypeError, ValueError):
        raise ValidationError(MSG_INVALID_TIME)


def build_update_payload(body: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize an admin attendance edit into the payload the workforce API accepts.

    Times may arrive as full ISO timestamps (checkInTime/checkOutTime) or as
    separate date and time-of-day parts. When both ends are known, check-out
    must be strictly after check-in.
    """

    check_in = body.get("checkInTime") or combine_date_time_parts(
        body.get("checkInDate"), body.get("checkInTimePart")
    )
    check_out = body.get("checkOutTime") or combine_date_time_parts(
        body.get("checkOutDate"), body.get("checkOutTimePart")
    )

    for value in (check_in, check_out):
        if value is not None and not isinstance(value, str):
            raise ValidationError(MSG_INVALID_TIME)

    if check_in and check_out:
        if _parse_or_reject(check_out) <= _parse_or_reject(check_in):
            raise EarlyCheckoutError(MSG_CHECKOUT_BEFORE_CHECKIN)

    payload: dict[str, Any] = {}
    if check_in:
        payload["checkInTime"] = check_in
    if check_out:
        payload["checkOutTime"] = check_out
    if "notes" in body:
        payload["notes"] = body["notes"]
    if "officeId" in body:
        payload["officeId"] = body["officeId"]
    return payload


class AttendanceEditService:
    """Use case: admin correction of an attendance record held by the workforce API."""

    def __init__(self, upstream: WorktimeClient):
        self._upstream = upstream

    def update_record(self, attendance_id: str, body: Mapping[str, Any], *, authorization: str) -> Any:
        payload = build_update_payload(body)
        return self._upstream.forward(
            "PUT",
            f"/attendance/admin/{attendance_id}",
            authorization=authorization,
            json=payload,
            fallback_message=MSG_ATTENDANCE_UPDATE_FAILED,
        )
