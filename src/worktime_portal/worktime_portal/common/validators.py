from __future__ import annotations

import math
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_positive_int(value: Optional[str], field_name: str, *, default: int, maximum: Optional[int] = None) -> int:
    if value is None or str(value).strip() == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} phải là số nguyên dương")
    if number < 1:
        raise ValidationError(f"{field_name} phải là số nguyên dương")
    if maximum is not None and number > maximum:
        return maximum
    return number


def parse_optional_float(value: Optional[str], field_name: str) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} không hợp lệ")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} không hợp lệ")
    return number
