from __future__ import annotations

import math
from typing import Any

from .errors import ValidationError


_MISSING = object()


def coerce_number(
    value: Any,
    field: str,
    *,
    minimum: float | None = None,
    positive: bool = False,
) -> float:
    """
    Validate a JSON number and return it as float.

    - bools are rejected even though they are ints in Python
    - numeric strings ("2.5") are accepted, blanks are not
    - NaN and +/-inf are rejected
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")

    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field} must be a number")
        try:
            value = float(stripped)
        except ValueError:
            raise ValidationError(f"{field} must be a number")

    if not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")

    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")

    if positive and number <= 0:
        raise ValidationError(f"{field} must be > 0")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be >= {minimum:g}")

    return number


def number_field(payload: dict, field: str, *, default: Any = _MISSING, **rules) -> float:
    """Read and validate a numeric field; absent fields fall back to default when one is given."""
    if field not in payload or payload[field] is None:
        if default is _MISSING:
            raise ValidationError(f"Missing required field: {field}")
        return default
    return coerce_number(payload[field], field, **rules)


def text_field(payload: dict, field: str, *, required: bool = True, max_length: int = 200) -> str:
    raw = payload.get(field)
    if raw is None:
        if required:
            raise ValidationError(f"Missing required field: {field}")
        return ""

    if not isinstance(raw, (str, int, float)) or isinstance(raw, bool):
        raise ValidationError(f"{field} must be a string")

    val = str(raw).strip()
    if required and val == "":
        raise ValidationError(f"{field} cannot be blank")
    if len(val) > max_length:
        raise ValidationError(f"{field} exceeds max length {max_length}")
    return val


def require_payload(payload: Any) -> dict:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    return payload


def bool_field(payload: dict, field: str, default: bool = False) -> bool:
    raw = payload.get(field)
    if raw is None:
        return default
    if not isinstance(raw, bool):
        raise ValidationError(f"{field} must be true or false")
    return raw
