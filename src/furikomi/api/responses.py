"""Success/failure envelopes for the Zengin endpoint."""

from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo

from furikomi.core.types import JsonDict
from furikomi.models.errors import ValidationError
from furikomi.models.transfer import TransferRequest, TransferResult

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_AMOUNT_DIGITS = 64

# Leading numeric prefix, as accepted by a PHP 7.1+ (int) cast
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(raw: str | None) -> int | None:
    """Leniently coerce a query value to int.

    The leading numeric prefix is used and truncated toward zero
    (``"12abc"`` -> 12, ``"1e3"`` -> 1000, ``"1.9"`` -> 1); anything else
    is 0. Returns None when the parameter is absent.

    Raises:
        ValueError: if the value has more than MAX_AMOUNT_DIGITS digits.
    """
    if raw is None:
        return None
    match = _LEADING_NUMBER.match(raw)
    if not match:
        return 0
    number = match.group(1)
    digits = number.lstrip("+-")
    if digits.isdigit():
        significant = digits.lstrip("0") or "0"
        if len(significant) > MAX_AMOUNT_DIGITS:
            raise ValueError(f"amount out of range: {raw[:32]}")
        return -int(significant) if number.startswith("-") else int(significant)
    try:
        value = int(float(number))
    except OverflowError as exc:
        raise ValueError(f"amount out of range: {raw[:32]}") from exc
    if len(str(abs(value))) > MAX_AMOUNT_DIGITS:
        raise ValueError(f"amount out of range: {raw[:32]}")
    return value


def timestamp(tz_name: str) -> str:
    return datetime.now(ZoneInfo(tz_name)).strftime(TIMESTAMP_FORMAT)


def success_body(request: TransferRequest, result: TransferResult, *, tz_name: str) -> JsonDict:
    return {
        "success": True,
        "parameters": request.echo(),
        **result.model_dump(),
        "timestamp": timestamp(tz_name),
    }


def failure_body(error: ValidationError, received: JsonDict, *, tz_name: str) -> JsonDict:
    return {
        "success": False,
        "error": error.message,
        "error_kind": error.kind,
        "received_parameters": received,
        "timestamp": timestamp(tz_name),
    }
