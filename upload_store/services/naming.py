# ================================
# FILE: upload_store/services/naming.py
# ================================

from datetime import datetime
from typing import Optional

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Render a non-negative integer with digits 0-9a-z"""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def seconds_since_midnight(now: Optional[datetime] = None) -> int:
    """Seconds elapsed since local midnight, in [0, 86399]"""
    now = now or datetime.now()
    return now.hour * 3600 + now.minute * 60 + now.second


def time_salt(now: Optional[datetime] = None) -> str:
    """Default filename salt: base-36 seconds since midnight"""
    return to_base36(seconds_since_midnight(now))


def build_filename(version: str, salt: str, extension: str) -> str:
    # extension carries its own leading dot
    return f"{version}-{salt}{extension}"
