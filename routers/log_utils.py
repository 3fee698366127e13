"""Shared helpers for the intake, medication and symptom routers."""
import string
from datetime import datetime
from typing import Optional

from records import format_instant

_BASE36 = string.digits + string.ascii_lowercase


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = ""
    while n:
        n, r = divmod(n, 36)
        out = _BASE36[r] + out
    return out


def _new_id(now: datetime, taken: set) -> str:
    """Base-36 millisecond timestamp, bumped until unique within the catalog."""
    n = int(now.timestamp() * 1000)
    while _base36(n) in taken:
        n += 1
    return _base36(n)


def _clean_text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _without_index(entries: list, index: int) -> Optional[list]:
    """entries minus the item at index, or None when index is out of range."""
    if not 0 <= index < len(entries):
        return None
    return entries[:index] + entries[index + 1:]


def _event_json(event: dict) -> dict:
    out = {}
    for k, v in event.items():
        out[k] = format_instant(v) if isinstance(v, datetime) else v
    return out
