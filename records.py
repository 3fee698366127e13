"""Coercion of persisted JSON rows into the plain dicts the analysis code consumes.

Anything malformed is treated as absent: a bad row is dropped, a bad
collection becomes an empty list.
"""
import logging
import math
from datetime import date, datetime
from typing import Optional

from config import INSTANT_FORMAT, SEVERITY_MAX, SEVERITY_MIN, _to_local_naive

logger = logging.getLogger(__name__)

_DAY_TAG_FORMATS = ("%Y-%m-%d", "%a %b %d %Y")


def parse_instant(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return _to_local_naive(datetime.fromisoformat(text))
    except ValueError:
        return None


def format_instant(dt: datetime) -> str:
    return dt.strftime(INSTANT_FORMAT)


def parse_day_tag(value) -> Optional[date]:
    """Parse a log date tag: ISO date or the browser's Date.toDateString() form."""
    if not isinstance(value, str):
        return None
    for fmt in _DAY_TAG_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            continue
    return None


def parse_number(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        n = float(value)
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def _rows(raw) -> list:
    return raw if isinstance(raw, list) else []


def coerce_intake(raw) -> list[dict]:
    out = []
    for row in _rows(raw):
        if not isinstance(row, dict):
            continue
        amount = parse_number(row.get("amount"))
        ts = parse_instant(row.get("timestamp"))
        if amount is None or amount <= 0 or ts is None:
            logger.debug("Dropping malformed intake row %r", row)
            continue
        out.append({"amount": amount, "timestamp": ts})
    return out


def coerce_medications(raw) -> list[dict]:
    out = []
    for row in _rows(raw):
        if not isinstance(row, dict):
            continue
        name = row.get("name")
        ts = parse_instant(row.get("timestamp"))
        if not isinstance(name, str) or not name.strip() or ts is None:
            logger.debug("Dropping malformed medication row %r", row)
            continue
        dosage = row.get("dosage")
        out.append({
            "medication_id": str(row.get("medication_id") or ""),
            "name": name.strip(),
            "dosage": dosage.strip() if isinstance(dosage, str) and dosage.strip() else None,
            "timestamp": ts,
        })
    return out


def coerce_symptoms(raw) -> list[dict]:
    out = []
    for row in _rows(raw):
        if not isinstance(row, dict):
            continue
        name = row.get("name")
        severity = parse_number(row.get("severity"))
        ts = parse_instant(row.get("timestamp"))
        if (
            not isinstance(name, str) or not name.strip() or ts is None
            or severity is None or severity != int(severity)
            or not (SEVERITY_MIN <= severity <= SEVERITY_MAX)
        ):
            logger.debug("Dropping malformed symptom row %r", row)
            continue
        out.append({
            "symptom_id": str(row.get("symptom_id") or ""),
            "name": name.strip(),
            "severity": int(severity),
            "timestamp": ts,
        })
    return out


def coerce_day_summaries(raw) -> list[dict]:
    """Intake history records with usable totals; hour buckets outside 0..23 are dropped."""
    out = []
    for row in _rows(raw):
        if not isinstance(row, dict) or parse_day_tag(row.get("date")) is None:
            continue
        total = parse_number(row.get("total_ml"))
        goal = parse_number(row.get("goal_ml"))
        if total is None or goal is None or total < 0 or goal <= 0:
            logger.debug("Dropping malformed day summary %r", row)
            continue
        entries = []
        for e in _rows(row.get("entries")):
            if not isinstance(e, dict):
                continue
            hour, ml = e.get("hour"), parse_number(e.get("ml"))
            if isinstance(hour, int) and not isinstance(hour, bool) and 0 <= hour <= 23 and ml is not None:
                entries.append({"hour": hour, "ml": ml})
        entry_count = row.get("entry_count")
        out.append({
            "date": parse_day_tag(row["date"]).isoformat(),
            "total_ml": total,
            "goal_ml": goal,
            "entry_count": entry_count if isinstance(entry_count, int) else len(entries),
            "entries": entries,
        })
    return out


def serialize_events(events: list[dict]) -> list[dict]:
    """Inverse of the coerce_* helpers: timestamps back to storage strings."""
    return [{**e, "timestamp": format_instant(e["timestamp"])} for e in events]
