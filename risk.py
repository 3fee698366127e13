"""Intake pace classification over a trailing one-hour window."""
from datetime import datetime

from config import ADEQUATE_THRESHOLD_ML, HIGH_THRESHOLD_ML, RISK_WINDOW
from units import format_volume

LOW = "low"
ADEQUATE = "adequate"
HIGH = "high"
RISK_LEVELS = (LOW, ADEQUATE, HIGH)


def classify(window_sum_ml: float) -> str:
    if window_sum_ml >= HIGH_THRESHOLD_ML:
        return HIGH
    if window_sum_ml >= ADEQUATE_THRESHOLD_ML:
        return ADEQUATE
    return LOW


def score_intake(event: dict, day_events: list[dict]) -> dict:
    """Classify the window (event.timestamp - 1h, event.timestamp].

    day_events is the whole day's intake list, event included. Every event
    sharing the event's timestamp falls inside its window.
    """
    end = event["timestamp"]
    window_start = end - RISK_WINDOW
    in_window = [
        e for e in sorted(day_events, key=lambda e: e["timestamp"])
        if window_start < e["timestamp"] <= end
    ]
    window_sum = sum(e["amount"] for e in in_window)
    return {
        "risk_level": classify(window_sum),
        "window_sum_ml": window_sum,
        "window_start": window_start,
    }


def score_all(day_events: list[dict]) -> list[tuple[dict, dict]]:
    """Score every event of a day against the full list; returns (event, score) pairs."""
    return [(e, score_intake(e, day_events)) for e in day_events]


def intake_markers(day_events: list[dict]) -> list[tuple[dict, dict]]:
    """Only the events worth annotating on a chart: low and high pace."""
    return [(e, s) for e, s in score_all(day_events) if s["risk_level"] != ADEQUATE]


def describe(score: dict, unit: str = "ml") -> str:
    total = format_volume(score["window_sum_ml"], unit)
    since = _fmt_clock(score["window_start"])
    if score["risk_level"] == HIGH:
        return f"That's a lot in a short window: {total} since {since}. Consider giving your body a break."
    if score["risk_level"] == LOW:
        return f"Only {total} since {since}. Remember to keep sipping!"
    return f"Looking good: {total} since {since}. Nice and steady."


def _fmt_clock(dt: datetime) -> str:
    hour12 = dt.hour % 12 or 12
    return f"{hour12}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"
