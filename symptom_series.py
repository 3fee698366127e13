"""Symptom severity series for the correlation chart.

Points hold true samples only. For the ``today`` range every symptom also
gets a projection segment carrying its last known severity up to ``now``;
historical ranges never project or forward-fill.
"""
from collections import defaultdict
from datetime import datetime

import risk
from timeline import medication_label
from units import format_volume

TODAY = "today"
YESTERDAY = "yesterday"
WEEK = "week"
RANGES = (TODAY, YESTERDAY, WEEK)

AXIS_MINUTES = "minutes"
AXIS_EPOCH_MS = "epoch_ms"

_EPOCH = datetime(1970, 1, 1)
_MARKER_Y = {risk.LOW: 0, risk.HIGH: 5}


def minutes_since_midnight(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def epoch_ms(dt: datetime) -> int:
    return int((dt - _EPOCH).total_seconds() * 1000)


def axis_for(time_range: str) -> str:
    return AXIS_EPOCH_MS if time_range == WEEK else AXIS_MINUTES


def _time_key(dt: datetime, axis: str) -> int:
    return epoch_ms(dt) if axis == AXIS_EPOCH_MS else minutes_since_midnight(dt)


def symptom_names(symptoms: list[dict]) -> list[str]:
    seen = {}
    for entry in symptoms:
        seen.setdefault(entry["name"], None)
    return list(seen)


def sample_points(symptoms: list[dict], axis: str) -> list[dict]:
    """One point per distinct instant; later samples overwrite earlier ones at the same instant."""
    by_time: dict[int, dict] = {}
    for entry in sorted(symptoms, key=lambda e: e["timestamp"]):
        key = _time_key(entry["timestamp"], axis)
        by_time.setdefault(key, {"time": key})[entry["name"]] = entry["severity"]
    return [by_time[k] for k in sorted(by_time)]


def projections(points: list[dict], names: list[str], now_key: int) -> list[dict]:
    last_known = {}
    for point in points:
        for name in names:
            if name in point:
                last_known[name] = (point["time"], point[name])
    out = []
    for name in names:
        if name not in last_known:
            continue
        from_time, severity = last_known[name]
        if now_key < from_time:
            continue
        out.append({"symptom": name, "severity": severity, "from_time": from_time, "to_time": now_key})
    return out


def intake_markers(intake: list[dict], axis: str, unit: str = "ml") -> list[dict]:
    """Low and high pace intake events, each scored against its own calendar day."""
    by_day = defaultdict(list)
    for entry in intake:
        by_day[entry["timestamp"].date()].append(entry)
    markers = []
    for day in sorted(by_day):
        for entry, score in risk.intake_markers(by_day[day]):
            markers.append({
                "time": _time_key(entry["timestamp"], axis),
                "risk_level": score["risk_level"],
                "y": _MARKER_Y[score["risk_level"]],
                "label": f"{format_volume(entry['amount'], unit)} ({score['risk_level']})",
            })
    markers.sort(key=lambda m: m["time"])
    return markers


def build_series(
    symptoms: list[dict],
    medications: list[dict],
    intake: list[dict],
    time_range: str,
    now: datetime,
    unit: str = "ml",
) -> dict:
    axis = axis_for(time_range)
    names = symptom_names(symptoms)
    points = sample_points(symptoms, axis)
    now_key = _time_key(now, axis)
    return {
        "range": time_range,
        "axis": axis,
        "symptoms": names,
        "points": points,
        "projections": projections(points, names, now_key) if time_range == TODAY else [],
        "now": now_key if time_range == TODAY else None,
        "medications": [
            {"time": _time_key(m["timestamp"], axis), "label": medication_label(m)}
            for m in sorted(medications, key=lambda m: m["timestamp"])
        ],
        "intake_markers": intake_markers(intake, axis, unit),
    }
