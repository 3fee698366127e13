from collections import defaultdict
from datetime import date
from math import sqrt

from units import ml_to_unit

RANGE_DAYS = {"week": 7, "month": 30}
_AVG_WINDOW = 7


def _goal_met(day: dict) -> bool:
    return day["total_ml"] >= day["goal_ml"]


def summarize_intake_day(day: date, entries: list[dict], goal_ml: float) -> dict:
    """Aggregate one day of intake entries into an archival DaySummary."""
    ordered = sorted(entries, key=lambda e: e["timestamp"])
    return {
        "date": day.isoformat(),
        "total_ml": sum(e["amount"] for e in ordered),
        "goal_ml": goal_ml,
        "entry_count": len(ordered),
        "entries": [{"hour": e["timestamp"].hour, "ml": e["amount"]} for e in ordered],
    }


def combine_days(history: list[dict], today_summary: dict) -> list[dict]:
    days = [h for h in history if h["date"] != today_summary["date"]]
    days.append(today_summary)
    days.sort(key=lambda d: d["date"])
    return days


def compute_stats(days: list[dict]) -> dict:
    """Streaks, 7-day average and goal completion rate over date-ordered summaries."""
    current_streak = 0
    for day in reversed(days):
        if not _goal_met(day):
            break
        current_streak += 1

    best_streak = streak = 0
    for day in days:
        if _goal_met(day):
            streak += 1
            best_streak = max(best_streak, streak)
        else:
            streak = 0

    last = days[-_AVG_WINDOW:]
    avg7 = sum(d["total_ml"] for d in last) / len(last) if last else 0
    met = sum(1 for d in days if _goal_met(d))
    completion_rate = round(met / len(days) * 100) if days else 0
    return {
        "current_streak": current_streak,
        "best_streak": best_streak,
        "avg7": avg7,
        "completion_rate": completion_rate,
    }


def daily_totals(days: list[dict], time_range: str = "week", unit: str = "ml") -> list[dict]:
    count = RANGE_DAYS.get(time_range, RANGE_DAYS["week"])
    bars = []
    for d in days[-count:]:
        day = date.fromisoformat(d["date"])
        label = day.strftime("%a") if time_range != "month" else f"{day.month}/{day.day}"
        bars.append({
            "date": d["date"],
            "label": label,
            "amount": ml_to_unit(d["total_ml"], unit),
            "goal_met": _goal_met(d),
        })
    return bars


def _hour_label(hour: int) -> str:
    return f"{hour % 12 or 12}{'a' if hour < 12 else 'p'}"


def hourly_distribution(summary: dict, unit: str = "ml") -> list[dict]:
    buckets = [0.0] * 24
    for entry in summary["entries"]:
        buckets[entry["hour"]] += entry["ml"]
    return [
        {"hour": h, "label": _hour_label(h), "amount": ml_to_unit(ml, unit)}
        for h, ml in enumerate(buckets)
        if ml > 0 or 6 <= h <= 22
    ]


def _pearson(xs, ys):
    n = len(xs)
    if n < 3:
        return None
    mx, my = sum(xs) / n, sum(ys) / n
    cov = sx = sy = 0.0
    for x, y in zip(xs, ys):
        dx, dy = x - mx, y - my
        cov += dx * dy
        sx += dx * dx
        sy += dy * dy
    den = sqrt(sx * sy)
    return round(cov / den, 2) if den != 0 else None


def intake_symptom_correlations(days: list[dict], symptom_days: list[dict]) -> list[dict]:
    """Pearson r between daily intake and each symptom's average daily severity.

    symptom_days are archive records ({date, entries: [{name, severity, ...}]});
    only dates present in both inputs are paired.
    """
    totals = {d["date"]: d["total_ml"] for d in days}
    severities = defaultdict(lambda: defaultdict(list))
    for record in symptom_days:
        for entry in record["entries"]:
            severities[entry["name"]][record["date"]].append(entry["severity"])
    out = []
    for name in sorted(severities):
        common = sorted(d for d in severities[name] if d in totals)
        xs = [totals[d] for d in common]
        ys = [sum(severities[name][d]) / len(severities[name][d]) for d in common]
        out.append({"symptom": name, "days": len(common), "r": _pearson(xs, ys)})
    return out
