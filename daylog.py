"""Day lifecycle: rollover of stale live logs into history, and re-reading
archived days as events for the yesterday and week views.

Archives keep only the hour of each event, so rebuilt events sit at HH:00.
"""
import logging
from datetime import date, timedelta

from analysis import combine_days, summarize_intake_day
from config import DEFAULT_DAILY_GOAL_ML
from records import (
    coerce_day_summaries,
    coerce_intake,
    coerce_medications,
    coerce_symptoms,
    parse_day_tag,
)
from store import DOMAINS, INTAKE, MEDICATION, SYMPTOM, Store
from symptom_series import WEEK, YESTERDAY

logger = logging.getLogger(__name__)

_COERCE = {INTAKE: coerce_intake, MEDICATION: coerce_medications, SYMPTOM: coerce_symptoms}
_WEEK_DAYS = 7


def goal_from_record(record: dict) -> float:
    goal = record.get("goal")
    if isinstance(goal, (int, float)) and not isinstance(goal, bool) and goal > 0:
        return goal
    return DEFAULT_DAILY_GOAL_ML


def archive_record(domain: str, day: date, raw_entries, goal_ml: float = DEFAULT_DAILY_GOAL_ML) -> dict:
    events = _COERCE[domain](raw_entries)
    if domain == INTAKE:
        return summarize_intake_day(day, events, goal_ml)
    entries = []
    for e in sorted(events, key=lambda e: e["timestamp"]):
        item = {k: v for k, v in e.items() if k != "timestamp"}
        entries.append({"hour": e["timestamp"].hour, **item})
    return {"date": day.isoformat(), "entries": entries}


def roll_over(store: Store, today: date) -> list[tuple[str, str]]:
    """Archive and reset every live log whose date tag is not today.

    Logs tagged after today (a client clock ahead of the server's) are
    archived too, so their entries survive in history. Returns the
    (domain, date) pairs that were archived.
    """
    archived = []
    with store.locked():
        for domain in DOMAINS:
            record = store.load_log_record(domain)
            if not record or record.get("date") == today.isoformat():
                continue
            extra = {"goal": goal_from_record(record)} if domain == INTAKE else {}
            day = parse_day_tag(record.get("date"))
            entries = record.get("entries")
            if day is None:
                logger.warning("Discarding %s log with unusable date tag %r", domain, record.get("date"))
            elif domain == INTAKE or _COERCE[domain](entries):
                if day > today:
                    logger.warning("Archiving %s log dated %s, after today %s", domain, day, today)
                rec = archive_record(domain, day, entries, extra.get("goal", DEFAULT_DAILY_GOAL_ML))
                if store.archive_day(domain, rec):
                    archived.append((domain, rec["date"]))
                    logger.info("Archived %s log for %s", domain, rec["date"])
            store.save_daily_log(domain, today, [], **extra)
    return archived


def live_events(store: Store, domain: str, today: date) -> list[dict]:
    return _COERCE[domain](store.load_daily_log(domain, today))


def events_from_archive(domain: str, record: dict) -> list[dict]:
    """Rebuild events from an archived day; each lands on the hour it was logged in."""
    day = record["date"]
    rows = []
    for entry in record.get("entries") or []:
        if not isinstance(entry, dict):
            continue
        hour = entry.get("hour")
        if not isinstance(hour, int) or isinstance(hour, bool) or not 0 <= hour <= 23:
            continue
        row = {k: v for k, v in entry.items() if k not in ("hour", "ml")}
        if domain == INTAKE:
            row["amount"] = entry.get("ml")
        row["timestamp"] = f"{day}T{hour:02d}:00:00"
        rows.append(row)
    return _COERCE[domain](rows)


def archived_events(store: Store, domain: str, days: list[date]) -> list[dict]:
    wanted = {d.isoformat() for d in days}
    events = []
    for record in store.load_history(domain):
        if record["date"] in wanted:
            events.extend(events_from_archive(domain, record))
    return events


def range_days(time_range: str, today: date) -> list[date]:
    if time_range == YESTERDAY:
        return [today - timedelta(days=1)]
    if time_range == WEEK:
        return [today - timedelta(days=n) for n in range(_WEEK_DAYS - 1, -1, -1)]
    return [today]


def events_for_range(store: Store, time_range: str, today: date) -> dict:
    """Intake, medication and symptom events for a range; today always comes from the live logs."""
    days = range_days(time_range, today)
    past = [d for d in days if d != today]
    out = {}
    for domain in DOMAINS:
        events = archived_events(store, domain, past) if past else []
        if today in days:
            events.extend(live_events(store, domain, today))
        out[domain] = sorted(events, key=lambda e: e["timestamp"])
    return out


def intake_days(store: Store, today: date) -> tuple[list[dict], dict]:
    """History summaries plus a live summary for today; returns (all_days, today_summary)."""
    goal = goal_from_record(store.load_log_record(INTAKE))
    today_summary = summarize_intake_day(today, live_events(store, INTAKE, today), goal)
    history = coerce_day_summaries(store.load_history(INTAKE))
    return combine_days(history, today_summary), today_summary


def symptom_days(store: Store, today: date) -> list[dict]:
    """Archived symptom days plus today's live log, as {date, entries} records."""
    days = [
        {"date": r["date"], "entries": events_from_archive(SYMPTOM, r)}
        for r in store.load_history(SYMPTOM)
        if r["date"] != today.isoformat()
    ]
    days.append({"date": today.isoformat(), "entries": live_events(store, SYMPTOM, today)})
    return days
