"""Key-value persistence for daily logs, day archives and catalogs.

Every read or write touches one whole record. Malformed values are treated
as absent and never raised to callers.
"""
import json
import logging
import threading
from datetime import date, datetime

import db
from config import HISTORY_MAX_DAYS
from records import format_instant

logger = logging.getLogger(__name__)

# Serializes read-modify-write sequences across request threads.
_write_lock = threading.RLock()

INTAKE = "intake"
MEDICATION = "medication"
SYMPTOM = "symptom"
DOMAINS = (INTAKE, MEDICATION, SYMPTOM)

LOG_KEYS = {
    INTAKE:     "water_log",
    MEDICATION: "medication_log",
    SYMPTOM:    "symptom_log",
}
HISTORY_KEYS = {
    INTAKE:     "water_history",
    MEDICATION: "medication_history",
    SYMPTOM:    "symptom_history",
}
CATALOG_KEYS = {
    MEDICATION: "medication_catalog",
    SYMPTOM:    "symptom_catalog",
}
KNOWN_KEYS = (
    list(LOG_KEYS.values()) + list(HISTORY_KEYS.values()) + list(CATALOG_KEYS.values())
)


class Store:
    def __init__(self, path: str = ""):
        self.path = path

    def locked(self):
        """Hold while reading a record that is about to be rewritten."""
        return _write_lock

    # -- raw records ---------------------------------------------------------

    def get(self, key: str):
        with db.get_db(self.path) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except ValueError:
            logger.warning("Ignoring unparseable value stored under %r", key)
            return None

    def put(self, key: str, value):
        with db.get_db(self.path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (key, json.dumps(value), format_instant(datetime.now())),
            )
            conn.commit()

    # -- daily logs ----------------------------------------------------------

    def load_log_record(self, domain: str) -> dict:
        record = self.get(LOG_KEYS[domain])
        if not isinstance(record, dict):
            if record is not None:
                logger.warning("Ignoring malformed %s log record", domain)
            return {}
        return record

    def load_daily_log(self, domain: str, today: date) -> list:
        """Stored entries when the log is tagged with today's date, otherwise []."""
        record = self.load_log_record(domain)
        if record.get("date") != today.isoformat():
            return []
        entries = record.get("entries")
        return entries if isinstance(entries, list) else []

    def save_daily_log(self, domain: str, today: date, entries: list, **extra):
        self.put(LOG_KEYS[domain], {"date": today.isoformat(), "entries": entries, **extra})

    # -- history -------------------------------------------------------------

    def load_history(self, domain: str) -> list[dict]:
        records = self.get(HISTORY_KEYS[domain])
        if not isinstance(records, list):
            if records is not None:
                logger.warning("Ignoring malformed %s history", domain)
            return []
        return [r for r in records if isinstance(r, dict) and isinstance(r.get("date"), str)]

    def save_history(self, domain: str, records: list[dict]):
        self.put(HISTORY_KEYS[domain], records)

    def archive_day(self, domain: str, record: dict) -> bool:
        """Append record unless its date is already archived; keep the newest HISTORY_MAX_DAYS."""
        with self.locked():
            history = self.load_history(domain)
            if any(h["date"] == record["date"] for h in history):
                logger.info("%s history already holds %s; skipping archive", domain, record["date"])
                return False
            history.append(record)
            history.sort(key=lambda h: h["date"])
            if len(history) > HISTORY_MAX_DAYS:
                evicted = history[:-HISTORY_MAX_DAYS]
                history = history[-HISTORY_MAX_DAYS:]
                logger.info(
                    "Evicted %d %s history day(s) up to %s", len(evicted), domain, evicted[-1]["date"]
                )
            self.save_history(domain, history)
        return True

    # -- catalogs ------------------------------------------------------------

    def load_catalog(self, domain: str) -> list[dict]:
        items = self.get(CATALOG_KEYS[domain])
        if not isinstance(items, list):
            return []
        return [i for i in items if isinstance(i, dict) and i.get("id") and i.get("name")]

    def save_catalog(self, domain: str, items: list[dict]):
        self.put(CATALOG_KEYS[domain], items)

    # -- export --------------------------------------------------------------

    def export_all(self, now: datetime) -> dict:
        data = {}
        for key in KNOWN_KEYS:
            value = self.get(key)
            if value is not None:
                data[key] = value
        return {"exported_at": format_instant(now), "data": data}
