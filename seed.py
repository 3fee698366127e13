"""
Seed script: populates demo data for the tracker.

- Replaces the water, medication and symptom history with the last
  DAYS days of generated data, plus a partially filled log for today.
- Catalogs get a fixed set of demo medications and symptoms.
- Deterministic for a given seed value.

Usage:
    python3 seed.py
"""

import random
from datetime import date, datetime, time, timedelta

import db
from analysis import summarize_intake_day
from config import DEFAULT_DAILY_GOAL_ML
from daylog import archive_record
from records import serialize_events
from store import INTAKE, MEDICATION, SYMPTOM, Store

DAYS = 30

DEMO_MEDICATIONS = [
    {"id": "demo-med-1", "name": "Lisinopril", "dosage": "10mg"},
    {"id": "demo-med-2", "name": "Vitamin D", "dosage": None},
]
DEMO_SYMPTOMS = [
    {"id": "demo-sym-1", "name": "Headache"},
    {"id": "demo-sym-2", "name": "Fatigue"},
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def at(d: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(d, time(hour, minute))


def day_intake(rng: random.Random, d: date, last_hour: int = 22) -> list[dict]:
    if last_hour < 7:
        return []
    entries = []
    for hour in sorted(rng.sample(range(7, last_hour + 1), k=min(6, last_hour - 6))):
        amount = float(rng.choice((250, 250, 500, 750)))
        entries.append({"amount": amount, "timestamp": at(d, hour, rng.randrange(60))})
    return entries


def day_medications(d: date, last_hour: int = 23) -> list[dict]:
    events = []
    for med, hour in ((DEMO_MEDICATIONS[0], 8), (DEMO_MEDICATIONS[1], 13)):
        if hour <= last_hour:
            events.append({
                "medication_id": med["id"], "name": med["name"],
                "dosage": med["dosage"], "timestamp": at(d, hour, 5),
            })
    return events


def day_symptoms(rng: random.Random, d: date, last_hour: int = 23) -> list[dict]:
    events = []
    for sym in DEMO_SYMPTOMS:
        for hour in (9, 15, 21):
            if hour <= last_hour and rng.random() < 0.6:
                events.append({
                    "symptom_id": sym["id"], "name": sym["name"],
                    "severity": rng.randint(1, 5), "timestamp": at(d, hour, 30),
                })
    return events


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------

def seed(store: Store, now: datetime, days: int = DAYS, rng_seed: int = 7) -> dict:
    rng = random.Random(rng_seed)
    today = now.date()
    history = {INTAKE: [], MEDICATION: [], SYMPTOM: []}
    for offset in range(days, 0, -1):
        d = today - timedelta(days=offset)
        history[INTAKE].append(summarize_intake_day(d, day_intake(rng, d), DEFAULT_DAILY_GOAL_ML))
        history[MEDICATION].append(archive_record(MEDICATION, d, serialize_events(day_medications(d))))
        history[SYMPTOM].append(archive_record(SYMPTOM, d, serialize_events(day_symptoms(rng, d))))
    for domain, records in history.items():
        store.save_history(domain, records)

    store.save_catalog(MEDICATION, DEMO_MEDICATIONS)
    store.save_catalog(SYMPTOM, DEMO_SYMPTOMS)

    last_hour = now.hour - 1
    store.save_daily_log(
        INTAKE, today, serialize_events(day_intake(rng, today, last_hour)), goal=DEFAULT_DAILY_GOAL_ML
    )
    store.save_daily_log(MEDICATION, today, serialize_events(day_medications(today, last_hour)))
    store.save_daily_log(SYMPTOM, today, serialize_events(day_symptoms(rng, today, last_hour)))
    return {domain: len(records) for domain, records in history.items()}


if __name__ == "__main__":
    db.init_db()
    counts = seed(Store(), datetime.now().replace(microsecond=0))
    print(f"Seeded {counts[INTAKE]} days of history into {db.DB_PATH}")
