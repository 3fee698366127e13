from typing import Optional

import risk
from units import format_volume

WATER = "water"
PILL = "pill"
SYMPTOM = "symptom"


def medication_label(event: dict) -> str:
    return f"{event['name']} {event['dosage']}" if event.get("dosage") else event["name"]


def symptom_label(event: dict) -> str:
    return f"{event['name']} {event['severity']}/5"


def merge_events(
    intake: list[dict],
    medications: list[dict],
    symptoms: Optional[list[dict]] = None,
    unit: str = "ml",
) -> list[dict]:
    """Merge one day's event streams into a single newest-first timeline.

    Each water event is scored against the full intake list. Ties keep input
    order: water, then medications, then symptoms.
    """
    events = []
    for entry in intake:
        score = risk.score_intake(entry, intake)
        events.append({
            "type": WATER,
            "timestamp": entry["timestamp"],
            "label": format_volume(entry["amount"], unit),
            "amount_ml": entry["amount"],
            "risk_level": score["risk_level"],
            "window_sum_ml": score["window_sum_ml"],
            "window_start": score["window_start"],
            "note": risk.describe(score, unit),
        })
    for entry in medications:
        events.append({"type": PILL, "timestamp": entry["timestamp"], "label": medication_label(entry)})
    for entry in symptoms or []:
        events.append({
            "type": SYMPTOM,
            "timestamp": entry["timestamp"],
            "label": symptom_label(entry),
            "severity": entry["severity"],
        })
    return sorted(events, key=lambda e: e["timestamp"], reverse=True)
