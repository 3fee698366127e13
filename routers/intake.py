from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from config import QUICK_ADD_ML, _now_local, _today_local
from daylog import goal_from_record, live_events
from records import parse_number, serialize_events
from routers.deps import get_store
from routers.log_utils import _event_json, _without_index
from store import INTAKE, Store
from units import format_volume, get_unit, ml_to_unit, unit_to_ml

router = APIRouter()


def _intake_state(store: Store, unit: str) -> dict:
    entries = live_events(store, INTAKE, _today_local())
    goal = goal_from_record(store.load_log_record(INTAKE))
    total = sum(e["amount"] for e in entries)
    items = []
    for index, e in enumerate(entries):
        item = _event_json(e)
        item["index"] = index
        item["label"] = format_volume(e["amount"], unit)
        items.append(item)
    return {
        "date": _today_local().isoformat(),
        "unit": get_unit(unit),
        "entries": items,
        "total_ml": total,
        "total": ml_to_unit(total, unit),
        "goal_ml": goal,
        "goal": ml_to_unit(goal, unit),
        "progress_pct": round(min(total / goal * 100, 100)),
        "quick_add": [{"ml": ml, "label": format_volume(ml, unit)} for ml in QUICK_ADD_ML],
    }


def _save(store: Store, entries: list, goal: float):
    store.save_daily_log(INTAKE, _today_local(), serialize_events(entries), goal=goal)


@router.get("/api/intake")
def api_intake(unit: str = "ml", store: Store = Depends(get_store)):
    return JSONResponse(_intake_state(store, unit))


@router.post("/api/intake")
def api_intake_add(payload: dict = Body(...), store: Store = Depends(get_store)):
    unit = str(payload.get("unit") or "ml")
    amount = parse_number(payload.get("amount"))
    if amount is None or amount <= 0:
        return JSONResponse({"ok": False, **_intake_state(store, unit)})
    with store.locked():
        entries = live_events(store, INTAKE, _today_local())
        entries.append({"amount": unit_to_ml(amount, unit), "timestamp": _now_local()})
        _save(store, entries, goal_from_record(store.load_log_record(INTAKE)))
    return JSONResponse({"ok": True, **_intake_state(store, unit)})


@router.post("/api/intake/{index}/delete")
def api_intake_delete(index: int, unit: str = "ml", store: Store = Depends(get_store)):
    with store.locked():
        remaining = _without_index(live_events(store, INTAKE, _today_local()), index)
        if remaining is None:
            return JSONResponse({"ok": False, **_intake_state(store, unit)})
        _save(store, remaining, goal_from_record(store.load_log_record(INTAKE)))
    return JSONResponse({"ok": True, **_intake_state(store, unit)})


@router.post("/api/intake/goal")
def api_intake_goal(payload: dict = Body(...), store: Store = Depends(get_store)):
    unit = str(payload.get("unit") or "ml")
    goal = parse_number(payload.get("goal"))
    if goal is None or goal <= 0:
        return JSONResponse({"ok": False, **_intake_state(store, unit)})
    with store.locked():
        _save(store, live_events(store, INTAKE, _today_local()), unit_to_ml(goal, unit))
    return JSONResponse({"ok": True, **_intake_state(store, unit)})
