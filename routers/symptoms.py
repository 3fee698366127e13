from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from config import SEVERITY_MAX, SEVERITY_MIN, _now_local, _today_local
from daylog import live_events
from records import parse_number, serialize_events
from routers.deps import get_store
from routers.log_utils import _clean_text, _event_json, _new_id, _without_index
from store import SYMPTOM, Store
from timeline import symptom_label

router = APIRouter()


def _catalog_state(store: Store) -> dict:
    return {"symptoms": [{"id": s["id"], "name": s["name"]} for s in store.load_catalog(SYMPTOM)]}


def _log_state(store: Store) -> dict:
    items = []
    for index, e in enumerate(live_events(store, SYMPTOM, _today_local())):
        item = _event_json(e)
        item["index"] = index
        item["label"] = symptom_label(e)
        items.append(item)
    return {"date": _today_local().isoformat(), "entries": items}


def _valid_severity(value):
    n = parse_number(value)
    if n is None or n != int(n) or not (SEVERITY_MIN <= n <= SEVERITY_MAX):
        return None
    return int(n)


@router.get("/api/symptoms/catalog")
def api_symptom_catalog(store: Store = Depends(get_store)):
    return JSONResponse(_catalog_state(store))


@router.post("/api/symptoms/catalog")
def api_symptom_catalog_add(payload: dict = Body(...), store: Store = Depends(get_store)):
    name = _clean_text(payload.get("name"))
    if not name:
        return JSONResponse({"ok": False, **_catalog_state(store)})
    with store.locked():
        symptoms = store.load_catalog(SYMPTOM)
        symptoms.append({"id": _new_id(_now_local(), {s["id"] for s in symptoms}), "name": name})
        store.save_catalog(SYMPTOM, symptoms)
    return JSONResponse({"ok": True, **_catalog_state(store)})


@router.post("/api/symptoms/catalog/{symptom_id}/delete")
def api_symptom_catalog_delete(symptom_id: str, store: Store = Depends(get_store)):
    with store.locked():
        symptoms = store.load_catalog(SYMPTOM)
        kept = [s for s in symptoms if s["id"] != symptom_id]
        if len(kept) == len(symptoms):
            return JSONResponse({"ok": False, **_catalog_state(store)})
        store.save_catalog(SYMPTOM, kept)
    return JSONResponse({"ok": True, **_catalog_state(store)})


@router.get("/api/symptoms/log")
def api_symptom_log(store: Store = Depends(get_store)):
    return JSONResponse(_log_state(store))


@router.post("/api/symptoms/{symptom_id}/log")
def api_symptom_log_severity(symptom_id: str, payload: dict = Body(...), store: Store = Depends(get_store)):
    symptom = next((s for s in store.load_catalog(SYMPTOM) if s["id"] == symptom_id), None)
    severity = _valid_severity(payload.get("severity"))
    if symptom is None or severity is None:
        return JSONResponse({"ok": False, **_log_state(store)})
    with store.locked():
        entries = live_events(store, SYMPTOM, _today_local())
        entries.append({
            "symptom_id": symptom["id"],
            "name": symptom["name"],
            "severity": severity,
            "timestamp": _now_local(),
        })
        store.save_daily_log(SYMPTOM, _today_local(), serialize_events(entries))
    return JSONResponse({"ok": True, **_log_state(store)})


@router.post("/api/symptoms/log/{index}/delete")
def api_symptom_log_delete(index: int, store: Store = Depends(get_store)):
    with store.locked():
        remaining = _without_index(live_events(store, SYMPTOM, _today_local()), index)
        if remaining is None:
            return JSONResponse({"ok": False, **_log_state(store)})
        store.save_daily_log(SYMPTOM, _today_local(), serialize_events(remaining))
    return JSONResponse({"ok": True, **_log_state(store)})
