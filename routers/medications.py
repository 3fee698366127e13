from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from config import _now_local, _today_local
from daylog import live_events
from records import serialize_events
from routers.deps import get_store
from routers.log_utils import _clean_text, _event_json, _new_id, _without_index
from store import MEDICATION, Store
from timeline import medication_label

router = APIRouter()


def _catalog_state(store: Store) -> dict:
    meds = store.load_catalog(MEDICATION)
    return {
        "medications": [
            {"id": m["id"], "name": m["name"], "dosage": m.get("dosage"), "label": medication_label(m)}
            for m in meds
        ]
    }


def _log_state(store: Store) -> dict:
    items = []
    for index, e in enumerate(live_events(store, MEDICATION, _today_local())):
        item = _event_json(e)
        item["index"] = index
        item["label"] = medication_label(e)
        items.append(item)
    return {"date": _today_local().isoformat(), "entries": items}


@router.get("/api/medications/catalog")
def api_medication_catalog(store: Store = Depends(get_store)):
    return JSONResponse(_catalog_state(store))


@router.post("/api/medications/catalog")
def api_medication_catalog_add(payload: dict = Body(...), store: Store = Depends(get_store)):
    name = _clean_text(payload.get("name"))
    if not name:
        return JSONResponse({"ok": False, **_catalog_state(store)})
    with store.locked():
        meds = store.load_catalog(MEDICATION)
        meds.append({
            "id": _new_id(_now_local(), {m["id"] for m in meds}),
            "name": name,
            "dosage": _clean_text(payload.get("dosage")) or None,
        })
        store.save_catalog(MEDICATION, meds)
    return JSONResponse({"ok": True, **_catalog_state(store)})


@router.post("/api/medications/catalog/{med_id}/delete")
def api_medication_catalog_delete(med_id: str, store: Store = Depends(get_store)):
    with store.locked():
        meds = store.load_catalog(MEDICATION)
        kept = [m for m in meds if m["id"] != med_id]
        if len(kept) == len(meds):
            return JSONResponse({"ok": False, **_catalog_state(store)})
        store.save_catalog(MEDICATION, kept)
    return JSONResponse({"ok": True, **_catalog_state(store)})


@router.get("/api/medications/log")
def api_medication_log(store: Store = Depends(get_store)):
    return JSONResponse(_log_state(store))


@router.post("/api/medications/{med_id}/log")
def api_medication_log_dose(med_id: str, store: Store = Depends(get_store)):
    med = next((m for m in store.load_catalog(MEDICATION) if m["id"] == med_id), None)
    if med is None:
        return JSONResponse({"ok": False, **_log_state(store)})
    with store.locked():
        entries = live_events(store, MEDICATION, _today_local())
        entries.append({
            "medication_id": med["id"],
            "name": med["name"],
            "dosage": med.get("dosage"),
            "timestamp": _now_local(),
        })
        store.save_daily_log(MEDICATION, _today_local(), serialize_events(entries))
    return JSONResponse({"ok": True, **_log_state(store)})


@router.post("/api/medications/log/{index}/delete")
def api_medication_log_delete(index: int, store: Store = Depends(get_store)):
    with store.locked():
        remaining = _without_index(live_events(store, MEDICATION, _today_local()), index)
        if remaining is None:
            return JSONResponse({"ok": False, **_log_state(store)})
        store.save_daily_log(MEDICATION, _today_local(), serialize_events(remaining))
    return JSONResponse({"ok": True, **_log_state(store)})
