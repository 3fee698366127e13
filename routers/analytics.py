from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from analysis import (
    RANGE_DAYS,
    compute_stats,
    daily_totals,
    hourly_distribution,
    intake_symptom_correlations,
)
from config import _now_local, _today_local
from daylog import events_for_range, intake_days, symptom_days
from routers.deps import get_store
from routers.log_utils import _event_json
from store import INTAKE, MEDICATION, SYMPTOM, Store
from symptom_series import RANGES, TODAY, build_series
from timeline import merge_events
from units import UNITS, get_unit, ml_to_unit

router = APIRouter()


@router.get("/api/units")
def api_units():
    return JSONResponse({"units": [{"key": k, **u} for k, u in UNITS.items()]})


@router.get("/api/timeline")
def api_timeline(unit: str = "ml", store: Store = Depends(get_store)):
    events = events_for_range(store, TODAY, _today_local())
    merged = merge_events(events[INTAKE], events[MEDICATION], events[SYMPTOM], unit)
    return JSONResponse({
        "date": _today_local().isoformat(),
        "unit": get_unit(unit),
        "events": [_event_json(e) for e in merged],
    })


@router.get("/api/analytics")
def api_analytics(range: str = "week", unit: str = "ml", store: Store = Depends(get_store)):
    time_range = range if range in RANGE_DAYS else "week"
    today = _today_local()
    days, today_summary = intake_days(store, today)
    stats = compute_stats(days)
    stats["avg7_unit"] = ml_to_unit(stats["avg7"], unit)
    return JSONResponse({
        "range": time_range,
        "unit": get_unit(unit),
        "has_history": len(days) > 1 or today_summary["total_ml"] > 0,
        "stats": stats,
        "goal": ml_to_unit(today_summary["goal_ml"], unit),
        "daily": daily_totals(days, time_range, unit),
        "hourly": hourly_distribution(today_summary, unit) if today_summary["entries"] else [],
        "correlations": intake_symptom_correlations(days, symptom_days(store, today)),
    })


@router.get("/api/symptoms/series")
def api_symptom_series(range: str = TODAY, unit: str = "ml", store: Store = Depends(get_store)):
    time_range = range if range in RANGES else TODAY
    events = events_for_range(store, time_range, _today_local())
    series = build_series(
        events[SYMPTOM], events[MEDICATION], events[INTAKE], time_range, _now_local(), unit
    )
    return JSONResponse(series)


@router.get("/api/export")
def api_export(store: Store = Depends(get_store)):
    now = _now_local()
    return JSONResponse(
        store.export_all(now),
        headers={
            "Content-Disposition": f'attachment; filename="tracker-export-{now.date().isoformat()}.json"'
        },
    )
