import logging
import os
from contextvars import ContextVar
from datetime import date, datetime, timedelta, timezone
from typing import Optional

DB_PATH = os.environ.get("TRACKER_DB_PATH", "").strip() or "tracker.db"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
HOST = os.environ.get("TRACKER_HOST", "").strip() or "127.0.0.1"
PORT = int(os.environ.get("TRACKER_PORT", "").strip() or "8000")

TZ_OFFSET_COOKIE_NAME = "tz_offset"
INSTANT_FORMAT = "%Y-%m-%dT%H:%M:%S"

DEFAULT_DAILY_GOAL_ML = 2000
QUICK_ADD_ML = (250, 500, 750, 1000)
HISTORY_MAX_DAYS = 90

RISK_WINDOW = timedelta(hours=1)
ADEQUATE_THRESHOLD_ML = 500
HIGH_THRESHOLD_ML = 946

SEVERITY_MIN = 1
SEVERITY_MAX = 5

_client_now: ContextVar[Optional[datetime]] = ContextVar("_client_now", default=None)
_client_tz_offset_min: ContextVar[Optional[int]] = ContextVar("_client_tz_offset_min", default=None)


def _configure_logging():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _set_client_clock(tz_offset_cookie: str):
    """Set per-request client-local clock derived from JS timezone offset cookie."""
    offset = None
    try:
        offset = int((tz_offset_cookie or "").strip())
    except ValueError:
        offset = None
    if offset is not None and -840 <= offset <= 840:
        _client_tz_offset_min.set(offset)
        utc_now = datetime.now(timezone.utc).replace(tzinfo=None)
        _client_now.set(utc_now - timedelta(minutes=offset))
        return
    _client_tz_offset_min.set(None)
    _client_now.set(datetime.now())


def _now_local() -> datetime:
    return (_client_now.get() or datetime.now()).replace(microsecond=0)


def _today_local() -> date:
    return _now_local().date()


def _to_local_naive(dt: datetime) -> datetime:
    """Convert an aware datetime to request-local naive time; naive input is returned as is."""
    if dt.tzinfo is None:
        return dt
    offset = _client_tz_offset_min.get()
    dt_utc = dt.astimezone(timezone.utc).replace(tzinfo=None)
    if offset is not None:
        return dt_utc - timedelta(minutes=offset)
    server_tz = datetime.now().astimezone().tzinfo
    return dt_utc.replace(tzinfo=timezone.utc).astimezone(server_tz).replace(tzinfo=None)
