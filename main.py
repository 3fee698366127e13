import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

import config
import db
from config import TZ_OFFSET_COOKIE_NAME, _configure_logging, _set_client_clock
from routers import analytics, intake, medications, symptoms

_configure_logging()
logger = logging.getLogger(__name__)

db.init_db()
logger.info("Using database %s", db.DB_PATH)

app = FastAPI(title="Hydration & Symptom Tracker")
app.include_router(intake.router)
app.include_router(medications.router)
app.include_router(symptoms.router)
app.include_router(analytics.router)


@app.middleware("http")
async def client_clock_middleware(request: Request, call_next):
    _set_client_clock(request.cookies.get(TZ_OFFSET_COOKIE_NAME, ""))
    return await call_next(request)


@app.get("/")
def root():
    return RedirectResponse(url="/docs", status_code=303)


def serve():
    logger.info("Starting tracker on %s:%d", config.HOST, config.PORT)
    uvicorn.run("main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    serve()
