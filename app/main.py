import logging

from fastapi import FastAPI

from app.core.config import load_config
from app.core.errors import DatabaseConnectionError
from app.db.collections import ensure_indexes
from app.db.connection import MongoConnectionManager
from app.observability.logger import init_sentry, log_warning
from app.routes.bookings import router as bookings_router
from app.routes.events import router as events_router
from app.routes.health import router as health_router

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="DevEvent Hub")


@app.on_event("startup")
def _startup():
    init_sentry()

    # Missing MONGODB_URI raises ConfigurationError and aborts startup.
    config = load_config()
    manager = MongoConnectionManager.from_config(config, initializer=ensure_indexes)
    app.state.config = config
    app.state.db = manager

    try:
        manager.get_connection()
    except DatabaseConnectionError as e:
        # The cached attempt is cleared; the first request retries.
        log_warning("Database not reachable at startup", {"error": str(e), "database": config.mongodb_db})


@app.on_event("shutdown")
def _shutdown():
    manager = getattr(app.state, "db", None)
    if manager is not None:
        manager.close()
        app.state.db = None


# Routes
app.include_router(health_router, tags=["health"])
app.include_router(events_router, prefix="/events", tags=["events"])
app.include_router(bookings_router, tags=["bookings"])


@app.get("/")
def health():
    return {"status": "ok"}
