"""
Dependency wiring for the routes.

The connection manager and config are created once by the application
startup routine and kept on app.state; routes receive them (and the
services built on them) through FastAPI dependencies.
"""

from fastapi import Depends, HTTPException, Request

from app.core.config import AppConfig
from app.core.errors import (
    DatabaseConnectionError,
    DevEventError,
    EventNotFound,
    ReferencedEventNotFound,
    SlugConflictError,
    ValidationFailed,
)
from app.db.connection import MongoConnectionManager
from app.services.bookings import BookingService
from app.services.events import EventService
from app.storage.bookings import BookingRepository
from app.storage.events import EventRepository


def get_app_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="Service not configured")
    return config


def get_connection_manager(request: Request) -> MongoConnectionManager:
    manager = getattr(request.app.state, "db", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return manager


def get_event_service(manager: MongoConnectionManager = Depends(get_connection_manager)) -> EventService:
    return EventService(EventRepository(manager))


def get_booking_service(
    manager: MongoConnectionManager = Depends(get_connection_manager),
    events: EventService = Depends(get_event_service),
) -> BookingService:
    return BookingService(BookingRepository(manager), events)


def require_api_key(request: Request, config: AppConfig = Depends(get_app_config)) -> None:
    if not config.api_key:
        return
    provided = request.headers.get("x-api-key")
    if provided != config.api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def to_http_error(exc: DevEventError) -> HTTPException:
    """Map a service error onto the HTTP status returned to clients."""
    if isinstance(exc, ValidationFailed):
        return HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.to_list()})
    if isinstance(exc, SlugConflictError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (EventNotFound, ReferencedEventNotFound)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, DatabaseConnectionError):
        return HTTPException(status_code=503, detail="Database unavailable")
    return HTTPException(status_code=500, detail=str(exc))
