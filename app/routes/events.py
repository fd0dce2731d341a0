from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.core.config import AppConfig
from app.core.errors import DevEventError
from app.observability.logger import log_error
from app.routes.deps import get_app_config, get_event_service, require_api_key, to_http_error
from app.schemas.events import EventCreateRequest, EventListResponse, EventResponse, EventUpdateRequest
from app.services.events import EventService


router = APIRouter()


@router.get("", response_model=EventListResponse)
def list_events(
    tag: Optional[str] = None,
    mode: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1),
    service: EventService = Depends(get_event_service),
    config: AppConfig = Depends(get_app_config),
):
    """List events ordered by date and time, optionally filtered by tag or mode."""
    page_limit = min(limit or config.events_page_limit, config.events_page_limit)
    try:
        events = service.list(tag=tag, mode=mode, limit=page_limit)
    except DevEventError as exc:
        log_error(exc, {"route": "list_events"})
        raise to_http_error(exc)
    return EventListResponse(
        count=len(events),
        events=[EventResponse.from_document(e) for e in events],
    )


@router.post("", status_code=201, response_model=EventResponse, dependencies=[Depends(require_api_key)])
def create_event(body: EventCreateRequest, service: EventService = Depends(get_event_service)):
    try:
        event = service.create(body.model_dump(exclude_none=True))
    except DevEventError as exc:
        raise to_http_error(exc)
    return EventResponse.from_document(event)


@router.get("/by-id/{event_id}", response_model=EventResponse)
def get_event_by_id(event_id: str, service: EventService = Depends(get_event_service)):
    try:
        return EventResponse.from_document(service.get_by_id(event_id))
    except DevEventError as exc:
        raise to_http_error(exc)


@router.get("/{slug}", response_model=EventResponse)
def get_event(slug: str, service: EventService = Depends(get_event_service)):
    try:
        return EventResponse.from_document(service.get(slug))
    except DevEventError as exc:
        raise to_http_error(exc)


@router.patch("/{slug}", response_model=EventResponse, dependencies=[Depends(require_api_key)])
def update_event(slug: str, body: EventUpdateRequest, service: EventService = Depends(get_event_service)):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        event = service.update(slug, changes)
    except DevEventError as exc:
        raise to_http_error(exc)
    return EventResponse.from_document(event)


@router.delete("/{slug}", status_code=204, dependencies=[Depends(require_api_key)])
def delete_event(slug: str, service: EventService = Depends(get_event_service)):
    try:
        service.delete(slug)
    except DevEventError as exc:
        raise to_http_error(exc)
    return Response(status_code=204)
