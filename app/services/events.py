from typing import Any, Dict, List, Optional

from bson import ObjectId

from app.core.errors import EventNotFound, SlugConflictError, ValidationFailed
from app.core.models import EventDocument
from app.db.collections import EVENTS
from app.observability.logger import log_event, timing
from app.storage.events import EventRepository
from app.validation.event_validator import EVENT_FIELDS, validate_event


class EventService:
    """Write path for events: validate, normalize, then hand to the repository."""

    def __init__(self, repository: EventRepository):
        self.repository = repository

    def create(self, payload: Dict[str, Any]) -> EventDocument:
        """
        Validate and insert a new event.

        Raises:
            ValidationFailed: If any field is missing or malformed
            SlugConflictError: If another event already has the derived slug
        """
        with timing("event_create") as t:
            result = validate_event(payload)
            if not result.ok:
                log_event("rejected", EVENTS, outcome="validation",
                          fields=[i.field for i in result.issues])
                raise ValidationFailed(result.issues)

            try:
                event = self.repository.insert(result.value)
            except SlugConflictError:
                log_event("rejected", EVENTS, outcome="conflict", slug=result.value["slug"])
                raise

        log_event("created", EVENTS, duration_ms=t.get_duration_ms(), slug=event.slug)
        return event

    def update(self, slug: str, changes: Dict[str, Any]) -> EventDocument:
        """
        Apply a partial update, re-deriving the slug if the title changed
        and re-normalizing date and time.

        Raises:
            EventNotFound: If no event has this slug
            ValidationFailed: If the merged event is invalid
            SlugConflictError: If the new slug is already taken
        """
        existing = self.repository.find_raw_by_slug(slug)
        if existing is None:
            raise EventNotFound(slug)

        result = validate_event(changes, existing=existing)
        if not result.ok:
            log_event("rejected", EVENTS, outcome="validation", slug=slug,
                      fields=[i.field for i in result.issues])
            raise ValidationFailed(result.issues)

        fields = {k: v for k, v in result.value.items() if k in EVENT_FIELDS}
        try:
            event = self.repository.update(existing["_id"], fields)
        except SlugConflictError:
            log_event("rejected", EVENTS, outcome="conflict", slug=fields["slug"])
            raise
        if event is None:
            raise EventNotFound(slug)

        log_event("updated", EVENTS, slug=event.slug, previous_slug=slug)
        return event

    def delete(self, slug: str) -> None:
        existing = self.repository.find_raw_by_slug(slug)
        if existing is None or not self.repository.delete(existing["_id"]):
            raise EventNotFound(slug)
        log_event("deleted", EVENTS, slug=slug)

    def get(self, slug: str) -> EventDocument:
        event = self.repository.find_by_slug(slug)
        if event is None:
            raise EventNotFound(slug)
        return event

    def get_by_id(self, event_id: str) -> EventDocument:
        event = self.repository.find_by_id(event_id)
        if event is None:
            raise EventNotFound(event_id)
        return event

    def list(self, tag: Optional[str] = None, mode: Optional[str] = None, limit: int = 50) -> List[EventDocument]:
        return self.repository.list(tag=tag, mode=mode, limit=limit)

    def object_id_for(self, slug: str) -> ObjectId:
        return ObjectId(self.get(slug).id)
