from typing import Any, Dict, List

from app.core.errors import ReferencedEventNotFound, ValidationFailed
from app.core.models import BookingDocument
from app.db.collections import BOOKINGS
from app.observability.logger import log_event
from app.services.events import EventService
from app.storage.bookings import BookingRepository
from app.validation.booking_validator import validate_booking


class BookingService:
    def __init__(self, repository: BookingRepository, events: EventService):
        self.repository = repository
        self.events = events

    def create(self, payload: Dict[str, Any]) -> BookingDocument:
        """
        Validate a booking and write it if its event exists.

        Raises:
            ValidationFailed: If the email or event id is malformed
            ReferencedEventNotFound: If the event does not exist
        """
        result = validate_booking(payload)
        if not result.ok:
            log_event("rejected", BOOKINGS, outcome="validation",
                      fields=[i.field for i in result.issues])
            raise ValidationFailed(result.issues)

        try:
            booking = self.repository.create(result.value)
        except ReferencedEventNotFound:
            log_event("rejected", BOOKINGS, outcome="missing_event",
                      event_id=str(result.value["event_id"]))
            raise

        log_event("created", BOOKINGS, event_id=booking.event_id, email=booking.email)
        return booking

    def create_for_slug(self, slug: str, email: str) -> BookingDocument:
        event = self.events.get(slug)
        return self.create({"event_id": event.id, "email": email})

    def list_for_event(self, slug: str) -> List[BookingDocument]:
        return self.repository.list_for_event(self.events.object_id_for(slug))
