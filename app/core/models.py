from datetime import datetime, timezone
from typing import Any, Dict, List

from bson import ObjectId
from pydantic import BaseModel, field_validator


def utc_now() -> datetime:
    """Current UTC time at the millisecond precision the store keeps."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_utc(value: datetime) -> datetime:
    # Clients without tz_aware hand back naive UTC datetimes.
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Timestamped(BaseModel):
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps_are_utc(cls, value):
        return _as_utc(value)


class EventDocument(Timestamped):
    """Event as stored in the events collection."""

    id: str
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM, 24-hour
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]

    @classmethod
    def from_mongo(cls, doc: Dict[str, Any]) -> "EventDocument":
        data = {k: v for k, v in doc.items() if k != "_id"}
        return cls(id=str(doc["_id"]), **data)


class BookingDocument(Timestamped):
    """Booking as stored in the bookings collection."""

    id: str
    event_id: str
    email: str

    @classmethod
    def from_mongo(cls, doc: Dict[str, Any]) -> "BookingDocument":
        event_id = doc["event_id"]
        return cls(
            id=str(doc["_id"]),
            event_id=str(event_id) if isinstance(event_id, ObjectId) else event_id,
            email=doc["email"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )
