from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from app.core.models import EventDocument


class EventCreateRequest(BaseModel):
    # Presence and shape are checked by the event validator so that every
    # rejected field is reported with the same error format.
    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[List[str]] = None
    organizer: Optional[str] = None
    tags: Optional[List[str]] = None


class EventUpdateRequest(EventCreateRequest):
    pass


class EventResponse(BaseModel):
    id: str
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, event: EventDocument) -> "EventResponse":
        return cls(**event.model_dump())


class EventListResponse(BaseModel):
    ok: bool = True
    count: int
    events: List[EventResponse]
