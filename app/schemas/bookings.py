from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from app.core.models import BookingDocument


class BookingCreateRequest(BaseModel):
    event_id: Optional[str] = None
    email: Optional[str] = None


class EventBookingRequest(BaseModel):
    email: Optional[str] = None


class BookingResponse(BaseModel):
    id: str
    event_id: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, booking: BookingDocument) -> "BookingResponse":
        return cls(**booking.model_dump())


class BookingListResponse(BaseModel):
    ok: bool = True
    slug: str
    count: int
    bookings: List[BookingResponse]
