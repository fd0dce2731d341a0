from fastapi import APIRouter, Depends

from app.core.errors import DevEventError
from app.routes.deps import get_booking_service, require_api_key, to_http_error
from app.schemas.bookings import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    EventBookingRequest,
)
from app.services.bookings import BookingService


router = APIRouter()


@router.post("/bookings", status_code=201, response_model=BookingResponse)
def create_booking(body: BookingCreateRequest, service: BookingService = Depends(get_booking_service)):
    """Book a seat for an email on the event with the given id."""
    try:
        booking = service.create(body.model_dump())
    except DevEventError as exc:
        raise to_http_error(exc)
    return BookingResponse.from_document(booking)


@router.post("/events/{slug}/bookings", status_code=201, response_model=BookingResponse)
def create_event_booking(slug: str, body: EventBookingRequest, service: BookingService = Depends(get_booking_service)):
    try:
        booking = service.create_for_slug(slug, body.email)
    except DevEventError as exc:
        raise to_http_error(exc)
    return BookingResponse.from_document(booking)


@router.get("/events/{slug}/bookings", response_model=BookingListResponse, dependencies=[Depends(require_api_key)])
def list_event_bookings(slug: str, service: BookingService = Depends(get_booking_service)):
    try:
        bookings = service.list_for_event(slug)
    except DevEventError as exc:
        raise to_http_error(exc)
    return BookingListResponse(
        slug=slug,
        count=len(bookings),
        bookings=[BookingResponse.from_document(b) for b in bookings],
    )
