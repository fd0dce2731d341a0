from pymongo import ASCENDING
from pymongo.database import Database


EVENTS = "events"
BOOKINGS = "bookings"


def ensure_indexes(database: Database) -> None:
    """Create the unique slug index on events and the event_id lookup index on bookings."""
    database[EVENTS].create_index([("slug", ASCENDING)], unique=True, name="slug_unique")
    database[EVENTS].create_index([("date", ASCENDING), ("time", ASCENDING)], name="date_time")
    database[BOOKINGS].create_index([("event_id", ASCENDING)], name="event_id")
