from typing import Any, Dict, List

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.collection import Collection

from app.core.errors import ReferencedEventNotFound
from app.core.models import BookingDocument, utc_now
from app.db.collections import BOOKINGS, EVENTS
from app.db.connection import MongoConnectionManager


class BookingRepository:
    """Writes bookings after checking the referenced event exists."""

    def __init__(self, manager: MongoConnectionManager):
        self._manager = manager

    @property
    def collection(self) -> Collection:
        return self._manager.get_database()[BOOKINGS]

    def create(self, fields: Dict[str, Any]) -> BookingDocument:
        """
        Insert a validated booking.

        Args:
            fields: Normalized booking with an ObjectId event_id and trimmed email

        Raises:
            ReferencedEventNotFound: If no event has the given id
        """
        if not self._manager.transactions:
            return self._create(fields)

        client = self._manager.get_connection()
        with client.start_session() as session:
            with session.start_transaction():
                return self._create(fields, session=session)

    def _create(self, fields: Dict[str, Any], session=None) -> BookingDocument:
        database = self._manager.get_database()
        extra = {"session": session} if session is not None else {}

        event_exists = database[EVENTS].find_one({"_id": fields["event_id"]}, {"_id": 1}, **extra)
        if event_exists is None:
            raise ReferencedEventNotFound(str(fields["event_id"]))

        now = utc_now()
        doc = {**fields, "created_at": now, "updated_at": now}
        result = database[BOOKINGS].insert_one(doc, **extra)
        doc["_id"] = result.inserted_id
        return BookingDocument.from_mongo(doc)

    def list_for_event(self, event_id: ObjectId) -> List[BookingDocument]:
        cursor = self.collection.find({"event_id": event_id}).sort("created_at", ASCENDING)
        return [BookingDocument.from_mongo(doc) for doc in cursor]
