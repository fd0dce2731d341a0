from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from app.core.errors import SlugConflictError
from app.core.models import EventDocument, utc_now
from app.db.collections import EVENTS
from app.db.connection import MongoConnectionManager


class EventRepository:
    """Reads and writes already-validated event documents."""

    def __init__(self, manager: MongoConnectionManager):
        self._manager = manager

    @property
    def collection(self) -> Collection:
        return self._manager.get_database()[EVENTS]

    def insert(self, fields: Dict[str, Any]) -> EventDocument:
        """
        Insert a normalized event.

        Raises:
            SlugConflictError: If the slug is already taken
        """
        now = utc_now()
        doc = {**fields, "created_at": now, "updated_at": now}
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise SlugConflictError(fields["slug"]) from exc
        doc["_id"] = result.inserted_id
        return EventDocument.from_mongo(doc)

    def update(self, event_id: ObjectId, fields: Dict[str, Any]) -> Optional[EventDocument]:
        """
        Replace the event's fields with a normalized set.

        Returns None if the event disappeared in the meantime.

        Raises:
            SlugConflictError: If the new slug is already taken
        """
        changes = {**fields, "updated_at": utc_now()}
        try:
            doc = self.collection.find_one_and_update(
                {"_id": event_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise SlugConflictError(fields["slug"]) from exc
        return EventDocument.from_mongo(doc) if doc else None

    def delete(self, event_id: ObjectId) -> bool:
        return self.collection.delete_one({"_id": event_id}).deleted_count == 1

    def find_raw_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"slug": slug})

    def find_by_slug(self, slug: str) -> Optional[EventDocument]:
        doc = self.find_raw_by_slug(slug)
        return EventDocument.from_mongo(doc) if doc else None

    def find_by_id(self, event_id: str) -> Optional[EventDocument]:
        if not ObjectId.is_valid(event_id):
            return None
        doc = self.collection.find_one({"_id": ObjectId(event_id)})
        return EventDocument.from_mongo(doc) if doc else None

    def slug_exists(self, slug: str) -> bool:
        return self.collection.find_one({"slug": slug}, {"_id": 1}) is not None

    def list(self, tag: Optional[str] = None, mode: Optional[str] = None, limit: int = 50) -> List[EventDocument]:
        query: Dict[str, Any] = {}
        if tag:
            query["tags"] = tag
        if mode:
            query["mode"] = mode
        cursor = (
            self.collection.find(query)
            .sort([("date", ASCENDING), ("time", ASCENDING)])
            .limit(limit)
        )
        return [EventDocument.from_mongo(doc) for doc in cursor]
