from uuid import uuid4

import mongomock
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.config import AppConfig
from app.db.collections import ensure_indexes
from app.db.connection import MongoConnectionManager
from app.main import app


EVENT = {
    "title": "HackNight 2024",
    "description": "An evening hackathon.",
    "overview": "Build, demo, win.",
    "image": "https://example.com/hack.png",
    "venue": "Factory",
    "location": "Lisbon, Portugal",
    "date": "2024-10-12",
    "time": "17:00",
    "mode": "in-person",
    "audience": "Developers and designers",
    "agenda": ["Kickoff", "Hacking", "Demos"],
    "organizer": "Lisbon Hackers",
    "tags": ["hackathon"],
}


class TestBookingsApi:
    """Test booking endpoints, including the referential check."""

    def setup_method(self):
        app.state.config = AppConfig(mongodb_uri="mongodb://localhost:27017")
        app.state.db = MongoConnectionManager(
            "mongodb://localhost:27017", f"devevent_test_{uuid4().hex}",
            client_factory=mongomock.MongoClient, initializer=ensure_indexes,
        )
        self.client = TestClient(app)
        self.event = self.client.post("/events", json=EVENT).json()
        self.bookings = app.state.db.get_database()["bookings"]

    def teardown_method(self):
        app.state.db = None
        app.state.config = None

    def test_book_by_event_id(self):
        r = self.client.post("/bookings", json={"event_id": self.event["id"], "email": " ada@example.com "})

        assert r.status_code == 201
        data = r.json()
        assert data["event_id"] == self.event["id"]
        assert data["email"] == "ada@example.com"
        assert self.bookings.count_documents({}) == 1

    def test_book_by_slug(self):
        r = self.client.post("/events/hacknight-2024/bookings", json={"email": "grace@example.com"})

        assert r.status_code == 201
        assert r.json()["event_id"] == self.event["id"]

    def test_nonexistent_event_is_rejected(self):
        r = self.client.post("/bookings", json={"event_id": str(ObjectId()), "email": "ada@example.com"})

        assert r.status_code == 404
        assert "referenced event does not exist" in r.json()["detail"]
        assert self.bookings.count_documents({}) == 0

    def test_unknown_slug(self):
        r = self.client.post("/events/nope/bookings", json={"email": "ada@example.com"})

        assert r.status_code == 404

    def test_malformed_email(self):
        for email in ["ada.example.com", "ada@example", ""]:
            r = self.client.post("/bookings", json={"event_id": self.event["id"], "email": email})
            assert r.status_code == 422
            assert r.json()["detail"]["errors"][0]["field"] == "email"
        assert self.bookings.count_documents({}) == 0

    def test_malformed_event_id(self):
        r = self.client.post("/bookings", json={"event_id": "abc", "email": "ada@example.com"})

        assert r.status_code == 422
        assert r.json()["detail"]["errors"][0]["code"] == "invalid_reference"

    def test_list_bookings_for_event(self):
        self.client.post("/events/hacknight-2024/bookings", json={"email": "ada@example.com"})
        self.client.post("/events/hacknight-2024/bookings", json={"email": "grace@example.com"})

        r = self.client.get("/events/hacknight-2024/bookings")

        assert r.status_code == 200
        data = r.json()
        assert data["count"] == 2
        assert {b["email"] for b in data["bookings"]} == {"ada@example.com", "grace@example.com"}

    def test_list_bookings_requires_key_when_configured(self):
        app.state.config = AppConfig(mongodb_uri="mongodb://localhost:27017", api_key="secret123")

        assert self.client.get("/events/hacknight-2024/bookings").status_code == 401
        r = self.client.get("/events/hacknight-2024/bookings", headers={"x-api-key": "secret123"})
        assert r.status_code == 200

    def test_booking_timestamps_survive_round_trip(self):
        created = self.client.post("/events/hacknight-2024/bookings", json={"email": "ada@example.com"}).json()

        listed = self.client.get("/events/hacknight-2024/bookings").json()["bookings"][0]

        assert listed["created_at"] == created["created_at"]
