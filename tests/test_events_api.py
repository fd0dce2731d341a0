from unittest.mock import MagicMock
from uuid import uuid4

import mongomock
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.core.config import AppConfig
from app.db.collections import ensure_indexes
from app.db.connection import MongoConnectionManager
from app.main import app


def make_event(**overrides):
    event = {
        "title": "My Awesome Dev Meetup!!",
        "description": "Monthly meetup for local developers.",
        "overview": "Talks, demos and pizza.",
        "image": "https://example.com/meetup.png",
        "venue": "Community Hall",
        "location": "Berlin, Germany",
        "date": "2024-03-05T10:00:00Z",
        "time": "18:30",
        "mode": "in-person",
        "audience": "Developers",
        "agenda": ["Welcome", "Lightning talks"],
        "organizer": "Dev Berlin",
        "tags": ["meetup", "community"],
    }
    event.update(overrides)
    return event


class TestEventsApi:
    """Test the events endpoints against an in-memory store."""

    def setup_method(self):
        app.state.config = AppConfig(mongodb_uri="mongodb://localhost:27017", events_page_limit=3)
        app.state.db = MongoConnectionManager(
            "mongodb://localhost:27017", f"devevent_test_{uuid4().hex}",
            client_factory=mongomock.MongoClient, initializer=ensure_indexes,
        )
        self.client = TestClient(app)

    def teardown_method(self):
        app.state.db = None
        app.state.config = None

    def test_create_and_fetch(self):
        r = self.client.post("/events", json=make_event())

        assert r.status_code == 201
        data = r.json()
        assert data["slug"] == "my-awesome-dev-meetup"
        assert data["date"] == "2024-03-05"
        assert data["time"] == "18:30"

        r2 = self.client.get("/events/my-awesome-dev-meetup")
        assert r2.status_code == 200
        assert r2.json()["id"] == data["id"]

        r3 = self.client.get(f"/events/by-id/{data['id']}")
        assert r3.status_code == 200
        assert r3.json()["slug"] == "my-awesome-dev-meetup"

    def test_timestamps_survive_round_trip(self):
        created = self.client.post("/events", json=make_event()).json()

        fetched = self.client.get("/events/my-awesome-dev-meetup").json()
        listed = self.client.get("/events").json()["events"][0]

        assert fetched["created_at"] == created["created_at"]
        assert fetched["updated_at"] == created["updated_at"]
        assert listed["created_at"] == created["created_at"]

    def test_validation_errors_name_fields(self):
        r = self.client.post("/events", json=make_event(venue="  ", time="9:5"))

        assert r.status_code == 422
        errors = r.json()["detail"]["errors"]
        assert {(e["field"], e["code"]) for e in errors} == {("venue", "required"), ("time", "invalid_time")}

    def test_missing_fields_are_reported(self):
        r = self.client.post("/events", json={"title": "Only a title"})

        assert r.status_code == 422
        fields = {e["field"] for e in r.json()["detail"]["errors"]}
        assert "description" in fields
        assert "agenda" in fields
        assert "title" not in fields

    def test_duplicate_slug_conflicts(self):
        assert self.client.post("/events", json=make_event()).status_code == 201

        r = self.client.post("/events", json=make_event(title="my awesome dev meetup"))

        assert r.status_code == 409
        assert "my-awesome-dev-meetup" in r.json()["detail"]

    def test_unknown_event(self):
        assert self.client.get("/events/nope").status_code == 404
        assert self.client.get("/events/by-id/nope").status_code == 404

    def test_list_is_sorted_filtered_and_capped(self):
        for title, date, tags in [
            ("Gamma", "2024-06-01", ["python"]),
            ("Alpha", "2024-01-01", ["python"]),
            ("Beta", "2024-03-01", ["rust"]),
            ("Delta", "2024-09-01", ["rust"]),
        ]:
            assert self.client.post("/events", json=make_event(title=title, date=date, tags=tags)).status_code == 201

        r = self.client.get("/events")
        assert r.status_code == 200
        data = r.json()
        assert data["count"] == 3
        assert [e["slug"] for e in data["events"]] == ["alpha", "beta", "gamma"]

        r2 = self.client.get("/events?tag=rust")
        assert [e["slug"] for e in r2.json()["events"]] == ["beta", "delta"]

        r3 = self.client.get("/events?limit=1")
        assert r3.json()["count"] == 1

    def test_patch_renormalizes(self):
        self.client.post("/events", json=make_event())

        r = self.client.patch("/events/my-awesome-dev-meetup", json={"title": "Dev Night", "date": "Mar 9, 2024"})

        assert r.status_code == 200
        assert r.json()["slug"] == "dev-night"
        assert r.json()["date"] == "2024-03-09"
        assert self.client.get("/events/dev-night").status_code == 200

    def test_patch_requires_fields(self):
        self.client.post("/events", json=make_event())

        r = self.client.patch("/events/my-awesome-dev-meetup", json={})

        assert r.status_code == 400

    def test_delete(self):
        self.client.post("/events", json=make_event())

        assert self.client.delete("/events/my-awesome-dev-meetup").status_code == 204
        assert self.client.get("/events/my-awesome-dev-meetup").status_code == 404
        assert self.client.delete("/events/my-awesome-dev-meetup").status_code == 404

    def test_api_key_guards_writes(self):
        app.state.config = AppConfig(mongodb_uri="mongodb://localhost:27017", api_key="secret123")

        r = self.client.post("/events", json=make_event())
        assert r.status_code == 401
        assert "api key" in r.json()["detail"].lower()

        r2 = self.client.post("/events", json=make_event(), headers={"x-api-key": "secret123"})
        assert r2.status_code == 201

        r3 = self.client.patch("/events/my-awesome-dev-meetup", json={"venue": "Loft"}, headers={"X-API-Key": "secret123"})
        assert r3.status_code == 200

        # Reads stay open
        assert self.client.get("/events/my-awesome-dev-meetup").status_code == 200

    def test_store_unreachable_returns_503(self):
        factory = MagicMock()
        factory.return_value.admin.command.side_effect = ServerSelectionTimeoutError("down")
        app.state.db = MongoConnectionManager("mongodb://down:27017", "devevent_test", client_factory=factory)

        r = self.client.get("/events")

        assert r.status_code == 503
        assert r.json()["detail"] == "Database unavailable"
