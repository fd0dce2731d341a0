import pytest
from bson import ObjectId

from app.validation.booking_validator import validate_booking
from app.validation.result import IssueCode


def issues_by_field(result):
    return {issue.field: issue for issue in result.issues}


EVENT_ID = "65f1c0ffee0123456789abcd"


def test_valid_booking_is_normalized():
    result = validate_booking({"event_id": EVENT_ID, "email": "  ada@example.com "})

    assert result.ok
    assert result.value == {"event_id": ObjectId(EVENT_ID), "email": "ada@example.com"}


def test_accepts_object_id_instance():
    result = validate_booking({"event_id": ObjectId(EVENT_ID), "email": "ada@example.com"})

    assert result.ok
    assert result.value["event_id"] == ObjectId(EVENT_ID)


@pytest.mark.parametrize("email", ["ada.example.com", "ada@example", "", None, "a b@example.com"])
def test_bad_email(email):
    result = validate_booking({"event_id": EVENT_ID, "email": email})

    assert not result.ok
    assert issues_by_field(result).get("email").code == IssueCode.INVALID_EMAIL
    assert issues_by_field(result).get("event_id") is None


@pytest.mark.parametrize("event_id", ["", "123", "not-an-object-id", None, 42])
def test_bad_event_id(event_id):
    result = validate_booking({"event_id": event_id, "email": "ada@example.com"})

    assert issues_by_field(result).get("event_id").code == IssueCode.INVALID_REFERENCE


def test_reports_both_issues():
    result = validate_booking({"event_id": "nope", "email": "nope"})

    assert {i.field for i in result.issues} == {"event_id", "email"}
    assert result.value is None
