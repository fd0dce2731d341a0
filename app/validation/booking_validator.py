from typing import Any, List, Mapping

from bson import ObjectId

from app.validation.normalizers import is_valid_email
from app.validation.result import FieldIssue, IssueCode, ValidationResult


def validate_booking(data: Mapping[str, Any]) -> ValidationResult:
    """
    Check a booking's email and event reference format.

    Whether the referenced event exists is checked against the store in
    the booking write path, not here.
    """
    issues: List[FieldIssue] = []

    email = data.get("email")
    if not is_valid_email(email):
        issues.append(FieldIssue(
            "email", IssueCode.INVALID_EMAIL,
            "Booking email must be a valid email address.",
        ))

    event_id = data.get("event_id")
    if isinstance(event_id, ObjectId):
        event_id = str(event_id)
    if not isinstance(event_id, str) or not ObjectId.is_valid(event_id.strip()):
        issues.append(FieldIssue(
            "event_id", IssueCode.INVALID_REFERENCE,
            "Booking event_id must be a valid event identifier.",
        ))

    if issues:
        return ValidationResult.failure(issues)

    return ValidationResult.success({
        "event_id": ObjectId(event_id.strip()),
        "email": email.strip(),
    })
