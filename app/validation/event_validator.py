from typing import Any, Dict, List, Mapping, Optional

from app.validation.normalizers import is_blank, normalize_date, normalize_time, slugify
from app.validation.result import FieldIssue, IssueCode, ValidationResult


REQUIRED_TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)

LIST_FIELDS = {
    "agenda": "Event agenda must contain at least one non-empty item.",
    "tags": "Event tags must contain at least one non-empty tag.",
}

EVENT_FIELDS = REQUIRED_TEXT_FIELDS + tuple(LIST_FIELDS) + ("slug",)


def _valid_items(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and all(not is_blank(item) for item in value)
    )


def _needs_slug(merged: Mapping[str, Any], changes: Mapping[str, Any], existing: Optional[Mapping[str, Any]]) -> bool:
    if is_blank(merged.get("slug")):
        return True
    if existing is None:
        return "title" in changes
    return "title" in changes and (changes.get("title") or "").strip() != (existing.get("title") or "").strip()


def validate_event(data: Mapping[str, Any], existing: Optional[Mapping[str, Any]] = None) -> ValidationResult:
    """
    Validate and normalize an event before it is written.

    Args:
        data: Fields supplied by this write (a full record on create, the
              changed fields on update)
        existing: The stored document when updating, None when creating

    Returns:
        ValidationResult holding the normalized event fields, or every
        field issue found
    """
    changes = {k: v for k, v in data.items() if k in EVENT_FIELDS and v is not None}
    # A slug is always derived, never taken from the caller.
    changes.pop("slug", None)

    merged: Dict[str, Any] = {k: existing.get(k) for k in EVENT_FIELDS} if existing else {}
    merged.update(changes)

    issues: List[FieldIssue] = []

    for name in REQUIRED_TEXT_FIELDS:
        if is_blank(merged.get(name)):
            issues.append(FieldIssue(name, IssueCode.REQUIRED, f"Event {name} is required."))
        else:
            merged[name] = merged[name].strip()

    for name, message in LIST_FIELDS.items():
        value = merged.get(name)
        if not _valid_items(value):
            issues.append(FieldIssue(name, IssueCode.EMPTY_ITEMS, message))
        else:
            merged[name] = [item.strip() for item in value]

    if "title" not in {i.field for i in issues} and _needs_slug(merged, changes, existing):
        slug = slugify(merged["title"])
        if not slug:
            issues.append(FieldIssue(
                "title", IssueCode.INVALID_SLUG,
                "Event title must contain at least one letter or digit.",
            ))
        else:
            merged["slug"] = slug

    if "date" not in {i.field for i in issues}:
        try:
            merged["date"] = normalize_date(merged["date"])
        except ValueError as exc:
            issues.append(FieldIssue("date", IssueCode.INVALID_DATE, str(exc)))

    if "time" not in {i.field for i in issues}:
        try:
            merged["time"] = normalize_time(merged["time"])
        except ValueError as exc:
            issues.append(FieldIssue("time", IssueCode.INVALID_TIME, str(exc)))

    if issues:
        return ValidationResult.failure(issues)
    return ValidationResult.success(merged)
