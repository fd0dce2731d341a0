"""
Error taxonomy for the events service.

Validators never raise; they return a ValidationResult. The service layer
turns failed results into ValidationFailed and the routes map every error
below onto an HTTP status.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.validation.result import FieldIssue


class DevEventError(Exception):
    """Base class for all service errors."""


class ConfigurationError(DevEventError):
    """Required configuration is missing; the process cannot start."""


class DatabaseConnectionError(DevEventError):
    """The document store could not be reached."""


class ValidationFailed(DevEventError):
    """A record failed field validation and was not written."""

    def __init__(self, issues: List["FieldIssue"]):
        self.issues = list(issues)
        fields = ", ".join(issue.field for issue in self.issues)
        super().__init__(f"Validation failed for: {fields}")

    def to_list(self) -> list:
        return [issue.to_dict() for issue in self.issues]


class SlugConflictError(DevEventError):
    """Another event already uses this slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"An event with slug '{slug}' already exists.")


class EventNotFound(DevEventError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Event '{key}' not found.")


class ReferencedEventNotFound(DevEventError):
    """A booking points at an event that does not exist."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__("Cannot create booking: referenced event does not exist.")
