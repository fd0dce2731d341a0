from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class IssueCode(str, Enum):
    REQUIRED = "required"
    EMPTY_ITEMS = "empty_items"
    INVALID_SLUG = "invalid_slug"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"
    INVALID_EMAIL = "invalid_email"
    INVALID_REFERENCE = "invalid_reference"


@dataclass(frozen=True)
class FieldIssue:
    """A single rejected field."""

    field: str
    code: IssueCode
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "code": self.code.value, "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of validating one record: the normalized document or the issues found."""

    value: Optional[Dict[str, Any]] = None
    issues: List[FieldIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @classmethod
    def success(cls, value: Dict[str, Any]) -> "ValidationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, issues: List[FieldIssue]) -> "ValidationResult":
        return cls(value=None, issues=list(issues))
