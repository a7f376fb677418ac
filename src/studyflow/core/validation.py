"""Field validation and normalization shared by all entities - no I/O."""

from datetime import date, datetime
from enum import Enum


class ValidationError(ValueError):
    """A submitted entity is missing a required field or has an invalid value."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class Priority(Enum):
    """Priority shared by tasks and assignments."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: "Priority | str | None", default: "Priority | None" = None) -> "Priority":
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            if default is None:
                raise ValidationError("priority", "is required")
            return default
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(p.value for p in cls)
        raise ValidationError("priority", f"must be one of {choices}, got {value!r}")


def require_text(value: object, field: str) -> str:
    """Trimmed non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "is required")
    return value.strip()


def optional_text(value: object, field: str) -> str | None:
    """Trimmed string, or None when empty."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, f"must be text, got {type(value).__name__}")
    return value.strip() or None


def parse_date(value: object, field: str, required: bool = False) -> date | None:
    """
    Accept a date, a datetime or an ISO "YYYY-MM-DD" string.

    Empty values become None (or fail when required); anything that does not
    parse is rejected rather than silently dropped.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(field, "is required")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            # Browser date inputs may carry a time part: keep the date.
            return date.fromisoformat(text.split("T")[0])
        except ValueError:
            pass
    raise ValidationError(field, f"is not a valid date: {value!r}")


def parse_bool(value: object, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(field, f"must be true or false, got {value!r}")
    return value


def reject_unknown(patch: dict, allowed: set[str]) -> None:
    """Refuse patches touching fields that cannot be changed."""
    unknown = sorted(set(patch) - allowed)
    if unknown:
        raise ValidationError(unknown[0], "cannot be updated")
