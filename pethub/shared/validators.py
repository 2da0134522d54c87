"""Shared validation utilities"""

import re
from dataclasses import dataclass
from typing import Any, Optional

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Hour 0-23 with optional leading zero, optional seconds
TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9](:[0-5][0-9])?$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a payload check: valid, or invalid with one human-readable message"""

    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

    def as_dict(self) -> dict:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}


VALID = ValidationResult(valid=True)


def invalid(message: str) -> ValidationResult:
    return ValidationResult(valid=False, error=message)


def is_uuid(value: Any) -> bool:
    """Validate UUID format (RFC 4122 versions 1-5)"""
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))


def is_uuid_or_null(value: Any) -> bool:
    """None and the empty string stand for 'no reference'"""
    if value is None or value == "":
        return True
    return is_uuid(value)


def is_blank(value: Any) -> bool:
    """True for None, non-strings and strings that are empty after trimming"""
    return not isinstance(value, str) or not value.strip()


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def is_valid_time(value: Any) -> bool:
    return isinstance(value, str) and bool(TIME_PATTERN.match(value))


def is_valid_date(value: Any) -> bool:
    return isinstance(value, str) and bool(DATE_PATTERN.match(value))


def is_negative(value: Any) -> bool:
    """True only for a provided number below zero; None means 'not provided'"""
    return value is not None and value < 0
