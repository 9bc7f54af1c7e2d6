"""
Payload validation for students, events and bulk copy requests.

Validators never raise: they return a ValidationResult listing every
violated rule (one message per rule) and callers turn a failed result into a
400 response.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Mapping, Optional

from educalendar.core.enums import CopyType

MAX_NAME_LENGTH = 100
MAX_RATE = 100000


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def is_number(value: Any) -> bool:
    """True for finite ints/floats; bools, NaN and infinities do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (a trailing time part is ignored). None when unparseable."""
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _check_name(name: Any, errors: List[str]) -> None:
    if not isinstance(name, str) or not name.strip():
        errors.append("Student name is required")
    elif len(name.strip()) > MAX_NAME_LENGTH:
        errors.append(f"Student name is too long (max {MAX_NAME_LENGTH} characters)")


def _check_rate(rate: Any, errors: List[str]) -> None:
    if not is_number(rate) or rate < 0:
        errors.append("Rate must be 0 or a positive number")
    if is_number(rate) and rate > MAX_RATE:
        errors.append("Rate is unreasonably high")


def validate_student_data(name: Any, rate: Any) -> ValidationResult:
    result = ValidationResult()
    _check_name(name, result.errors)
    _check_rate(rate, result.errors)
    return result


def validate_student_update(fields: Mapping[str, Any]) -> ValidationResult:
    """Apply the student rules only to the keys present in ``fields``."""
    result = ValidationResult()
    if "name" in fields:
        _check_name(fields["name"], result.errors)
    if "rate" in fields:
        _check_rate(fields["rate"], result.errors)
    if "accessCode" in fields and fields["accessCode"] is not None and not isinstance(fields["accessCode"], str):
        result.errors.append("Access code must be a string or null")
    return result


_EVENT_RULES = (
    ("date", "Date is required"),
    ("time", "Time is required"),
    ("studentId", "Student ID is required"),
)


def validate_event_data(date_value: Any, time_value: Any, student_id: Any) -> ValidationResult:
    # Referential existence of student_id is checked by the caller.
    result = ValidationResult()
    values = {"date": date_value, "time": time_value, "studentId": student_id}
    for key, message in _EVENT_RULES:
        if not is_non_empty_string(values[key]):
            result.errors.append(message)
    return result


def validate_event_update(fields: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    for key, message in _EVENT_RULES:
        if key in fields and not is_non_empty_string(fields[key]):
            result.errors.append(message)
    if fields.get("notes") is not None and not isinstance(fields["notes"], str):
        result.errors.append("Notes must be a string")
    return result


def validate_copy_request(copy_type: Any, from_date: Any, to_date: Any) -> ValidationResult:
    result = ValidationResult()
    if not copy_type or not from_date or not to_date:
        result.errors.append("Missing required parameters")
        return result
    if copy_type not in (CopyType.WEEK.value, CopyType.MONTH.value):
        result.errors.append("copyType must be 'week' or 'month'")
    if parse_iso_date(from_date) is None:
        result.errors.append("fromDate must be a valid YYYY-MM-DD date")
    if parse_iso_date(to_date) is None:
        result.errors.append("toDate must be a valid YYYY-MM-DD date")
    return result
