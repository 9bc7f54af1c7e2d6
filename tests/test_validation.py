"""Unit tests for payload validation."""

import math

import pytest

from educalendar.core.validation import (
    is_number,
    parse_iso_date,
    validate_copy_request,
    validate_event_data,
    validate_event_update,
    validate_student_data,
    validate_student_update,
)


@pytest.mark.parametrize(
    "name, rate",
    [("A", 0), ("x" * 100, 100000), ("  Grace Hopper  ", 42.5)],
)
def test_valid_student_payloads(name, rate) -> None:
    result = validate_student_data(name, rate)
    assert result.valid
    assert result.errors == []


@pytest.mark.parametrize(
    "name, rate, expected",
    [
        ("", 10, ["Student name is required"]),
        ("   ", 10, ["Student name is required"]),
        (None, 10, ["Student name is required"]),
        ("x" * 101, 10, ["Student name is too long (max 100 characters)"]),
        ("Ann", -1, ["Rate must be 0 or a positive number"]),
        ("Ann", 100001, ["Rate is unreasonably high"]),
        ("Ann", "50", ["Rate must be 0 or a positive number"]),
        ("Ann", True, ["Rate must be 0 or a positive number"]),
        ("Ann", math.nan, ["Rate must be 0 or a positive number"]),
        ("Ann", math.inf, ["Rate must be 0 or a positive number"]),
        ("", "abc", ["Student name is required", "Rate must be 0 or a positive number"]),
        ("x" * 101, 200000, ["Student name is too long (max 100 characters)", "Rate is unreasonably high"]),
    ],
)
def test_invalid_student_payloads_list_every_violation(name, rate, expected) -> None:
    result = validate_student_data(name, rate)
    assert not result.valid
    assert result.errors == expected


def test_student_update_checks_only_present_fields() -> None:
    assert validate_student_update({}).valid
    assert validate_student_update({"rate": 15}).valid
    assert validate_student_update({"accessCode": None}).valid
    result = validate_student_update({"name": " ", "accessCode": 12})
    assert result.errors == ["Student name is required", "Access code must be a string or null"]


def test_event_requires_date_time_and_student() -> None:
    assert validate_event_data("2024-05-01", "10:00", "s1").valid
    result = validate_event_data("", None, 7)
    assert result.errors == ["Date is required", "Time is required", "Student ID is required"]


def test_event_update_rules() -> None:
    assert validate_event_update({"notes": ""}).valid
    assert validate_event_update({"notes": None}).valid
    result = validate_event_update({"time": "", "notes": 3})
    assert result.errors == ["Time is required", "Notes must be a string"]


def test_copy_request_rules() -> None:
    assert validate_copy_request("week", "2024-05-01", "2024-05-08").valid
    assert validate_copy_request(None, "2024-05-01", "2024-05-08").errors == ["Missing required parameters"]
    assert validate_copy_request("year", "2024-05-01", "2024-05-08").errors == [
        "copyType must be 'week' or 'month'"
    ]
    assert validate_copy_request("month", "May 1st", "2024-06-01").errors == [
        "fromDate must be a valid YYYY-MM-DD date"
    ]


def test_parse_iso_date() -> None:
    assert parse_iso_date("2024-02-29").isoformat() == "2024-02-29"
    assert parse_iso_date("2024-02-29T10:00:00Z").isoformat() == "2024-02-29"
    assert parse_iso_date("2023-02-29") is None
    assert parse_iso_date(20240229) is None


@pytest.mark.parametrize(
    "value, expected",
    [(0, True), (2.5, True), (True, False), ("3", False), (math.nan, False), (math.inf, False), (-math.inf, False)],
)
def test_is_number_accepts_only_finite_reals(value, expected) -> None:
    assert is_number(value) is expected
