"""Unit tests for student access code generation."""

import re

from educalendar.auth.access_code import ACCESS_CODE_LENGTH, generate_access_code


def test_access_code_format() -> None:
    """Code must be 8 characters of A-Z and 0-9."""
    code = generate_access_code()
    assert len(code) == ACCESS_CODE_LENGTH == 8
    assert re.match(r"^[A-Z0-9]{8}$", code)


def test_custom_length() -> None:
    assert len(generate_access_code(4)) == 4


def test_access_code_uniqueness() -> None:
    """36^8 possibilities: 20 calls should never collide in practice."""
    codes = {generate_access_code() for _ in range(20)}
    assert len(codes) == 20
