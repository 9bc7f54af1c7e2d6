"""
Student access-code generation.

Format: 8 characters drawn from uppercase letters and digits (A-Z, 0-9).
Codes act as shared secrets, so the random part comes from ``secrets``.
Uniqueness across students is not checked.
"""

import secrets
import string

ACCESS_CODE_LENGTH = 8
ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_access_code(length: int = ACCESS_CODE_LENGTH) -> str:
    """
    Generate a random student access code.

    Examples:
        generate_access_code()  -> "Q7K2M9XA"
        generate_access_code(4) -> "B3ZT"
    """
    return "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))
