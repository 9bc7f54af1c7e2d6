import logging
import secrets
from typing import Any, Optional

from educalendar.auth.schemas import AuthResponse, CurrentUser
from educalendar.core.config import Settings
from educalendar.core.enums import Role
from educalendar.core.exceptions import AuthenticationError, ValidationError
from educalendar.db import collections
from educalendar.db.store import DocumentStore

logger = logging.getLogger(__name__)


def is_admin_code(code: str, settings: Settings) -> bool:
    return secrets.compare_digest(code.encode("utf-8"), settings.admin_code.encode("utf-8"))


async def resolve_access_code(
    store: DocumentStore, settings: Settings, code: str
) -> Optional[CurrentUser]:
    """Map an access code to the admin or to the student holding it; None when nobody does."""
    if is_admin_code(code, settings):
        return CurrentUser(role=Role.ADMIN.value, code=code)

    matches = await store.find(collections.STUDENTS, {"accessCode": code})
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Access code shared by %d students (%s); using the last one",
            len(matches),
            ", ".join(doc.id for doc in matches),
        )
    student = matches[-1]
    return CurrentUser(
        role=Role.STUDENT.value,
        code=code,
        student_id=student.id,
        student_name=student.data.get("name"),
    )


async def login(store: DocumentStore, settings: Settings, code: Any) -> AuthResponse:
    if not code or not isinstance(code, str):
        raise ValidationError("Access code is required")

    user = await resolve_access_code(store, settings, code.strip())
    if user is None:
        raise AuthenticationError("Invalid access code")
    logger.info("Login succeeded for role %s", user.role)
    return AuthResponse(success=True, user=user)
