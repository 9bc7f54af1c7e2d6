from typing import Any, Optional

from pydantic import BaseModel

from educalendar.core.schemas import CamelModel


class LoginRequest(BaseModel):
    # Loosely typed so a non-string code gets the service's 400 message.
    code: Any = None


class CurrentUser(CamelModel):
    """Identity resolved from the bearer access code."""

    role: str
    code: str
    student_id: Optional[str] = None
    student_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AuthResponse(CamelModel):
    success: bool = True
    user: CurrentUser
