from fastapi import Depends, HTTPException, status

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import AuthorizationError


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require the admin role. Used on every mutating endpoint."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def ensure_own_record(current_user: CurrentUser, student_id: str) -> None:
    """Students may only read their own rows; admins read everything."""
    if not current_user.is_admin and current_user.student_id != student_id:
        raise AuthorizationError("Access denied")
