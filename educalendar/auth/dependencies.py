import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from educalendar.auth.schemas import CurrentUser
from educalendar.auth.services import resolve_access_code
from educalendar.core.config import Settings
from educalendar.db.session import get_settings, get_store
from educalendar.db.store import DocumentStore

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Resolve the caller from the ``Authorization: Bearer <code>`` header."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authentication token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user = await resolve_access_code(store, settings, credentials.credentials)
    except Exception:
        logger.exception("Authentication error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication failed",
        )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access code",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
