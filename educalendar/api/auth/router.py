import logging

from fastapi import APIRouter, Depends
from fastapi import status as http_status

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.schemas import AuthResponse, CurrentUser, LoginRequest
from educalendar.auth.services import login as login_with_code
from educalendar.core.config import Settings
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.db.session import get_settings, get_store
from educalendar.db.store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    try:
        return await login_with_code(store, settings, payload.code)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Login error")
        raise InternalError("Login failed")


@router.get("/validate", response_model=AuthResponse, response_model_exclude_none=True)
async def validate(current_user: CurrentUser = Depends(get_current_user)) -> AuthResponse:
    return AuthResponse(success=True, user=current_user)
