import logging

from fastapi import APIRouter, Depends

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.rbac import require_admin
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.core.schemas import SuccessMessage
from educalendar.db.session import get_store
from educalendar.db.store import DocumentStore

from .schemas import AnnouncementMutationResponse, AnnouncementResponse, AnnouncementUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/announcements", tags=["announcements"])


@router.get(
    "/current",
    response_model=AnnouncementResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(get_current_user)],
)
async def get_current_announcement(
    store: DocumentStore = Depends(get_store),
) -> AnnouncementResponse:
    try:
        return await service.get_current_announcement(store)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching announcement")
        raise InternalError("Failed to fetch announcement")


@router.post(
    "",
    response_model=AnnouncementMutationResponse,
    dependencies=[Depends(require_admin)],
)
async def save_announcement(
    payload: AnnouncementUpdate,
    store: DocumentStore = Depends(get_store),
) -> AnnouncementMutationResponse:
    try:
        return await service.save_announcement(store, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error saving announcement")
        raise InternalError("Failed to save announcement")


@router.delete(
    "/current",
    response_model=SuccessMessage,
    dependencies=[Depends(require_admin)],
)
async def clear_announcement(
    store: DocumentStore = Depends(get_store),
) -> SuccessMessage:
    try:
        await service.clear_announcement(store)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error clearing announcement")
        raise InternalError("Failed to clear announcement")
    return SuccessMessage(success=True, message="Announcement cleared")
