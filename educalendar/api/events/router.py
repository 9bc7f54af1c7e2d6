import logging

from fastapi import APIRouter, Depends, status

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.rbac import require_admin
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.core.schemas import SuccessMessage
from educalendar.db.session import get_store
from educalendar.db.store import DocumentStore

from .schemas import (
    CopyEventsRequest,
    CopyEventsResponse,
    EventCreate,
    EventListResponse,
    EventMutationResponse,
    EventUpdate,
)
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=EventListResponse)
async def list_events(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> EventListResponse:
    try:
        return await service.list_events(store, current_user)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching events")
        raise InternalError("Failed to fetch events")


@router.post(
    "",
    response_model=EventMutationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_event(
    payload: EventCreate,
    store: DocumentStore = Depends(get_store),
) -> EventMutationResponse:
    try:
        return await service.create_event(store, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error creating event")
        raise InternalError("Failed to create event")


@router.post(
    "/copy",
    response_model=CopyEventsResponse,
    dependencies=[Depends(require_admin)],
)
async def copy_events(
    payload: CopyEventsRequest,
    store: DocumentStore = Depends(get_store),
) -> CopyEventsResponse:
    try:
        return await service.copy_events(store, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error copying events")
        raise InternalError("Failed to copy events")


@router.put(
    "/{event_id}",
    response_model=EventMutationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    store: DocumentStore = Depends(get_store),
) -> EventMutationResponse:
    try:
        return await service.update_event(store, event_id, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error updating event %s", event_id)
        raise InternalError("Failed to update event")


@router.delete(
    "/{event_id}",
    response_model=SuccessMessage,
    dependencies=[Depends(require_admin)],
)
async def delete_event(
    event_id: str,
    store: DocumentStore = Depends(get_store),
) -> SuccessMessage:
    try:
        await service.delete_event(store, event_id)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error deleting event %s", event_id)
        raise InternalError("Failed to delete event")
    return SuccessMessage(success=True, message="Event deleted successfully")
