import logging

from fastapi import APIRouter, Depends

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.rbac import ensure_own_record, require_admin
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.db.session import get_store
from educalendar.db.store import DocumentStore

from .schemas import (
    NotesResponse,
    StudentNotesMutationResponse,
    StudentNotesResponse,
    StudentNotesUpdate,
)
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=NotesResponse)
async def list_notes(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> NotesResponse:
    try:
        return await service.list_notes(store, current_user)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching notes")
        raise InternalError("Failed to fetch notes")


@router.get("/{student_id}", response_model=StudentNotesResponse)
async def get_notes(
    student_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> StudentNotesResponse:
    ensure_own_record(current_user, student_id)
    try:
        return await service.get_notes(store, student_id)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching notes for %s", student_id)
        raise InternalError("Failed to fetch notes")


@router.put(
    "/{student_id}",
    response_model=StudentNotesMutationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_notes(
    student_id: str,
    payload: StudentNotesUpdate,
    store: DocumentStore = Depends(get_store),
) -> StudentNotesMutationResponse:
    try:
        return await service.update_notes(store, student_id, payload.notes)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error updating notes for %s", student_id)
        raise InternalError("Failed to update notes")
