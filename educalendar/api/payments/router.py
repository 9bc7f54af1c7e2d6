import logging

from fastapi import APIRouter, Depends

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.rbac import require_admin
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.db.session import get_store
from educalendar.db.store import DocumentStore

from .schemas import (
    PaidLessonsAdd,
    PaidLessonsAddResponse,
    PaidLessonsResponse,
    PaidLessonsSet,
    PaymentsResponse,
)
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=PaymentsResponse)
async def list_payments(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> PaymentsResponse:
    try:
        return await service.list_payments(store, current_user)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching payments")
        raise InternalError("Failed to fetch payments")


@router.put(
    "/{student_id}",
    response_model=PaidLessonsResponse,
    dependencies=[Depends(require_admin)],
)
async def set_paid_lessons(
    student_id: str,
    payload: PaidLessonsSet,
    store: DocumentStore = Depends(get_store),
) -> PaidLessonsResponse:
    try:
        return await service.set_paid_lessons(store, student_id, payload.count)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error updating paid lessons for %s", student_id)
        raise InternalError("Failed to update paid lessons")


@router.post(
    "/{student_id}/add",
    response_model=PaidLessonsAddResponse,
    dependencies=[Depends(require_admin)],
)
async def add_paid_lessons(
    student_id: str,
    payload: PaidLessonsAdd,
    store: DocumentStore = Depends(get_store),
) -> PaidLessonsAddResponse:
    try:
        return await service.add_paid_lessons(store, student_id, payload.lessons)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error adding paid lessons for %s", student_id)
        raise InternalError("Failed to add paid lessons")
