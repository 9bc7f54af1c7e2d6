import logging

from fastapi import APIRouter, Depends, HTTPException, status

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.rbac import ensure_own_record, require_admin
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.core.schemas import SuccessMessage
from educalendar.db.session import get_store
from educalendar.db.store import DocumentStore

from .schemas import (
    AccessCodeResponse,
    StudentCreate,
    StudentListResponse,
    StudentMutationResponse,
    StudentResponse,
    StudentUpdate,
)
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=StudentListResponse)
async def list_students(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> StudentListResponse:
    try:
        return await service.list_students(store, current_user)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching students")
        raise InternalError("Failed to fetch students")


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> StudentResponse:
    ensure_own_record(current_user, student_id)
    try:
        student = await service.get_student(store, student_id)
    except Exception:
        logger.exception("Error fetching student %s", student_id)
        raise InternalError("Failed to fetch student")
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return student


@router.post(
    "",
    response_model=StudentMutationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_student(
    payload: StudentCreate,
    store: DocumentStore = Depends(get_store),
) -> StudentMutationResponse:
    try:
        return await service.create_student(store, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error creating student")
        raise InternalError("Failed to create student")


@router.put(
    "/{student_id}",
    response_model=StudentMutationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    store: DocumentStore = Depends(get_store),
) -> StudentMutationResponse:
    try:
        return await service.update_student(store, student_id, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error updating student %s", student_id)
        raise InternalError("Failed to update student")


@router.delete(
    "/{student_id}",
    response_model=SuccessMessage,
    dependencies=[Depends(require_admin)],
)
async def delete_student(
    student_id: str,
    store: DocumentStore = Depends(get_store),
) -> SuccessMessage:
    try:
        await service.delete_student(store, student_id)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error deleting student %s", student_id)
        raise InternalError("Failed to delete student")
    return SuccessMessage(success=True, message="Student and related data deleted successfully")


@router.post(
    "/{student_id}/generate-code",
    response_model=AccessCodeResponse,
    dependencies=[Depends(require_admin)],
)
async def generate_code(
    student_id: str,
    store: DocumentStore = Depends(get_store),
) -> AccessCodeResponse:
    try:
        return await service.regenerate_access_code(store, student_id)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error generating access code for %s", student_id)
        raise InternalError("Failed to generate access code")
