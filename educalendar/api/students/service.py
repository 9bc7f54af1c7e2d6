import logging
from typing import Optional

from educalendar.auth.access_code import generate_access_code
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import NotFoundError, ValidationError
from educalendar.core.identifiers import new_document_id
from educalendar.core.validation import validate_student_data, validate_student_update
from educalendar.db import collections
from educalendar.db.store import Document, DocumentStore

from .schemas import (
    AccessCodeResponse,
    StudentCreate,
    StudentListResponse,
    StudentMutationResponse,
    StudentResponse,
    StudentUpdate,
)

logger = logging.getLogger(__name__)


def _to_response(doc: Document) -> StudentResponse:
    return StudentResponse.model_validate({**doc.data, "id": doc.id})


async def require_student(store: DocumentStore, student_id: str) -> Document:
    """Load a student or raise NotFoundError. Used wherever a studentId is written."""
    doc = await store.get(collections.STUDENTS, student_id)
    if doc is None:
        raise NotFoundError("Student not found")
    return doc


async def list_students(store: DocumentStore, current_user: CurrentUser) -> StudentListResponse:
    if current_user.is_admin:
        docs = await store.all(collections.STUDENTS)
    else:
        own = await store.get(collections.STUDENTS, current_user.student_id)
        docs = [own] if own else []
    return StudentListResponse(students=[_to_response(d) for d in docs])


async def get_student(store: DocumentStore, student_id: str) -> Optional[StudentResponse]:
    doc = await store.get(collections.STUDENTS, student_id)
    if not doc:
        return None
    return _to_response(doc)


async def create_student(store: DocumentStore, payload: StudentCreate) -> StudentMutationResponse:
    validation = validate_student_data(payload.name, payload.rate)
    if not validation.valid:
        raise ValidationError("Invalid student data", validation.errors)

    student_id = new_document_id()
    data = {"name": payload.name.strip(), "rate": payload.rate, "accessCode": None}

    # Student, payment counter and notes are written as one unit.
    batch = store.batch()
    batch.set(collections.STUDENTS, student_id, data)
    batch.set(collections.PAID_LESSONS, student_id, {"count": 0})
    batch.set(collections.STUDENT_NOTES, student_id, {"notes": ""})
    await store.commit(batch)

    logger.info("Created student %s", student_id)
    return StudentMutationResponse(success=True, student=_to_response(Document(student_id, data)))


async def update_student(
    store: DocumentStore, student_id: str, payload: StudentUpdate
) -> StudentMutationResponse:
    await require_student(store, student_id)

    fields = payload.model_dump(by_alias=True, exclude_unset=True)
    validation = validate_student_update(fields)
    if not validation.valid:
        raise ValidationError("Invalid student data", validation.errors)
    if "name" in fields:
        fields["name"] = fields["name"].strip()

    if fields:
        await store.update(collections.STUDENTS, student_id, fields)
    updated = await require_student(store, student_id)
    return StudentMutationResponse(success=True, student=_to_response(updated))


async def delete_student(store: DocumentStore, student_id: str) -> int:
    """Delete a student with its counter, notes and events in one batch. Returns the event count."""
    events = await store.find(collections.EVENTS, {"studentId": student_id})

    batch = store.batch()
    batch.delete(collections.STUDENTS, student_id)
    batch.delete(collections.PAID_LESSONS, student_id)
    batch.delete(collections.STUDENT_NOTES, student_id)
    for event in events:
        batch.delete(collections.EVENTS, event.id)
    await store.commit(batch)

    logger.info("Deleted student %s and %d events", student_id, len(events))
    return len(events)


async def regenerate_access_code(store: DocumentStore, student_id: str) -> AccessCodeResponse:
    await require_student(store, student_id)
    code = generate_access_code()
    await store.update(collections.STUDENTS, student_id, {"accessCode": code})
    return AccessCodeResponse(success=True, access_code=code)
