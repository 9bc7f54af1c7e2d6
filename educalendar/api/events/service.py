import logging
from typing import List

from educalendar.api.students.service import require_student
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import NotFoundError, ValidationError
from educalendar.core.identifiers import new_document_id
from educalendar.core.validation import (
    parse_iso_date,
    validate_copy_request,
    validate_event_data,
    validate_event_update,
)
from educalendar.db import collections
from educalendar.db.store import Document, DocumentStore

from .copier import copy_events as copy_event_block
from .schemas import (
    CopyEventsRequest,
    CopyEventsResponse,
    EventCreate,
    EventListResponse,
    EventMutationResponse,
    EventResponse,
    EventUpdate,
)

logger = logging.getLogger(__name__)


def _to_response(doc: Document) -> EventResponse:
    return EventResponse.model_validate({**doc.data, "id": doc.id})


def _sort_key(doc: Document):
    return (str(doc.data.get("date", "")), str(doc.data.get("time", "")))


async def list_events(store: DocumentStore, current_user: CurrentUser) -> EventListResponse:
    if current_user.is_admin:
        docs: List[Document] = await store.all(collections.EVENTS)
    else:
        docs = await store.find(collections.EVENTS, {"studentId": current_user.student_id})
    return EventListResponse(events=[_to_response(d) for d in sorted(docs, key=_sort_key)])


async def create_event(store: DocumentStore, payload: EventCreate) -> EventMutationResponse:
    validation = validate_event_data(payload.date, payload.time, payload.student_id)
    if payload.notes is not None and not isinstance(payload.notes, str):
        validation.errors.append("Notes must be a string")
    if not validation.valid:
        raise ValidationError("Invalid event data", validation.errors)

    await require_student(store, payload.student_id)

    event_id = new_document_id()
    data = {
        "date": payload.date,
        "time": payload.time,
        "studentId": payload.student_id,
        "notes": payload.notes or "",
    }
    await store.set(collections.EVENTS, event_id, data)
    return EventMutationResponse(success=True, event=_to_response(Document(event_id, data)))


async def update_event(store: DocumentStore, event_id: str, payload: EventUpdate) -> EventMutationResponse:
    if await store.get(collections.EVENTS, event_id) is None:
        raise NotFoundError("Event not found")

    fields = payload.model_dump(by_alias=True, exclude_unset=True)
    validation = validate_event_update(fields)
    if not validation.valid:
        raise ValidationError("Invalid event data", validation.errors)
    if "notes" in fields and fields["notes"] is None:
        fields["notes"] = ""
    if "studentId" in fields:
        await require_student(store, fields["studentId"])

    if fields:
        await store.update(collections.EVENTS, event_id, fields)
    updated = await store.get(collections.EVENTS, event_id)
    if updated is None:
        raise NotFoundError("Event not found")
    return EventMutationResponse(success=True, event=_to_response(updated))


async def delete_event(store: DocumentStore, event_id: str) -> None:
    await store.delete(collections.EVENTS, event_id)


async def copy_events(store: DocumentStore, payload: CopyEventsRequest) -> CopyEventsResponse:
    validation = validate_copy_request(payload.copy_type, payload.from_date, payload.to_date)
    if not validation.valid:
        raise ValidationError("Invalid copy request", validation.errors)

    created = await copy_event_block(
        store,
        payload.copy_type,
        parse_iso_date(payload.from_date),
        parse_iso_date(payload.to_date),
    )
    return CopyEventsResponse(
        success=True,
        copied_count=len(created),
        events=[_to_response(doc) for doc in created],
    )
