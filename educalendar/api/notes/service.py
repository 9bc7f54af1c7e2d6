from educalendar.api.students.service import require_student
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import ValidationError
from educalendar.db import collections
from educalendar.db.store import DocumentStore

from .schemas import NotesResponse, StudentNotesMutationResponse, StudentNotesResponse


async def list_notes(store: DocumentStore, current_user: CurrentUser) -> NotesResponse:
    if current_user.is_admin:
        docs = await store.all(collections.STUDENT_NOTES)
    else:
        own = await store.get(collections.STUDENT_NOTES, current_user.student_id)
        docs = [own] if own else []
    return NotesResponse(notes={doc.id: doc.data.get("notes") or "" for doc in docs})


async def get_notes(store: DocumentStore, student_id: str) -> StudentNotesResponse:
    """Notes for one student; a missing record reads as empty text."""
    doc = await store.get(collections.STUDENT_NOTES, student_id)
    notes = (doc.data.get("notes") or "") if doc else ""
    return StudentNotesResponse(student_id=student_id, notes=notes)


async def update_notes(store: DocumentStore, student_id: str, notes) -> StudentNotesMutationResponse:
    if not isinstance(notes, str):
        raise ValidationError("Notes must be a string")
    await require_student(store, student_id)

    await store.set(collections.STUDENT_NOTES, student_id, {"notes": notes})
    return StudentNotesMutationResponse(success=True, student_id=student_id, notes=notes)
