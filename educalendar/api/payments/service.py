import logging

from educalendar.api.students.service import require_student
from educalendar.auth.schemas import CurrentUser
from educalendar.core.exceptions import ValidationError
from educalendar.core.validation import is_number
from educalendar.db import collections
from educalendar.db.store import DocumentStore

from .schemas import PaidLessonsAddResponse, PaidLessonsResponse, PaymentsResponse

logger = logging.getLogger(__name__)


async def list_payments(store: DocumentStore, current_user: CurrentUser) -> PaymentsResponse:
    if current_user.is_admin:
        docs = await store.all(collections.PAID_LESSONS)
    else:
        own = await store.get(collections.PAID_LESSONS, current_user.student_id)
        docs = [own] if own else []
    return PaymentsResponse(payments={doc.id: doc.data.get("count") or 0 for doc in docs})


async def set_paid_lessons(store: DocumentStore, student_id: str, count) -> PaidLessonsResponse:
    if not is_number(count) or count < 0:
        raise ValidationError("Invalid count value")
    await require_student(store, student_id)

    await store.set(collections.PAID_LESSONS, student_id, {"count": count})
    return PaidLessonsResponse(success=True, student_id=student_id, count=count)


async def add_paid_lessons(store: DocumentStore, student_id: str, lessons) -> PaidLessonsAddResponse:
    if not is_number(lessons) or lessons <= 0:
        raise ValidationError("Invalid lessons value")
    await require_student(store, student_id)

    # Read-modify-write; concurrent adds for one student are not serialized.
    current = await store.get(collections.PAID_LESSONS, student_id)
    current_count = (current.data.get("count") or 0) if current else 0
    new_count = current_count + lessons
    if not is_number(new_count):
        raise ValidationError("Invalid lessons value")
    await store.set(collections.PAID_LESSONS, student_id, {"count": new_count})

    logger.info("Added %s paid lesson(s) for %s (now %s)", lessons, student_id, new_count)
    return PaidLessonsAddResponse(success=True, student_id=student_id, count=new_count, added=lessons)
