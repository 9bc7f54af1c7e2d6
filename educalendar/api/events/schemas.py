from typing import Any, List

from educalendar.core.schemas import CamelModel


class EventCreate(CamelModel):
    date: Any = None
    time: Any = None
    student_id: Any = None
    notes: Any = None


class EventUpdate(CamelModel):
    """Partial update: only fields sent by the client are applied."""

    date: Any = None
    time: Any = None
    student_id: Any = None
    notes: Any = None


class EventResponse(CamelModel):
    id: str
    date: str
    time: str
    student_id: str
    notes: str = ""


class EventListResponse(CamelModel):
    events: List[EventResponse]


class EventMutationResponse(CamelModel):
    success: bool = True
    event: EventResponse


class CopyEventsRequest(CamelModel):
    copy_type: Any = None
    from_date: Any = None
    to_date: Any = None


class CopyEventsResponse(CamelModel):
    success: bool = True
    copied_count: int
    events: List[EventResponse]
