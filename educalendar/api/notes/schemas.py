from typing import Any, Dict

from pydantic import BaseModel

from educalendar.core.schemas import CamelModel


class StudentNotesUpdate(BaseModel):
    notes: Any = None


class NotesResponse(CamelModel):
    notes: Dict[str, str]


class StudentNotesResponse(CamelModel):
    student_id: str
    notes: str


class StudentNotesMutationResponse(StudentNotesResponse):
    success: bool = True
