from typing import Any, Dict, Union

from pydantic import BaseModel

from educalendar.core.schemas import CamelModel

Number = Union[int, float]


class PaidLessonsSet(BaseModel):
    count: Any = None


class PaidLessonsAdd(BaseModel):
    lessons: Any = None


class PaymentsResponse(CamelModel):
    payments: Dict[str, Number]


class PaidLessonsResponse(CamelModel):
    success: bool = True
    student_id: str
    count: Number


class PaidLessonsAddResponse(PaidLessonsResponse):
    added: Number
