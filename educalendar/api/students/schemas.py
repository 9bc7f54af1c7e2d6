from typing import Any, List, Optional, Union

from pydantic import BaseModel

from educalendar.core.schemas import CamelModel


class StudentCreate(BaseModel):
    """Fields are checked by validate_student_data, not by pydantic, so every violation is reported."""

    name: Any = None
    rate: Any = None


class StudentUpdate(CamelModel):
    """Partial update: only fields sent by the client are applied."""

    name: Any = None
    rate: Any = None
    access_code: Any = None


class StudentResponse(CamelModel):
    id: str
    name: str
    rate: Union[int, float]
    access_code: Optional[str] = None


class StudentListResponse(CamelModel):
    students: List[StudentResponse]


class StudentMutationResponse(CamelModel):
    success: bool = True
    student: StudentResponse


class AccessCodeResponse(CamelModel):
    success: bool = True
    access_code: str
