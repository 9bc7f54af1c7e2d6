from typing import Optional

from educalendar.core.schemas import CamelModel


class AnnouncementUpdate(CamelModel):
    title: Optional[str] = None
    message: Optional[str] = None
    active: Optional[bool] = None


class AnnouncementResponse(CamelModel):
    title: str = ""
    message: str = ""
    active: bool = False
    updated_at: Optional[str] = None


class AnnouncementMutationResponse(CamelModel):
    success: bool = True
    announcement: AnnouncementResponse
