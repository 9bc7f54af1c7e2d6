from educalendar.core.identifiers import utc_timestamp
from educalendar.db import collections
from educalendar.db.store import DocumentStore

from .schemas import AnnouncementMutationResponse, AnnouncementResponse, AnnouncementUpdate


async def get_current_announcement(store: DocumentStore) -> AnnouncementResponse:
    doc = await store.get(collections.ANNOUNCEMENTS, collections.CURRENT_ANNOUNCEMENT_ID)
    if doc is None:
        return AnnouncementResponse(title="", message="", active=False)
    return AnnouncementResponse.model_validate(doc.data)


async def _write(store: DocumentStore, announcement: AnnouncementResponse) -> AnnouncementResponse:
    await store.set(
        collections.ANNOUNCEMENTS,
        collections.CURRENT_ANNOUNCEMENT_ID,
        announcement.model_dump(by_alias=True),
    )
    return announcement


async def save_announcement(store: DocumentStore, payload: AnnouncementUpdate) -> AnnouncementMutationResponse:
    announcement = AnnouncementResponse(
        title=payload.title or "",
        message=payload.message or "",
        active=payload.active if payload.active is not None else False,
        updated_at=utc_timestamp(),
    )
    return AnnouncementMutationResponse(success=True, announcement=await _write(store, announcement))


async def clear_announcement(store: DocumentStore) -> None:
    await _write(store, AnnouncementResponse(title="", message="", active=False, updated_at=utc_timestamp()))
