from educalendar.db import collections
from educalendar.db.store import DocumentStore

from .schemas import AppSettingsMutationResponse, AppSettingsResponse, AppSettingsUpdate


async def get_app_settings(store: DocumentStore) -> AppSettingsResponse:
    doc = await store.get(collections.SETTINGS, collections.APP_SETTINGS_ID)
    if doc is None:
        return AppSettingsResponse(is_dark_mode=False)
    return AppSettingsResponse.model_validate(doc.data)


async def update_app_settings(store: DocumentStore, payload: AppSettingsUpdate) -> AppSettingsMutationResponse:
    # An omitted flag resets to light mode.
    app_settings = AppSettingsResponse(is_dark_mode=bool(payload.is_dark_mode))
    await store.set(collections.SETTINGS, collections.APP_SETTINGS_ID, app_settings.model_dump(by_alias=True))
    return AppSettingsMutationResponse(success=True, settings=app_settings)
