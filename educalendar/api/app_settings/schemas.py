from typing import Optional

from educalendar.core.schemas import CamelModel


class AppSettingsUpdate(CamelModel):
    is_dark_mode: Optional[bool] = None


class AppSettingsResponse(CamelModel):
    is_dark_mode: bool = False


class AppSettingsMutationResponse(CamelModel):
    success: bool = True
    settings: AppSettingsResponse
