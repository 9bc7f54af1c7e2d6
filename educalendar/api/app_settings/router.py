import logging

from fastapi import APIRouter, Depends

from educalendar.auth.dependencies import get_current_user
from educalendar.auth.rbac import require_admin
from educalendar.core.exceptions import InternalError, ServiceError
from educalendar.db.session import get_store
from educalendar.db.store import DocumentStore

from .schemas import AppSettingsMutationResponse, AppSettingsResponse, AppSettingsUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=AppSettingsResponse, dependencies=[Depends(get_current_user)])
async def get_app_settings(store: DocumentStore = Depends(get_store)) -> AppSettingsResponse:
    try:
        return await service.get_app_settings(store)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching settings")
        raise InternalError("Failed to fetch settings")


@router.put("", response_model=AppSettingsMutationResponse, dependencies=[Depends(require_admin)])
async def update_app_settings(
    payload: AppSettingsUpdate,
    store: DocumentStore = Depends(get_store),
) -> AppSettingsMutationResponse:
    try:
        return await service.update_app_settings(store, payload)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Error updating settings")
        raise InternalError("Failed to update settings")
