"""
Router das configurações do professor (registro único).
"""

from fastapi import APIRouter, Depends

from lumen.schemas.teacher_settings import TeacherSettings, TeacherSettingsUpdate
from lumen.services import board_service
from lumen.store import EntityStore, get_store

router = APIRouter(prefix="/api/v1/settings", tags=["Configurações"])


@router.get("", response_model=TeacherSettings, summary="Configurações atuais")
def get_settings(store: EntityStore = Depends(get_store)):
    return store.settings


@router.patch("", response_model=TeacherSettings, summary="Alterar configurações")
def patch_settings(data: TeacherSettingsUpdate, store: EntityStore = Depends(get_store)):
    """Só os campos informados mudam."""
    return board_service.update_settings(store, data)
