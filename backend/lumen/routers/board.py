"""
Router dos registros simples: avisos, recursos, provas, planos de aula e
eventos do calendário. Todas as coleções seguem o mesmo contrato.
"""

from typing import Any, Callable, Dict, List, Type

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from lumen.schemas.base import LumenModel
from lumen.schemas.board import CalendarEvent, Exam, LessonPlan, Notice, Resource
from lumen.services import board_service
from lumen.store import EntityStore, get_store

router = APIRouter(prefix="/api/v1", tags=["Quadro"])


def _save(save: Callable[[EntityStore, Dict[str, Any]], LumenModel], store: EntityStore, data: Dict[str, Any]):
    try:
        return save(store, data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _register(path: str, model: Type[LumenModel], collection: str, save, label: str) -> None:
    """Registra listar / criar / substituir para uma coleção."""

    @router.get(path, response_model=List[model], summary=f"Listar {label}", name=f"list_{collection}")
    def list_items(store: EntityStore = Depends(get_store)):
        return getattr(store, collection)

    @router.post(path, response_model=model, status_code=201, summary=f"Criar ({label})", name=f"create_{collection}")
    def create_item(data: Dict[str, Any] = Body(...), store: EntityStore = Depends(get_store)):
        data.pop("id", None)
        return _save(save, store, data)

    @router.put(f"{path}/{{item_id}}", response_model=model, summary=f"Substituir ({label})", name=f"replace_{collection}")
    def replace_item(item_id: int, data: Dict[str, Any] = Body(...), store: EntityStore = Depends(get_store)):
        return _save(save, store, {**data, "id": item_id})


_register("/notices", Notice, "notices", board_service.save_notice, "avisos")
_register("/resources", Resource, "resources", board_service.save_resource, "recursos")
_register("/exams", Exam, "exams", board_service.save_exam, "provas")
_register("/lesson-plans", LessonPlan, "lesson_plans", board_service.save_lesson_plan, "planos de aula")
_register("/calendar-events", CalendarEvent, "calendar_events", board_service.save_calendar_event, "eventos do calendário")
