"""
Serviço dos registros simples (avisos, recursos, provas, planos de aula,
eventos do calendário) e das configurações do professor.

Salvar sem id cria o registro; com id, substitui o existente. Em ambos os
casos a coleção inteira é trocada.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Type, TypeVar

from lumen.schemas.base import LumenModel
from lumen.schemas.board import CalendarEvent, Exam, LessonPlan, Notice, Resource
from lumen.schemas.teacher_settings import TeacherSettings, TeacherSettingsUpdate
from lumen.store import EntityStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=LumenModel)


def _save_record(
    store: EntityStore,
    model: Type[RecordT],
    items: List[RecordT],
    replace: Callable[[Iterable[RecordT]], None],
    data: Dict[str, Any],
) -> RecordT:
    record_id = data.get("id")
    if record_id is None:
        record = model.model_validate({**data, "id": store.new_id()})
        replace([*items, record])
    else:
        if not any(item.id == record_id for item in items):
            raise ValueError(f"{model.__name__} {record_id} não encontrado.")
        record = model.model_validate(data)
        replace([record if item.id == record_id else item for item in items])
    store.mark_dirty()
    logger.debug("%s salvo : %s", model.__name__, record.id)
    return record


def save_notice(store: EntityStore, data: Dict[str, Any]) -> Notice:
    return _save_record(store, Notice, store.notices, store.replace_notices, data)


def save_resource(store: EntityStore, data: Dict[str, Any]) -> Resource:
    return _save_record(store, Resource, store.resources, store.replace_resources, data)


def save_exam(store: EntityStore, data: Dict[str, Any]) -> Exam:
    return _save_record(store, Exam, store.exams, store.replace_exams, data)


def save_lesson_plan(store: EntityStore, data: Dict[str, Any]) -> LessonPlan:
    return _save_record(store, LessonPlan, store.lesson_plans, store.replace_lesson_plans, data)


def save_calendar_event(store: EntityStore, data: Dict[str, Any]) -> CalendarEvent:
    return _save_record(store, CalendarEvent, store.calendar_events, store.replace_calendar_events, data)


def update_settings(store: EntityStore, data: TeacherSettingsUpdate) -> TeacherSettings:
    """Altera as configurações no lugar; o registro nunca é substituído."""
    for field, value in data.model_dump(exclude_none=True).items():
        if isinstance(value, str):
            value = value.strip()
        setattr(store.settings, field, value)
    store.mark_dirty()
    logger.info("Configurações do professor atualizadas")
    return store.settings
