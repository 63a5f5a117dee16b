"""
Schemas Pydantic das operações de exclusão, finalização e restauração.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from lumen.schemas.base import LumenModel


class ItemType(str, Enum):
    """Conjunto fechado de tipos que a exclusão genérica sabe tratar."""
    NOTICE = "notice"
    RESOURCE = "resource"
    EXAM = "exam"
    LESSON_PLAN = "lessonPlan"
    CLASS_GROUP = "classGroup"
    CALENDAR_EVENT = "calendarEvent"
    BOOK = "book"
    STUDENT = "student"
    STUDENT_HARD_DELETE = "studentHardDelete"
    PRIVATE_STUDENT = "privateStudent"
    PRIVATE_LESSON = "privateLesson"


class ViewArea(str, Enum):
    """Funções de renderização expostas pela camada de interface."""
    NOTICES = "avisos"
    RESOURCES = "recursos"
    EXAMS = "provas"
    DAILY_LESSON = "aulaDoDia"
    ARCHIVED_LESSONS = "aulasArquivadas"
    ROSTER = "alunos"
    FINALIZED_CLASSES = "salasFinalizadas"
    EXCLUDED_STUDENTS = "alunosExcluidos"
    CALENDAR = "calendario"
    EXTRA_LESSONS = "aulasExtras"


class PendingDelete(LumenModel):
    """
    Item que o usuário confirmou excluir.
    parent_id localiza a sala (ou o aluno particular) dona de um item aninhado;
    grand_parent_id é a sala quando a exclusão parte da view de um livro.
    """
    id: Optional[int] = None
    type: Optional[ItemType] = None
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    grand_parent_id: Optional[int] = Field(default=None, alias="grandParentId")


class FinalizeRequest(LumenModel):
    reason: str = Field(alias="motivo")
    details: str = Field(default="", alias="detalhes")
    date: Optional[str] = Field(default=None, alias="data")

    def resolved_date(self) -> str:
        return self.date or datetime.now().isoformat(timespec="seconds")


class MutationOutcome(LumenModel):
    """
    Resultado de uma mutação: se foi aplicada e quais views devem ser
    renderizadas de novo. Uma mutação recusada nunca levanta exceção.
    """
    applied: bool
    item_type: Optional[str] = None
    item_id: Optional[int] = None
    refresh: List[ViewArea] = Field(default_factory=list)
    reason: Optional[str] = None
