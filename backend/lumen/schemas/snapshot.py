"""
Formato do snapshot completo do armazenamento (o que a persistência salva).
"""

from typing import List, Optional

from pydantic import Field

from lumen.schemas.base import LumenModel
from lumen.schemas.board import CalendarEvent, Exam, LessonPlan, Notice, Resource
from lumen.schemas.classroom import ClassGroup
from lumen.schemas.private_lessons import PrivateStudent
from lumen.schemas.teacher_settings import TeacherSettings


class StoreSnapshot(LumenModel):
    settings: TeacherSettings = Field(default_factory=TeacherSettings)
    notices: List[Notice] = Field(default_factory=list, alias="avisos")
    resources: List[Resource] = Field(default_factory=list, alias="recursos")
    exams: List[Exam] = Field(default_factory=list, alias="provas")
    lesson_plans: List[LessonPlan] = Field(default_factory=list, alias="aulas")
    classes: List[ClassGroup] = Field(default_factory=list, alias="salas")
    private_students: List[PrivateStudent] = Field(default_factory=list, alias="alunosParticulares")
    # None = nunca salvo; o armazenamento gera o calendário de feriados
    calendar_events: Optional[List[CalendarEvent]] = Field(default=None, alias="calendarioEventos")
