"""
Armazenamento em memória do grafo de entidades do professor.

Cada coleção é substituída por inteiro (nunca alterada com splice), de modo
que quem guarda uma referência à lista anterior não a vê mudar por baixo.
A flag "dirty" indica alterações ainda não persistidas: qualquer componente
pode levantá-la, só o colaborador de persistência a limpa.
"""

import logging
from datetime import date
from typing import Any, Callable, Iterable, List, Optional, Tuple

from fastapi import Request

from lumen.config import settings
from lumen.ids import IdGenerator, TimestampIdGenerator
from lumen.schemas.board import CalendarEvent, Exam, LessonPlan, Notice, Resource
from lumen.schemas.classroom import (
    ACTIVE_STUDENT_STATUSES,
    CLASS_FINALIZED,
    ClassGroup,
    Student,
)
from lumen.schemas.private_lessons import PrivateStudent
from lumen.schemas.snapshot import StoreSnapshot
from lumen.schemas.teacher_settings import TeacherSettings
from lumen.services.holiday_service import initial_holidays
from lumen.services.progress_service import sanitize_progress

logger = logging.getLogger(__name__)


class EntityStore:
    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        teacher_settings: Optional[TeacherSettings] = None,
    ):
        self.new_id: IdGenerator = id_generator or TimestampIdGenerator()
        self.settings = teacher_settings or TeacherSettings()
        self._classes: List[ClassGroup] = []
        self._private_students: List[PrivateStudent] = []
        self._notices: List[Notice] = []
        self._resources: List[Resource] = []
        self._exams: List[Exam] = []
        self._lesson_plans: List[LessonPlan] = []
        self._calendar_events: List[CalendarEvent] = []
        self._dirty = False
        self._dirty_listeners: List[Callable[[], Any]] = []

    # --- Coleções ---

    @property
    def classes(self) -> List[ClassGroup]:
        return self._classes

    def replace_classes(self, items: Iterable[ClassGroup]) -> None:
        self._classes = list(items)

    @property
    def private_students(self) -> List[PrivateStudent]:
        return self._private_students

    def replace_private_students(self, items: Iterable[PrivateStudent]) -> None:
        self._private_students = list(items)

    @property
    def notices(self) -> List[Notice]:
        return self._notices

    def replace_notices(self, items: Iterable[Notice]) -> None:
        self._notices = list(items)

    @property
    def resources(self) -> List[Resource]:
        return self._resources

    def replace_resources(self, items: Iterable[Resource]) -> None:
        self._resources = list(items)

    @property
    def exams(self) -> List[Exam]:
        return self._exams

    def replace_exams(self, items: Iterable[Exam]) -> None:
        self._exams = list(items)

    @property
    def lesson_plans(self) -> List[LessonPlan]:
        return self._lesson_plans

    def replace_lesson_plans(self, items: Iterable[LessonPlan]) -> None:
        self._lesson_plans = list(items)

    @property
    def calendar_events(self) -> List[CalendarEvent]:
        return self._calendar_events

    def replace_calendar_events(self, items: Iterable[CalendarEvent]) -> None:
        self._calendar_events = list(items)

    # --- Flag de alterações pendentes ---

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        """Sinaliza alterações não salvas e avisa os inscritos (auto-save)."""
        self._dirty = True
        for listener in self._dirty_listeners:
            listener()

    def clear_dirty(self) -> None:
        """Reservado ao colaborador de persistência, após salvar com sucesso."""
        self._dirty = False

    def subscribe_dirty(self, listener: Callable[[], Any]) -> None:
        self._dirty_listeners.append(listener)

    # --- Consultas ---

    def find_class_group(self, class_group_id: Optional[int]) -> Optional[ClassGroup]:
        if class_group_id is None:
            return None
        return next((s for s in self._classes if s.id == class_group_id), None)

    def find_student(self, class_group_id: Optional[int], student_id: Optional[int]) -> Optional[Student]:
        group = self.find_class_group(class_group_id)
        return group.find_student(student_id) if group else None

    def find_private_student(self, private_student_id: Optional[int]) -> Optional[PrivateStudent]:
        if private_student_id is None:
            return None
        return next((a for a in self._private_students if a.id == private_student_id), None)

    @staticmethod
    def active_roster(group: ClassGroup) -> List[Student]:
        return [s for s in group.students if s.status in ACTIVE_STUDENT_STATUSES]

    def excluded_students(self) -> List[Tuple[ClassGroup, Student]]:
        """Alunos excluídos (soft delete) de todas as salas, por nome."""
        pairs = [(g, s) for g in self._classes for s in g.students if s.is_excluded]
        return sorted(pairs, key=lambda pair: pair[1].full_name.lower())

    def finalized_class_groups(self) -> List[ClassGroup]:
        """Salas arquivadas, da finalização mais recente para a mais antiga."""
        finalized = [s for s in self._classes if s.status == CLASS_FINALIZED]
        return sorted(
            finalized,
            key=lambda s: s.finalization.date if s.finalization else "",
            reverse=True,
        )

    def find_active_student(self, student_id: Optional[int]) -> Optional[Student]:
        """Procura um aluno apenas nas salas ativas."""
        if student_id is None:
            return None
        for group in self._classes:
            if not group.is_active:
                continue
            student = group.find_student(student_id)
            if student is not None:
                return student
        return None

    def linked_student_for(self, private_student: PrivateStudent) -> Optional[Student]:
        """
        Aluno regular vinculado a um aluno particular, se ainda existir numa
        sala ativa. Um vínculo quebrado é apenas informativo: nada é corrigido.
        """
        return self.find_active_student(private_student.linked_student_id)

    # --- Snapshot ---

    def snapshot(self) -> dict:
        """Estado completo com as chaves do formato salvo."""
        return StoreSnapshot(
            settings=self.settings,
            notices=self._notices,
            resources=self._resources,
            exams=self._exams,
            lesson_plans=self._lesson_plans,
            classes=self._classes,
            private_students=self._private_students,
            calendar_events=self._calendar_events,
        ).to_wire()

    @classmethod
    def from_snapshot(cls, data: Optional[dict], id_generator: Optional[IdGenerator] = None) -> "EntityStore":
        """
        Reconstrói o armazenamento a partir de um snapshot salvo.
        Sem snapshot (usuário novo) o resultado é um armazenamento vazio com o
        calendário de feriados. O carregamento não conta como alteração.
        """
        snapshot = StoreSnapshot.model_validate(data or {})
        store = cls(id_generator=id_generator, teacher_settings=snapshot.settings)
        store.replace_notices(snapshot.notices)
        store.replace_resources(snapshot.resources)
        store.replace_exams(snapshot.exams)
        store.replace_lesson_plans(snapshot.lesson_plans)
        store.replace_classes(snapshot.classes)
        store.replace_private_students(snapshot.private_students)
        if snapshot.calendar_events is None:
            store.replace_calendar_events(initial_holidays(date.today().year, settings.HOLIDAYS_END_YEAR))
        else:
            store.replace_calendar_events(snapshot.calendar_events)

        sanitize_progress(store.classes)
        store.clear_dirty()
        logger.info(
            "Armazenamento carregado : %d salas, %d alunos particulares, %d aulas",
            len(store.classes), len(store.private_students), len(store.lesson_plans),
        )
        return store


def get_store(request: Request) -> EntityStore:
    """Dependência FastAPI : fornece o armazenamento criado no startup."""
    return request.app.state.store
