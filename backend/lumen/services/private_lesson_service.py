"""
Serviço das aulas particulares: alunos particulares e o histórico de aulas.
"""

import logging
from typing import Optional

from lumen.schemas.private_lessons import (
    PrivateLesson,
    PrivateLessonCreate,
    PrivateStudent,
    PrivateStudentCreate,
)
from lumen.store import EntityStore

logger = logging.getLogger(__name__)


def _resolve_name(store: EntityStore, data: PrivateStudentCreate) -> str:
    """Um aluno particular vinculado usa sempre o nome do aluno matriculado."""
    if data.linked_student_id is not None:
        linked = store.find_active_student(data.linked_student_id)
        if linked is None:
            raise ValueError("Aluno matriculado não encontrado numa sala ativa.")
        return linked.full_name
    if not data.name:
        raise ValueError("O nome do aluno não pode ficar vazio.")
    return data.name


def create_private_student(store: EntityStore, data: PrivateStudentCreate) -> PrivateStudent:
    student = PrivateStudent(
        id=store.new_id(),
        name=_resolve_name(store, data),
        linked_student_id=data.linked_student_id,
    )
    store.replace_private_students([*store.private_students, student])
    store.mark_dirty()
    logger.info("Aluno particular criado : %s (%s)", student.name, student.id)
    return student


def update_private_student(store: EntityStore, private_student_id: int, data: PrivateStudentCreate) -> PrivateStudent:
    student = store.find_private_student(private_student_id)
    if student is None:
        raise ValueError("Aluno particular não encontrado.")
    student.name = _resolve_name(store, data)
    student.linked_student_id = data.linked_student_id
    store.mark_dirty()
    return student


def save_private_lesson(
    store: EntityStore,
    private_student_id: int,
    data: PrivateLessonCreate,
    lesson_id: Optional[int] = None,
) -> PrivateLesson:
    """Registra uma aula nova ou substitui a aula lesson_id do aluno."""
    student = store.find_private_student(private_student_id)
    if student is None:
        raise ValueError("Aluno particular não encontrado.")

    if lesson_id is None:
        lesson = PrivateLesson(id=store.new_id(), **data.model_dump())
        student.lessons = [*student.lessons, lesson]
    else:
        if student.find_lesson(lesson_id) is None:
            raise ValueError("Aula não encontrada.")
        lesson = PrivateLesson(id=lesson_id, **data.model_dump())
        student.lessons = [lesson if a.id == lesson_id else a for a in student.lessons]
    store.mark_dirty()
    return lesson
