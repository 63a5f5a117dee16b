"""
Serviço de cadastro e edição de salas, livros, alunos e notas.
"""

import logging
from typing import Optional

from lumen.schemas.classroom import (
    CLASS_ACTIVE,
    GRADE_FIELDS,
    START_BOOK_STATUSES,
    Book,
    BookCreate,
    ClassGroup,
    ClassGroupCreate,
    ClassGroupUpdate,
    Progress,
    Student,
    StudentCreate,
)
from lumen.store import EntityStore

logger = logging.getLogger(__name__)

_HOURLY_FIELDS = ("hourly_school", "lesson_duration_hours", "hourly_book_start")


def _require_group(store: EntityStore, class_group_id: int) -> ClassGroup:
    group = store.find_class_group(class_group_id)
    if group is None:
        raise ValueError("Sala não encontrada.")
    return group


def _require_student(group: ClassGroup, student_id: int) -> Student:
    student = group.find_student(student_id)
    if student is None:
        raise ValueError("Aluno não encontrado.")
    return student


def _clear_hourly_fields(group: ClassGroup) -> None:
    if group.kind != "Horista":
        for field in _HOURLY_FIELDS:
            setattr(group, field, None)


# --- Salas ---

def create_class_group(store: EntityStore, data: ClassGroupCreate) -> ClassGroup:
    """Cria uma sala ativa, sem livros nem alunos."""
    group = ClassGroup(
        id=store.new_id(),
        status=CLASS_ACTIVE,
        finalization=None,
        **data.model_dump(),
    )
    _clear_hourly_fields(group)
    store.replace_classes([*store.classes, group])
    store.mark_dirty()
    logger.info("Sala criada : %s (%s)", group.name, group.id)
    return group


def update_class_group(store: EntityStore, class_group_id: int, data: ClassGroupUpdate) -> Optional[ClassGroup]:
    """Atualiza os campos informados de uma sala. Retorna None se ela não existe."""
    group = store.find_class_group(class_group_id)
    if group is None:
        return None
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(group, field, value)
    _clear_hourly_fields(group)
    store.mark_dirty()
    return group


# --- Livros ---

def add_book(store: EntityStore, class_group_id: int, data: BookCreate) -> Book:
    group = _require_group(store, class_group_id)
    book = Book(id=store.new_id(), **data.model_dump())
    group.books = [*group.books, book]
    store.mark_dirty()
    return book


def update_book(store: EntityStore, class_group_id: int, book_id: int, data: BookCreate) -> Book:
    group = _require_group(store, class_group_id)
    book = group.find_book(book_id)
    if book is None:
        raise ValueError("Livro não encontrado.")
    for field, value in data.model_dump().items():
        setattr(book, field, value)
    store.mark_dirty()
    return book


# --- Alunos ---

def _start_book_id(group: ClassGroup, start_book_id: Optional[int]) -> Optional[int]:
    """Livro de início informado (precisa ser desta sala) ou o primeiro da sala."""
    if start_book_id is not None:
        if group.find_book(start_book_id) is None:
            raise ValueError("Livro não encontrado nesta sala.")
        return start_book_id
    return group.books[0].id if group.books else None


def _historical_progress(group: ClassGroup, data: StudentCreate) -> Optional[Progress]:
    """Progress anterior à entrada na sala, no livro de início do aluno."""
    if not data.has_history:
        return None
    book_id = _start_book_id(group, data.start_book_id)
    if book_id is None:
        return None
    if (
        data.historical_presences is not None
        and data.historical_lessons_given is not None
        and data.historical_presences > data.historical_lessons_given
    ):
        raise ValueError("O número de presenças não pode ser maior que o total de aulas.")
    return Progress(
        book_id=book_id,
        historical_lessons_given=data.historical_lessons_given,
        historical_presences=data.historical_presences,
        nota_written=data.historical_written,
        nota_oral=data.historical_oral,
        nota_participation=data.historical_participation,
    )


def _upsert_progress(student: Student, entry: Progress) -> None:
    existing = student.progress_for(entry.book_id)
    if existing is None:
        student.progress = [*student.progress, entry]
        return
    for field, value in entry.model_dump(exclude_none=True).items():
        setattr(existing, field, value)


def add_student(store: EntityStore, class_group_id: int, data: StudentCreate) -> Student:
    """
    Matricula um aluno na sala. Alunos em nivelamento ou transferidos
    guardam o livro de início (o primeiro da sala, se não informado).
    """
    group = _require_group(store, class_group_id)
    history = _historical_progress(group, data)

    start_book_id = None
    if data.status in START_BOOK_STATUSES:
        start_book_id = _start_book_id(group, data.start_book_id)

    student = Student(
        id=store.new_id(),
        code=data.code,
        full_name=data.full_name,
        status=data.status,
        transfer_origin=data.transfer_origin or None,
        start_book_id=start_book_id,
        progress=[history] if history else [],
    )
    group.students = [*group.students, student]
    store.mark_dirty()
    logger.info("Aluno %s matriculado na sala %s", student.id, group.id)
    return student


def update_student(store: EntityStore, class_group_id: int, student_id: int, data: StudentCreate) -> Student:
    group = _require_group(store, class_group_id)
    student = _require_student(group, student_id)
    history = _historical_progress(group, data)

    # Sem livro informado, um livro de início ainda válido é mantido
    start_book_id = student.start_book_id
    if data.status in START_BOOK_STATUSES and (
        data.start_book_id is not None or group.find_book(start_book_id) is None
    ):
        start_book_id = _start_book_id(group, data.start_book_id)

    student.code = data.code
    student.full_name = data.full_name
    student.status = data.status
    student.transfer_origin = data.transfer_origin or None
    student.start_book_id = start_book_id
    if history is not None:
        _upsert_progress(student, history)
    store.mark_dirty()
    return student


def link_student_to_book(store: EntityStore, class_group_id: int, student_id: int, book_id: int) -> Progress:
    """Garante um (e só um) Progress do aluno para um livro da mesma sala."""
    group = _require_group(store, class_group_id)
    student = _require_student(group, student_id)
    if group.find_book(book_id) is None:
        raise ValueError("Livro não encontrado nesta sala.")

    entry = student.progress_for(book_id)
    if entry is None:
        entry = Progress(book_id=book_id)
        student.progress = [*student.progress, entry]
        store.mark_dirty()
    return entry


def set_grade(
    store: EntityStore,
    class_group_id: int,
    student_id: int,
    book_id: int,
    field: str,
    value: Optional[float],
) -> Progress:
    if field not in GRADE_FIELDS:
        raise ValueError(f"Campo de nota inválido : {field}")
    entry = link_student_to_book(store, class_group_id, student_id, book_id)
    setattr(entry, field, value)
    store.mark_dirty()
    return entry
