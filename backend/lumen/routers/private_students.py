"""
Router das aulas particulares: alunos particulares e histórico de aulas.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from lumen.schemas.private_lessons import (
    PrivateLesson,
    PrivateLessonCreate,
    PrivateStudent,
    PrivateStudentCreate,
)
from lumen.services import private_lesson_service
from lumen.store import EntityStore, get_store

router = APIRouter(prefix="/api/v1/private-students", tags=["Aulas extras"])


def _require_private_student(store: EntityStore, private_student_id: int) -> PrivateStudent:
    student = store.find_private_student(private_student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Aluno particular não encontrado.")
    return student


@router.get("", response_model=List[PrivateStudent], summary="Listar os alunos particulares")
def list_private_students(store: EntityStore = Depends(get_store)):
    return store.private_students


@router.post("", response_model=PrivateStudent, status_code=201, summary="Cadastrar um aluno particular")
def create_private_student(data: PrivateStudentCreate, store: EntityStore = Depends(get_store)):
    """
    Um aluno vinculado (alunoMatriculadoId) recebe o nome do aluno
    matriculado, que precisa estar numa sala ativa.
    """
    try:
        return private_lesson_service.create_private_student(store, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/{private_student_id}", response_model=PrivateStudent, summary="Editar um aluno particular")
def update_private_student(private_student_id: int, data: PrivateStudentCreate, store: EntityStore = Depends(get_store)):
    _require_private_student(store, private_student_id)
    try:
        return private_lesson_service.update_private_student(store, private_student_id, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post(
    "/{private_student_id}/lessons",
    response_model=PrivateLesson,
    status_code=201,
    summary="Registrar uma aula",
)
def add_lesson(private_student_id: int, data: PrivateLessonCreate, store: EntityStore = Depends(get_store)):
    _require_private_student(store, private_student_id)
    return private_lesson_service.save_private_lesson(store, private_student_id, data)


@router.put(
    "/{private_student_id}/lessons/{lesson_id}",
    response_model=PrivateLesson,
    summary="Editar uma aula",
)
def update_lesson(
    private_student_id: int,
    lesson_id: int,
    data: PrivateLessonCreate,
    store: EntityStore = Depends(get_store),
):
    _require_private_student(store, private_student_id)
    try:
        return private_lesson_service.save_private_lesson(store, private_student_id, data, lesson_id=lesson_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
