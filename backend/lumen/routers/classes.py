"""
Router das salas: cadastro, livros, alunos, finalização e restauração.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from lumen.dependencies import get_mutation_engine
from lumen.schemas.classroom import (
    Book,
    BookCreate,
    ClassGroup,
    ClassGroupCreate,
    ClassGroupUpdate,
    Student,
    StudentCreate,
)
from lumen.schemas.mutation import FinalizeRequest, MutationOutcome
from lumen.services import classroom_service, mutation_service
from lumen.services.mutation_service import MutationEngine
from lumen.store import EntityStore, get_store

router = APIRouter(prefix="/api/v1/classes", tags=["Salas"])


@router.get("", response_model=List[ClassGroup], summary="Listar as salas")
def list_classes(store: EntityStore = Depends(get_store)):
    return store.classes


@router.post("", response_model=ClassGroup, status_code=201, summary="Criar uma sala")
def create_class(data: ClassGroupCreate, store: EntityStore = Depends(get_store)):
    return classroom_service.create_class_group(store, data)


@router.get("/{class_id}", response_model=ClassGroup, summary="Detalhe de uma sala")
def get_class(class_id: int, store: EntityStore = Depends(get_store)):
    group = store.find_class_group(class_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Sala não encontrada.")
    return group


@router.put("/{class_id}", response_model=ClassGroup, summary="Editar uma sala")
def update_class(class_id: int, data: ClassGroupUpdate, store: EntityStore = Depends(get_store)):
    group = classroom_service.update_class_group(store, class_id, data)
    if group is None:
        raise HTTPException(status_code=404, detail="Sala não encontrada.")
    return group


@router.post("/{class_id}/books", response_model=Book, status_code=201, summary="Adicionar um livro")
def add_book(class_id: int, data: BookCreate, store: EntityStore = Depends(get_store)):
    try:
        return classroom_service.add_book(store, class_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{class_id}/students", response_model=Student, status_code=201, summary="Matricular um aluno")
def add_student(class_id: int, data: StudentCreate, store: EntityStore = Depends(get_store)):
    if store.find_class_group(class_id) is None:
        raise HTTPException(status_code=404, detail="Sala não encontrada.")
    try:
        return classroom_service.add_student(store, class_id, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# --- Arquivamento ---

def _outcome_or_error(outcome: MutationOutcome) -> MutationOutcome:
    if outcome.reason == mutation_service.REASON_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Sala ou aluno não encontrado.")
    if outcome.reason is not None:
        raise HTTPException(status_code=409, detail=outcome.reason)
    return outcome


@router.post("/{class_id}/finalize", response_model=MutationOutcome, summary="Finalizar uma sala")
def finalize_class(class_id: int, data: FinalizeRequest, engine: MutationEngine = Depends(get_mutation_engine)):
    """Arquiva uma sala ativa. Uma sala já finalizada devolve 409."""
    return _outcome_or_error(engine.finalize(class_id, data))


@router.post("/{class_id}/restore", response_model=MutationOutcome, summary="Restaurar uma sala")
def restore_class(class_id: int, engine: MutationEngine = Depends(get_mutation_engine)):
    return _outcome_or_error(engine.restore_class_group(class_id))


@router.post(
    "/{class_id}/students/{student_id}/restore",
    response_model=MutationOutcome,
    summary="Restaurar um aluno excluído",
)
def restore_student(class_id: int, student_id: int, engine: MutationEngine = Depends(get_mutation_engine)):
    return _outcome_or_error(engine.restore_student(class_id, student_id))
