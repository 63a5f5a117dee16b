"""
Configuração compartilhada de todos os testes.
Sobrescreve as dependências do armazenamento para que cada teste use um
armazenamento próprio, com ids previsíveis.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from lumen.dependencies import get_mutation_engine, get_view_state
from lumen.main import app
from lumen.schemas.board import LessonPlan, Notice, Resource
from lumen.schemas.classroom import (
    CLASS_FINALIZED,
    STATUS_EXCLUDED,
    Book,
    ClassGroup,
    FinalizationRecord,
    Progress,
    Student,
)
from lumen.schemas.private_lessons import PrivateLesson, PrivateStudent
from lumen.services.mutation_service import MutationEngine
from lumen.services.view_state_service import ViewStateCoordinator
from lumen.store import EntityStore, get_store


@pytest.fixture
def store():
    """Armazenamento vazio; os ids gerados começam em 1000."""
    return EntityStore(id_generator=itertools.count(1000).__next__)


@pytest.fixture
def seeded_store(store):
    """
    Sala 1 (ativa) com dois livros e dois alunos, sala 2 (finalizada),
    um aluno particular com uma aula e alguns registros simples.
    """
    store.replace_classes([
        ClassGroup(
            id=1,
            name="Turma Math A",
            books=[Book(id=10, name="Math Basics"), Book(id=11, name="English 1")],
            students=[
                Student(
                    id=100,
                    code="CTR-001",
                    full_name="Ana Souza",
                    number=1,
                    progress=[Progress(book_id=10, nota_written=8.0), Progress(book_id=11)],
                ),
                Student(id=101, code="CTR-002", full_name="Bruno Lima", number=2, status=STATUS_EXCLUDED),
            ],
        ),
        ClassGroup(
            id=2,
            name="Turma Sábado",
            status=CLASS_FINALIZED,
            finalization=FinalizationRecord(date="2024-06-30", reason="Fim do curso"),
            books=[Book(id=20, name="Kids 2")],
            students=[Student(id=200, code="CTR-003", full_name="Carla Dias")],
        ),
    ])
    store.replace_private_students([
        PrivateStudent(
            id=300,
            name="Ana Souza",
            linked_student_id=100,
            lessons=[PrivateLesson(id=301, date="2025-03-10", themes="Past tense")],
        ),
    ])
    store.replace_notices([Notice(id=400, date="2025-03-01", notes="Reunião de pais", details="Sala 4")])
    store.replace_resources([Resource(id=500, book="Math Basics", page=12, kind="Kahoot", subject="Frações")])
    store.replace_lesson_plans([LessonPlan(id=600, date="2025-03-11", topic="Revisão", today_content="math quiz")])
    return store


@pytest.fixture
def engine(seeded_store):
    return MutationEngine(seeded_store)


@pytest.fixture
def client(seeded_store, engine):
    """Cliente HTTP de teste com o armazenamento semeado."""
    coordinator = ViewStateCoordinator()
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_mutation_engine] = lambda: engine
    app.dependency_overrides[get_view_state] = lambda: coordinator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
