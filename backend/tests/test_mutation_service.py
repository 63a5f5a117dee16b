"""
Testes unitários do pipeline de exclusão, finalização e restauração.
"""

from unittest.mock import MagicMock

from lumen.schemas.classroom import CLASS_ACTIVE, CLASS_FINALIZED, STATUS_ACTIVE, STATUS_EXCLUDED
from lumen.schemas.mutation import FinalizeRequest, ItemType, PendingDelete, ViewArea
from lumen.services.mutation_service import (
    DELETE_HANDLERS,
    REASON_ALREADY_FINALIZED,
    REASON_MISSING_FIELDS,
    REASON_MISSING_PARENT,
    REASON_NOT_EXCLUDED,
    REASON_NOT_FINALIZED,
    REASON_NOT_FOUND,
    REASON_OWNER_NOT_FOUND,
    REFRESH_TABLE,
)


# --- Tabelas de despacho ---

def test_todas_as_tabelas_cobrem_todos_os_tipos():
    assert set(DELETE_HANDLERS) == set(ItemType)
    assert set(REFRESH_TABLE) == set(ItemType)


# --- Exclusão em cascata ---

def test_excluir_livro_remove_progresso_do_livro(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=10, type=ItemType.BOOK, parent_id=1))

    group = seeded_store.find_class_group(1)
    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.ROSTER]
    assert [b.id for b in group.books] == [11]
    for student in group.students:
        assert all(p.book_id != 10 for p in student.progress)
    assert seeded_store.is_dirty


def test_excluir_livro_pela_view_do_livro_usa_grand_parent_id(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=11, type=ItemType.BOOK, grand_parent_id=1))

    assert outcome.applied is True
    assert [b.id for b in seeded_store.find_class_group(1).books] == [10]


def test_excluir_aluno_e_soft_delete(engine, seeded_store):
    roster_size = len(seeded_store.find_class_group(1).students)

    outcome = engine.request_delete(PendingDelete(id=100, type=ItemType.STUDENT, parent_id=1))

    student = seeded_store.find_student(1, 100)
    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.ROSTER]
    assert student is not None
    assert student.status == STATUS_EXCLUDED
    assert len(student.progress) == 2
    assert len(seeded_store.find_class_group(1).students) == roster_size


def test_exclusao_definitiva_remove_aluno(engine, seeded_store):
    roster_size = len(seeded_store.find_class_group(1).students)

    outcome = engine.request_delete(PendingDelete(id=101, type=ItemType.STUDENT_HARD_DELETE, parent_id=1))

    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.EXCLUDED_STUDENTS]
    assert seeded_store.find_student(1, 101) is None
    assert seeded_store.find_student(1, 100) is not None
    assert len(seeded_store.find_class_group(1).students) == roster_size - 1


def test_excluir_sala_remove_livros_e_alunos(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=1, type=ItemType.CLASS_GROUP))

    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.ROSTER, ViewArea.FINALIZED_CLASSES]
    assert [g.id for g in seeded_store.classes] == [2]
    assert seeded_store.find_student(1, 100) is None


def test_excluir_plano_de_aula_atualiza_as_duas_listas(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=600, type=ItemType.LESSON_PLAN))

    assert outcome.refresh == [ViewArea.DAILY_LESSON, ViewArea.ARCHIVED_LESSONS]
    assert seeded_store.lesson_plans == []


def test_excluir_aula_particular(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=301, type=ItemType.PRIVATE_LESSON, parent_id=300))

    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.EXTRA_LESSONS]
    assert seeded_store.find_private_student(300).lessons == []


def test_excluir_substitui_a_lista_sem_alterar_a_anterior(engine, seeded_store):
    before = seeded_store.notices

    engine.request_delete(PendingDelete(id=400, type=ItemType.NOTICE))

    assert len(before) == 1
    assert seeded_store.notices == []


def test_excluir_duas_vezes_e_seguro(engine, seeded_store):
    first = engine.request_delete(PendingDelete(id=400, type=ItemType.NOTICE))
    second = engine.request_delete(PendingDelete(id=400, type=ItemType.NOTICE))

    assert first.applied is True
    assert second.applied is True
    assert seeded_store.notices == []
    assert len(seeded_store.resources) == 1


def test_excluir_notifica_inscritos_da_flag_dirty(engine, seeded_store):
    listener = MagicMock()
    seeded_store.subscribe_dirty(listener)

    engine.request_delete(PendingDelete(id=500, type=ItemType.RESOURCE))

    listener.assert_called_once_with()


# --- Requisições inválidas ---

def test_excluir_sem_id_nao_altera_nada(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(type=ItemType.NOTICE))

    assert outcome.applied is False
    assert outcome.reason == REASON_MISSING_FIELDS
    assert outcome.refresh == []
    assert len(seeded_store.notices) == 1
    assert not seeded_store.is_dirty


def test_excluir_sem_tipo_nao_altera_nada(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=400))

    assert outcome.reason == REASON_MISSING_FIELDS
    assert not seeded_store.is_dirty


def test_excluir_livro_sem_sala_e_recusado(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=10, type=ItemType.BOOK))

    assert outcome.applied is False
    assert outcome.reason == REASON_MISSING_PARENT
    assert len(seeded_store.find_class_group(1).books) == 2


def test_excluir_livro_de_sala_inexistente(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=10, type=ItemType.BOOK, parent_id=999))

    assert outcome.applied is False
    assert outcome.reason == REASON_OWNER_NOT_FOUND
    assert not seeded_store.is_dirty


def test_soft_delete_de_aluno_inexistente(engine, seeded_store):
    outcome = engine.request_delete(PendingDelete(id=999, type=ItemType.STUDENT, parent_id=1))

    assert outcome.applied is False
    assert outcome.reason == REASON_OWNER_NOT_FOUND


# --- Duas fases ---

def test_marcar_para_remocao_mantem_o_item(engine, seeded_store):
    item = PendingDelete(id=400, type=ItemType.NOTICE)

    assert engine.mark_pending_removal(item) is True
    assert engine.is_pending_removal(ItemType.NOTICE, 400)
    assert len(seeded_store.notices) == 1
    assert not seeded_store.is_dirty

    engine.commit_removal(item)

    assert not engine.is_pending_removal(ItemType.NOTICE, 400)
    assert seeded_store.notices == []


def test_marcar_requisicao_invalida(engine):
    assert engine.mark_pending_removal(PendingDelete(id=10, type=ItemType.BOOK)) is False
    assert not engine.is_pending_removal(ItemType.BOOK, 10)


# --- Finalização e restauração ---

def test_finalizar_sala_ativa(engine, seeded_store):
    outcome = engine.finalize(1, FinalizeRequest(reason="Fim do semestre", details="ok", date="2025-07-01"))

    group = seeded_store.find_class_group(1)
    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.ROSTER]
    assert group.status == CLASS_FINALIZED
    assert group.finalization.date == "2025-07-01"
    assert group.finalization.reason == "Fim do semestre"
    assert len(group.students) == 2


def test_finalizar_sem_data_usa_agora(engine, seeded_store):
    engine.finalize(1, FinalizeRequest(reason="Fim"))

    assert seeded_store.find_class_group(1).finalization.date


def test_finalizar_duas_vezes_e_recusado(engine, seeded_store):
    engine.finalize(1, FinalizeRequest(reason="Primeira", date="2025-07-01"))
    outcome = engine.finalize(1, FinalizeRequest(reason="Segunda", date="2025-08-01"))

    assert outcome.applied is False
    assert outcome.reason == REASON_ALREADY_FINALIZED
    assert seeded_store.find_class_group(1).finalization.reason == "Primeira"


def test_finalizar_sala_inexistente(engine):
    outcome = engine.finalize(999, FinalizeRequest(reason="x"))

    assert outcome.applied is False
    assert outcome.reason == REASON_NOT_FOUND


def test_restaurar_sala_finalizada(engine, seeded_store):
    outcome = engine.restore_class_group(2)

    group = seeded_store.find_class_group(2)
    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.FINALIZED_CLASSES]
    assert group.status == CLASS_ACTIVE
    assert group.finalization is None


def test_restaurar_sala_ativa_e_recusado(engine):
    outcome = engine.restore_class_group(1)

    assert outcome.applied is False
    assert outcome.reason == REASON_NOT_FINALIZED


def test_restaurar_aluno_excluido(engine, seeded_store):
    outcome = engine.restore_student(1, 101)

    assert outcome.applied is True
    assert outcome.refresh == [ViewArea.EXCLUDED_STUDENTS]
    assert seeded_store.find_student(1, 101).status == STATUS_ACTIVE


def test_restaurar_aluno_nao_excluido(engine):
    outcome = engine.restore_student(1, 100)

    assert outcome.applied is False
    assert outcome.reason == REASON_NOT_EXCLUDED


def test_restaurar_aluno_inexistente(engine):
    assert engine.restore_student(1, 999).reason == REASON_NOT_FOUND
