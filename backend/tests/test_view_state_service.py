"""
Testes unitários da coordenação dos estados de navegação.
"""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from lumen.services.view_state_service import Section, ViewStateCoordinator


# --- Estado inicial ---

def test_estados_iniciais():
    coordinator = ViewStateCoordinator()

    roster = coordinator.get(Section.ROSTER)
    assert roster.view == "salas_list"
    assert roster.sala_id is None
    assert (roster.aluno_sort.key, roster.aluno_sort.order) == ("numero", "asc")
    assert coordinator.get(Section.EXTRA_LESSONS).aula_sort.order == "desc"
    assert coordinator.get(Section.EXAMS).active_category == "new"


def test_estado_nao_pode_ser_alterado_diretamente():
    coordinator = ViewStateCoordinator()

    with pytest.raises(ValidationError):
        coordinator.get(Section.ROSTER).view = "sala_details"


# --- set_state ---

def test_set_state_preserva_campos_ausentes():
    coordinator = ViewStateCoordinator()
    coordinator.toggle_sort(Section.ROSTER, "nomeCompleto")

    coordinator.set_state(Section.ROSTER, view="sala_details", sala_id=1)
    state = coordinator.set_state(Section.ROSTER, view="livro_details", livro_id=10)

    assert state.view == "livro_details"
    assert state.sala_id == 1
    assert state.livro_id == 10
    assert state.aluno_sort.key == "nomeCompleto"


def test_set_state_aceita_nome_da_secao():
    coordinator = ViewStateCoordinator()

    state = coordinator.set_state("grades", view="student_list", sala_id=2)

    assert coordinator.get(Section.GRADES) is state


def test_set_state_campo_desconhecido_rejeitado():
    coordinator = ViewStateCoordinator()

    with pytest.raises(ValueError):
        coordinator.set_state(Section.ROSTER, salaId=1)
    assert coordinator.get(Section.ROSTER).sala_id is None


def test_set_state_view_invalida_rejeitada():
    coordinator = ViewStateCoordinator()

    with pytest.raises(ValueError):
        coordinator.set_state(Section.EXTRA_LESSONS, view="boletim")
    assert coordinator.get(Section.EXTRA_LESSONS).view == "list"


def test_set_state_notifica_inscritos_da_secao():
    coordinator = ViewStateCoordinator()
    roster_listener = MagicMock()
    grades_listener = MagicMock()
    coordinator.subscribe(Section.ROSTER, roster_listener)
    coordinator.subscribe(Section.GRADES, grades_listener)

    state = coordinator.set_state(Section.ROSTER, show_inactive_alunos=True)

    roster_listener.assert_called_once_with(Section.ROSTER, state)
    grades_listener.assert_not_called()


# --- toggle_sort ---

def test_clicar_na_chave_ativa_inverte_a_ordem():
    coordinator = ViewStateCoordinator()

    first = coordinator.toggle_sort(Section.ROSTER, "numero")
    second = coordinator.toggle_sort(Section.ROSTER, "numero")

    assert first.aluno_sort.order == "desc"
    assert second.aluno_sort.order == "asc"


def test_clicar_em_outra_chave_ordena_crescente():
    coordinator = ViewStateCoordinator()
    coordinator.toggle_sort(Section.RESOURCES, "pagina")

    state = coordinator.toggle_sort(Section.RESOURCES, "assunto")

    assert (state.sort.key, state.sort.order) == ("assunto", "asc")


def test_clicar_na_chave_ativa_decrescente_volta_para_crescente():
    coordinator = ViewStateCoordinator()

    state = coordinator.toggle_sort(Section.EXTRA_LESSONS, "data")

    assert (state.aula_sort.key, state.aula_sort.order) == ("data", "asc")


def test_ordenar_por_chave_invalida():
    coordinator = ViewStateCoordinator()

    with pytest.raises(ValueError):
        coordinator.toggle_sort(Section.EXAMS, "pagina")


def test_ordenar_secao_sem_ordenacao():
    coordinator = ViewStateCoordinator()

    with pytest.raises(ValueError):
        coordinator.toggle_sort(Section.GRADES, "numero")


# --- resolve ---

def test_resolve_sala_excluida_volta_para_a_lista(seeded_store):
    coordinator = ViewStateCoordinator()
    coordinator.set_state(Section.ROSTER, view="sala_details", sala_id=999)

    state = coordinator.resolve(Section.ROSTER, seeded_store)

    assert state.view == "salas_list"
    assert state.sala_id is None


def test_resolve_livro_excluido_volta_para_a_sala(seeded_store):
    coordinator = ViewStateCoordinator()
    coordinator.set_state(Section.ROSTER, view="livro_details", sala_id=1, livro_id=999)

    state = coordinator.resolve(Section.ROSTER, seeded_store)

    assert state.view == "sala_details"
    assert state.sala_id == 1
    assert state.livro_id is None


def test_resolve_estado_valido_nao_muda(seeded_store):
    coordinator = ViewStateCoordinator()
    expected = coordinator.set_state(Section.ROSTER, view="livro_details", sala_id=1, livro_id=10)

    assert coordinator.resolve(Section.ROSTER, seeded_store) is expected


def test_resolve_boletim_de_aluno_excluido(seeded_store):
    coordinator = ViewStateCoordinator()
    coordinator.set_state(Section.GRADES, view="boletim", sala_id=1, aluno_id=999)

    state = coordinator.resolve(Section.GRADES, seeded_store)

    assert state.view == "student_list"
    assert state.sala_id == 1


def test_resolve_aluno_particular_excluido(seeded_store):
    coordinator = ViewStateCoordinator()
    coordinator.set_state(Section.EXTRA_LESSONS, view="details", aluno_id=999)

    assert coordinator.resolve(Section.EXTRA_LESSONS, seeded_store).view == "list"


def test_resolve_relatorio_de_aluno_excluido(seeded_store):
    coordinator = ViewStateCoordinator()
    coordinator.set_state(Section.REPORTS, view="student_report", active_tab="aluno", sala_id=1, aluno_id=999)

    state = coordinator.resolve(Section.REPORTS, seeded_store)

    assert state.view == "dashboard"
    assert state.active_tab == "global"
