"""
Coordenação dos estados de navegação por seção (lista -> detalhe -> sub-detalhe).

set_state é o único caminho para mudar a navegação: ele mescla o parcial no
estado atual (campos ausentes são preservados), valida o resultado e avisa
os inscritos da seção, que renderizam de novo.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Callable, Dict, List, Type

from lumen.schemas.view_state import (
    BaseViewState,
    ExamsViewState,
    ExtraLessonsViewState,
    GradesViewState,
    ReportsViewState,
    ResourcesViewState,
    RosterViewState,
)
from lumen.store import EntityStore

logger = logging.getLogger(__name__)


class Section(str, Enum):
    ROSTER = "roster"
    GRADES = "grades"
    EXTRA_LESSONS = "extra_lessons"
    REPORTS = "reports"
    RESOURCES = "resources"
    EXAMS = "exams"


_MODELS: Dict[Section, Type[BaseViewState]] = {
    Section.ROSTER: RosterViewState,
    Section.GRADES: GradesViewState,
    Section.EXTRA_LESSONS: ExtraLessonsViewState,
    Section.REPORTS: ReportsViewState,
    Section.RESOURCES: ResourcesViewState,
    Section.EXAMS: ExamsViewState,
}

# Campo que guarda a ordenação de cada seção ordenável
SORT_FIELDS: Dict[Section, str] = {
    Section.ROSTER: "aluno_sort",
    Section.EXTRA_LESSONS: "aula_sort",
    Section.RESOURCES: "sort",
    Section.EXAMS: "sort",
}

Listener = Callable[[Section, BaseViewState], None]


class ViewStateCoordinator:
    def __init__(self):
        self._states: Dict[Section, BaseViewState] = {section: model() for section, model in _MODELS.items()}
        self._listeners: Dict[Section, List[Listener]] = defaultdict(list)

    def get(self, section: Section) -> BaseViewState:
        """Estado atual da seção. Os modelos são imutáveis, pode ser compartilhado."""
        return self._states[Section(section)]

    def subscribe(self, section: Section, listener: Listener) -> None:
        self._listeners[Section(section)].append(listener)

    def set_state(self, section: Section, **changes) -> BaseViewState:
        """
        Mescla changes no estado da seção. Lança ValueError (ValidationError)
        para campos desconhecidos ou valores fora do permitido.
        """
        section = Section(section)
        current = self._states[section]
        merged = _MODELS[section].model_validate({**current.model_dump(), **changes})
        self._states[section] = merged
        logger.debug("View state %s : %s", section.value, merged)
        for listener in self._listeners[section]:
            listener(section, merged)
        return merged

    def toggle_sort(self, section: Section, key: str) -> BaseViewState:
        """
        Clique num cabeçalho de coluna: a chave ativa em ordem crescente passa
        a decrescente; qualquer outro clique ordena por key em ordem crescente.
        """
        section = Section(section)
        if section not in SORT_FIELDS:
            raise ValueError(f"A seção '{section.value}' não tem ordenação.")
        field = SORT_FIELDS[section]
        current = getattr(self._states[section], field)
        order = "desc" if current.key == key and current.order == "asc" else "asc"
        return self.set_state(section, **{field: {"key": key, "order": order}})

    def resolve(self, section: Section, store: EntityStore) -> BaseViewState:
        """
        Confere os ids do estado contra o armazenamento. Um id que não existe
        mais (excluído na mesma sessão) faz a seção voltar para a lista.
        """
        section = Section(section)
        state = self._states[section]

        if section is Section.ROSTER and state.view != "salas_list":
            group = store.find_class_group(state.sala_id)
            if group is None:
                return self.set_state(section, view="salas_list", sala_id=None, livro_id=None)
            if state.view == "livro_details" and group.find_book(state.livro_id) is None:
                return self.set_state(section, view="sala_details", livro_id=None)

        elif section is Section.GRADES and state.view in ("student_list", "boletim"):
            group = store.find_class_group(state.sala_id)
            if group is None:
                return self.set_state(section, view="salas_list", sala_id=None, aluno_id=None)
            if state.view == "boletim" and group.find_student(state.aluno_id) is None:
                return self.set_state(section, view="student_list", aluno_id=None)

        elif section is Section.EXTRA_LESSONS and state.view == "details":
            if store.find_private_student(state.aluno_id) is None:
                return self.set_state(section, view="list", aluno_id=None)

        elif section is Section.REPORTS and state.view == "student_report":
            if store.find_student(state.sala_id, state.aluno_id) is None:
                return self.set_state(section, view="dashboard", active_tab="global", sala_id=None, aluno_id=None)

        return state
