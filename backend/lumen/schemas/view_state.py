"""
Estados de navegação de cada seção da interface.

Os modelos são imutáveis: a única forma de mudar a navegação é pelo
ViewStateCoordinator, que mescla o parcial e avisa os inscritos.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

SortOrder = Literal["asc", "desc"]


class BaseViewState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class StudentSort(BaseViewState):
    key: Literal["numero", "ctr", "nomeCompleto"] = "numero"
    order: SortOrder = "asc"


class LessonSort(BaseViewState):
    key: Literal["data", "livro", "temas"] = "data"
    order: SortOrder = "desc"


class ResourceSort(BaseViewState):
    key: Literal["livro", "pagina", "tipo", "assunto"] = "pagina"
    order: SortOrder = "asc"


class ExamSort(BaseViewState):
    key: Literal["livro", "tipo", "temas"] = "livro"
    order: SortOrder = "asc"


class RosterViewState(BaseViewState):
    view: Literal["salas_list", "sala_details", "livro_details"] = "salas_list"
    sala_id: Optional[int] = None
    livro_id: Optional[int] = None
    aluno_sort: StudentSort = StudentSort()
    show_inactive_alunos: bool = False


class GradesViewState(BaseViewState):
    view: Literal["salas_list", "finalizadas_salas_list", "student_list", "boletim"] = "salas_list"
    sala_id: Optional[int] = None
    aluno_id: Optional[int] = None


class ExtraLessonsViewState(BaseViewState):
    view: Literal["list", "details"] = "list"
    aluno_id: Optional[int] = None
    aula_sort: LessonSort = LessonSort()


class ReportsViewState(BaseViewState):
    view: Literal["dashboard", "student_report"] = "dashboard"
    active_tab: Literal["global", "turma", "aluno", "radar"] = "global"
    sala_id: Optional[int] = None
    aluno_id: Optional[int] = None


class ResourcesViewState(BaseViewState):
    sort: ResourceSort = ResourceSort()


class ExamsViewState(BaseViewState):
    sort: ExamSort = ExamSort()
    active_category: str = "new"
