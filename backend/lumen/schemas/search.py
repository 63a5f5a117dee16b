"""
Schemas Pydantic dos resultados da pesquisa global.
"""

from typing import List, Literal

from pydantic import Field

from lumen.schemas.base import LumenModel
from lumen.schemas.board import Exam, LessonPlan, Notice, Resource
from lumen.schemas.classroom import Book, ClassGroup, Student
from lumen.schemas.private_lessons import PrivateStudent


class StudentHit(LumenModel):
    class_group_id: int = Field(alias="salaId")
    class_group_name: str = Field(alias="salaNome")
    student: Student = Field(alias="aluno")


class BookHit(LumenModel):
    class_group_id: int = Field(alias="salaId")
    class_group_name: str = Field(alias="salaNome")
    book: Book = Field(alias="livro")


class SearchResults(LumenModel):
    """
    Resultados agrupados por tipo de entidade, na ordem de varredura.
    status "type_more" indica consulta curta demais (nenhuma varredura feita).
    """
    status: Literal["ok", "type_more"] = "ok"
    query: str = ""
    students: List[StudentHit] = Field(default_factory=list, alias="alunos")
    class_groups: List[ClassGroup] = Field(default_factory=list, alias="salas")
    books: List[BookHit] = Field(default_factory=list, alias="livros")
    lesson_plans: List[LessonPlan] = Field(default_factory=list, alias="aulas")
    resources: List[Resource] = Field(default_factory=list, alias="recursos")
    exams: List[Exam] = Field(default_factory=list, alias="provas")
    notices: List[Notice] = Field(default_factory=list, alias="avisos")
    private_students: List[PrivateStudent] = Field(default_factory=list, alias="alunosParticulares")

    @property
    def is_empty(self) -> bool:
        return not any((
            self.students, self.class_groups, self.books, self.lesson_plans,
            self.resources, self.exams, self.notices, self.private_students,
        ))
