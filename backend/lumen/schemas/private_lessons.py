"""
Schemas Pydantic das aulas particulares (aulas extras).
"""

from typing import List, Optional

from pydantic import Field, field_validator

from lumen.schemas.base import LumenModel


class PrivateLesson(LumenModel):
    id: int
    date: str = Field(alias="data")
    book: Optional[str] = Field(default=None, alias="livro")
    themes: str = Field(default="", alias="temas")
    leftover: Optional[str] = Field(default=None, alias="sobras")
    notes: Optional[str] = Field(default=None, alias="observacoes")


class PrivateStudent(LumenModel):
    id: int
    name: str = Field(alias="nome")
    linked_student_id: Optional[int] = Field(default=None, alias="alunoMatriculadoId")
    lessons: List[PrivateLesson] = Field(default_factory=list, alias="aulas")

    def find_lesson(self, lesson_id: Optional[int]) -> Optional[PrivateLesson]:
        return next((a for a in self.lessons if a.id == lesson_id), None)


class PrivateStudentCreate(LumenModel):
    name: str = Field(default="", alias="nome")
    linked_student_id: Optional[int] = Field(default=None, alias="alunoMatriculadoId")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class PrivateLessonCreate(LumenModel):
    date: str = Field(alias="data")
    book: Optional[str] = Field(default=None, alias="livro")
    themes: str = Field(default="", alias="temas")
    leftover: Optional[str] = Field(default=None, alias="sobras")
    notes: Optional[str] = Field(default=None, alias="observacoes")
