"""
Schemas Pydantic dos registros simples: avisos, recursos, provas,
planos de aula e eventos do calendário.
"""

from typing import List, Literal, Optional

from pydantic import Field

from lumen.schemas.base import LumenModel


class Notice(LumenModel):
    """Aviso ou reunião do quadro de avisos."""
    id: int
    date: str
    notes: str = ""
    details: str = ""


class Resource(LumenModel):
    """Material didático (vídeo, Kahoot, slides...) ligado a uma página de livro."""
    id: int
    book: str = Field(default="", alias="livro")
    page: int = Field(default=0, alias="pagina")
    kind: str = Field(default="", alias="tipo")
    subject: str = Field(default="", alias="assunto")
    link: str = ""


class Exam(LumenModel):
    id: int
    category: str = "new"
    book: str = Field(default="", alias="livro")
    kind: str = Field(default="", alias="tipo")
    themes: str = Field(default="", alias="temas")
    written_link: str = Field(default="", alias="linkEscrita")
    oral_link: str = Field(default="", alias="linkOral")


class LessonPlan(LumenModel):
    """Planejamento da aula de um dia (ou registro de um dia sem aula)."""
    id: int
    date: str
    is_no_class_event: bool = Field(default=False, alias="isNoClassEvent")
    event_type: str = Field(default="", alias="eventType")
    topic: str = Field(default="", alias="tema")
    class_name: str = Field(default="", alias="turma")
    language: str = Field(default="", alias="linguagem")
    last_book: str = Field(default="", alias="livroOndeParou")
    last_content: str = Field(default="", alias="ondeParou")
    today_book: str = Field(default="", alias="livroAulaHoje")
    today_content: str = Field(default="", alias="aulaHoje")
    next_content: str = Field(default="", alias="aulaSeguinte")
    notes: str = Field(default="", alias="anotacoes")
    attendance_taken: bool = Field(default=False, alias="chamadaRealizada")
    present_ids: List[int] = Field(default_factory=list, alias="presentes")
    is_freelance_hourly: Optional[bool] = Field(default=None, alias="isFreelanceHorista")
    lesson_duration_hours: Optional[float] = Field(default=None, alias="duracaoAulaHoras")
    hourly_school: Optional[str] = Field(default=None, alias="escolaHorista")


class CalendarEvent(LumenModel):
    id: int
    date: str
    title: str
    type: Literal["feriado", "evento", "sem-aula", "lembrete"] = "evento"
    description: str = ""
