"""
Schemas Pydantic das salas, livros, alunos e progresso.
"""

from typing import List, Literal, Optional

from pydantic import Field, field_validator

from lumen.schemas.base import LumenModel

CLASS_ACTIVE = "ativa"
CLASS_FINALIZED = "finalizada"

STATUS_ACTIVE = "Ativo"
STATUS_LEVELING = "Nivelamento"
STATUS_INTERNAL_TRANSFER = "Transferido (interno)"
STATUS_EXCLUDED = "Excluído"

# Status que contam como "turma ativa" nas views de chamada e notas
ACTIVE_STUDENT_STATUSES = (STATUS_ACTIVE, STATUS_LEVELING, STATUS_INTERNAL_TRANSFER)

# Status em que o aluno começa num livro que não é o primeiro da sala
START_BOOK_STATUSES = (STATUS_LEVELING, STATUS_INTERNAL_TRANSFER)

GRADE_FIELDS = ("nota_written", "nota_oral", "nota_participation")


class Progress(LumenModel):
    """Notas e frequência de um aluno num livro da sua sala."""
    book_id: int = Field(alias="livroId")
    nota_written: Optional[float] = Field(default=None, alias="notaWritten")
    nota_oral: Optional[float] = Field(default=None, alias="notaOral")
    nota_participation: Optional[float] = Field(default=None, alias="notaParticipation")
    manual_lessons_given: Optional[int] = Field(default=None, alias="manualAulasDadas")
    manual_presences: Optional[int] = Field(default=None, alias="manualPresencas")
    historical_lessons_given: Optional[int] = Field(default=None, alias="historicoAulasDadas")
    historical_presences: Optional[int] = Field(default=None, alias="historicoPresencas")


class Student(LumenModel):
    id: int
    code: str = Field(default="", alias="ctr")
    full_name: str = Field(alias="nomeCompleto")
    status: str = Field(default=STATUS_ACTIVE, alias="statusMatricula")
    transfer_origin: Optional[str] = Field(default=None, alias="origemTransferencia")
    progress: List[Progress] = Field(default_factory=list, alias="progresso")
    number: Optional[int] = Field(default=None, alias="numero")
    start_book_id: Optional[int] = Field(default=None, alias="livroInicioId")

    @property
    def is_excluded(self) -> bool:
        return self.status == STATUS_EXCLUDED

    def progress_for(self, book_id: int) -> Optional[Progress]:
        return next((p for p in self.progress if p.book_id == book_id), None)


class Book(LumenModel):
    id: int
    name: str = Field(alias="nome")
    start_month: str = Field(default="", alias="mesInicio")
    expected_end_month: str = Field(default="", alias="mesFimPrevisto")


class FinalizationRecord(LumenModel):
    """Registro de arquivamento de uma sala."""
    date: str = Field(alias="data")
    reason: str = Field(alias="motivo")
    details: str = Field(default="", alias="detalhes")


class ClassGroup(LumenModel):
    id: int
    name: str = Field(alias="nome")
    start_date: str = Field(default="", alias="dataInicio")
    expected_end_date: str = Field(default="", alias="dataFimPrevista")
    weekdays: List[str] = Field(default_factory=list, alias="diasSemana")
    status: Literal["ativa", "finalizada"] = CLASS_ACTIVE
    books: List[Book] = Field(default_factory=list, alias="livros")
    students: List[Student] = Field(default_factory=list, alias="alunos")
    finalization: Optional[FinalizationRecord] = Field(default=None, alias="finalizacao")
    kind: Literal["Regular", "Horista"] = Field(default="Regular", alias="tipo")
    hourly_school: Optional[str] = Field(default=None, alias="escolaHorista")
    lesson_duration_hours: Optional[float] = Field(default=None, alias="duracaoAulaHoras")
    hourly_book_start: Optional[Literal["inicio", "meio"]] = Field(default=None, alias="inicioLivroHorista")

    @property
    def is_active(self) -> bool:
        return self.status == CLASS_ACTIVE

    def find_book(self, book_id: Optional[int]) -> Optional[Book]:
        return next((b for b in self.books if b.id == book_id), None)

    def find_student(self, student_id: Optional[int]) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)


# --- Corpos de requisição (criação / edição) ---

class ClassGroupCreate(LumenModel):
    name: str = Field(alias="nome")
    start_date: str = Field(default="", alias="dataInicio")
    expected_end_date: str = Field(default="", alias="dataFimPrevista")
    weekdays: List[str] = Field(default_factory=list, alias="diasSemana")
    kind: Literal["Regular", "Horista"] = Field(default="Regular", alias="tipo")
    hourly_school: Optional[str] = Field(default=None, alias="escolaHorista")
    lesson_duration_hours: Optional[float] = Field(default=None, alias="duracaoAulaHoras")
    hourly_book_start: Optional[Literal["inicio", "meio"]] = Field(default=None, alias="inicioLivroHorista")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("O nome da sala não pode ficar vazio.")
        return v.strip()


class ClassGroupUpdate(LumenModel):
    name: Optional[str] = Field(default=None, alias="nome")
    start_date: Optional[str] = Field(default=None, alias="dataInicio")
    expected_end_date: Optional[str] = Field(default=None, alias="dataFimPrevista")
    weekdays: Optional[List[str]] = Field(default=None, alias="diasSemana")
    kind: Optional[Literal["Regular", "Horista"]] = Field(default=None, alias="tipo")
    hourly_school: Optional[str] = Field(default=None, alias="escolaHorista")
    lesson_duration_hours: Optional[float] = Field(default=None, alias="duracaoAulaHoras")
    hourly_book_start: Optional[Literal["inicio", "meio"]] = Field(default=None, alias="inicioLivroHorista")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("O nome da sala não pode ficar vazio.")
        return v.strip() if v else v


class BookCreate(LumenModel):
    name: str = Field(alias="nome")
    start_month: str = Field(default="", alias="mesInicio")
    expected_end_month: str = Field(default="", alias="mesFimPrevisto")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("O nome do livro não pode ficar vazio.")
        return v.strip()


class StudentCreate(LumenModel):
    """
    Dados de cadastro/edição de um aluno.
    Os campos historico_* descrevem aulas e notas anteriores à entrada na sala
    (transferências e nivelamentos) e viram um Progress no livro de início.
    """
    code: str = Field(default="", alias="ctr")
    full_name: str = Field(alias="nomeCompleto")
    status: str = Field(default=STATUS_ACTIVE, alias="statusMatricula")
    transfer_origin: Optional[str] = Field(default=None, alias="origemTransferencia")
    start_book_id: Optional[int] = Field(default=None, alias="livroInicioId")
    historical_lessons_given: Optional[int] = Field(default=None, alias="historicoAulasDadas")
    historical_presences: Optional[int] = Field(default=None, alias="historicoPresencas")
    historical_written: Optional[float] = Field(default=None, alias="historicoWritten")
    historical_oral: Optional[float] = Field(default=None, alias="historicoOral")
    historical_participation: Optional[float] = Field(default=None, alias="historicoParticipation")

    @field_validator("full_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("O nome do aluno não pode ficar vazio.")
        return v.strip()

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        return v.strip()

    @property
    def has_history(self) -> bool:
        return any(
            v is not None
            for v in (
                self.historical_lessons_given,
                self.historical_presences,
                self.historical_written,
                self.historical_oral,
                self.historical_participation,
            )
        )
