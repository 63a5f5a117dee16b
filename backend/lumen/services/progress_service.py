"""
Saneamento dos registros de progresso carregados do armazenamento.

Dados antigos podem trazer, para o mesmo aluno, vários Progress do "mesmo"
livro (ids diferentes após cópias e transferências entre salas). Ao carregar,
as entradas são agrupadas pelo nome normalizado do livro e fundidas numa só.
"""

import logging
import re
import unicodedata
from typing import Dict, List, Optional

from lumen.schemas.classroom import GRADE_FIELDS, ClassGroup, Progress

logger = logging.getLogger(__name__)

_COUNTER_FIELDS = (
    "manual_lessons_given",
    "manual_presences",
    "historical_lessons_given",
    "historical_presences",
)


def normalize_text(value: Optional[str]) -> str:
    """Minúsculas, sem acentos, sem pontuação e com espaços simples."""
    if not value:
        return ""
    text = unicodedata.normalize("NFD", value.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"[^\w\s]|_", "", text)
    return re.sub(r"\s+", " ", text).strip()


def _merge_entries(target: Progress, entries: List[Progress]) -> Progress:
    merged = target.model_copy()
    for entry in entries:
        if entry is target:
            continue
        for field in GRADE_FIELDS:
            if getattr(merged, field) is None and getattr(entry, field) is not None:
                setattr(merged, field, getattr(entry, field))
        for field in _COUNTER_FIELDS:
            best = max(getattr(merged, field) or 0, getattr(entry, field) or 0)
            setattr(merged, field, best or None)
    return merged


def sanitize_progress(classes: List[ClassGroup]) -> int:
    """
    Funde os Progress duplicados de cada aluno, em todas as salas.
    Retorna o número de entradas eliminadas.
    """
    book_names: Dict[int, str] = {}
    for group in classes:
        for book in group.books:
            book_names[book.id] = book.name

    removed = 0
    for group in classes:
        current_book_ids = {b.id for b in group.books}
        for student in group.students:
            by_name: Dict[str, List[Progress]] = {}
            for entry in student.progress:
                name = book_names.get(entry.book_id)
                key = normalize_text(name) if name is not None else f"orphaned_book_{entry.book_id}"
                by_name.setdefault(key, []).append(entry)

            sanitized: List[Progress] = []
            for entries in by_name.values():
                if len(entries) == 1:
                    sanitized.append(entries[0])
                    continue
                target = next((e for e in entries if e.book_id in current_book_ids), entries[-1])
                sanitized.append(_merge_entries(target, entries))

            if len(sanitized) != len(student.progress):
                removed += len(student.progress) - len(sanitized)
                logger.warning(
                    "Progresso duplicado fundido : aluno %s (sala %s) : %d -> %d entradas",
                    student.id, group.id, len(student.progress), len(sanitized),
                )
            student.progress = sanitized
    return removed
