"""
Pesquisa global sobre todas as coleções do armazenamento.

Varredura linear, um predicado por tipo de entidade (substring sem
diferenciar maiúsculas), resultados agrupados por tipo na ordem em que
foram encontrados. Não há ranking: a interface mostra uma seção por tipo.
"""

import logging
import re

from lumen.config import settings
from lumen.schemas.search import BookHit, SearchResults, StudentHit
from lumen.store import EntityStore

logger = logging.getLogger(__name__)

HIGHLIGHT_TEMPLATE = '<em class="search-result-highlight">{}</em>'


def normalize_query(raw: str) -> str:
    return (raw or "").strip().lower()


def _contains(query: str, *fields) -> bool:
    return any(query in (field or "").lower() for field in fields)


def highlight(text: str, query: str, template: str = HIGHLIGHT_TEMPLATE) -> str:
    """
    Envolve cada ocorrência literal de query em text (sem diferenciar
    maiúsculas). Metacaracteres de regex na consulta são tratados como texto.
    """
    if not text or not query:
        return text
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda m: template.format(m.group(0)), text)


class SearchEngine:
    def __init__(self, store: EntityStore, min_query_length: int = settings.SEARCH_MIN_QUERY_LENGTH):
        self.store = store
        self.min_query_length = min_query_length

    def search(self, query: str) -> SearchResults:
        query = normalize_query(query)
        if len(query) < self.min_query_length:
            logger.debug("Pesquisa curta demais, nada varrido : %r", query)
            return SearchResults(status="type_more", query=query)

        results = SearchResults(query=query)
        for group in self.store.classes:
            if _contains(query, group.name):
                results.class_groups.append(group)
            for book in group.books:
                if _contains(query, book.name):
                    results.books.append(BookHit(class_group_id=group.id, class_group_name=group.name, book=book))
            for student in group.students:
                if _contains(query, student.full_name, student.code):
                    results.students.append(
                        StudentHit(class_group_id=group.id, class_group_name=group.name, student=student)
                    )

        results.lesson_plans.extend(
            a for a in self.store.lesson_plans if _contains(query, a.topic, a.today_content)
        )
        results.resources.extend(
            r for r in self.store.resources if _contains(query, r.subject, r.book)
        )
        results.exams.extend(
            p for p in self.store.exams if _contains(query, p.book, p.themes)
        )
        results.notices.extend(
            a for a in self.store.notices if _contains(query, a.notes, a.details)
        )
        results.private_students.extend(
            a for a in self.store.private_students if _contains(query, a.name)
        )
        return results
