"""
Pipeline genérico de exclusão, finalização e restauração.

A exclusão é despachada pelo tipo do item (ItemType). Para cada tipo existe
uma regra de cascata e um conjunto fixo de views a renderizar de novo; as
duas tabelas são verificadas na importação, então um tipo novo sem regra
ou sem views impede o módulo de carregar.

A remoção acontece em duas fases: mark_pending_removal (imediata, a interface
já pode marcar o item) e commit_removal (a mutação de fato, chamada por um
job agendado ou diretamente). Repetir a exclusão do mesmo item é seguro:
filtrar um id que já não existe não altera nada.
"""

import logging
import threading
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from lumen.schemas.classroom import (
    CLASS_ACTIVE,
    CLASS_FINALIZED,
    STATUS_ACTIVE,
    STATUS_EXCLUDED,
    ClassGroup,
    FinalizationRecord,
)
from lumen.schemas.mutation import (
    FinalizeRequest,
    ItemType,
    MutationOutcome,
    PendingDelete,
    ViewArea,
)
from lumen.store import EntityStore

logger = logging.getLogger(__name__)

REASON_MISSING_FIELDS = "missing_id_or_type"
REASON_MISSING_PARENT = "missing_parent_id"
REASON_OWNER_NOT_FOUND = "owner_not_found"
REASON_NOT_FOUND = "not_found"
REASON_ALREADY_FINALIZED = "already_finalized"
REASON_NOT_FINALIZED = "not_finalized"
REASON_NOT_EXCLUDED = "not_excluded"

# Tipos aninhados: precisam de parent_id para achar o dono
_NESTED_TYPES = frozenset({
    ItemType.BOOK,
    ItemType.STUDENT,
    ItemType.STUDENT_HARD_DELETE,
    ItemType.PRIVATE_LESSON,
})

REFRESH_TABLE: Dict[ItemType, FrozenSet[ViewArea]] = {
    ItemType.NOTICE: frozenset({ViewArea.NOTICES}),
    ItemType.RESOURCE: frozenset({ViewArea.RESOURCES}),
    ItemType.EXAM: frozenset({ViewArea.EXAMS}),
    ItemType.LESSON_PLAN: frozenset({ViewArea.DAILY_LESSON, ViewArea.ARCHIVED_LESSONS}),
    ItemType.CLASS_GROUP: frozenset({ViewArea.ROSTER, ViewArea.FINALIZED_CLASSES}),
    ItemType.CALENDAR_EVENT: frozenset({ViewArea.CALENDAR}),
    ItemType.BOOK: frozenset({ViewArea.ROSTER}),
    ItemType.STUDENT: frozenset({ViewArea.ROSTER}),
    ItemType.STUDENT_HARD_DELETE: frozenset({ViewArea.EXCLUDED_STUDENTS}),
    ItemType.PRIVATE_STUDENT: frozenset({ViewArea.EXTRA_LESSONS}),
    ItemType.PRIVATE_LESSON: frozenset({ViewArea.EXTRA_LESSONS}),
}


def _owner_group(store: EntityStore, item: PendingDelete) -> Optional[ClassGroup]:
    # Na view de um livro, a sala chega como grand_parent_id
    return store.find_class_group(item.parent_id) or store.find_class_group(item.grand_parent_id)


# --- Regras de cascata (retornam False quando o dono não foi encontrado) ---

def _delete_notice(store: EntityStore, item: PendingDelete) -> bool:
    store.replace_notices(a for a in store.notices if a.id != item.id)
    return True


def _delete_resource(store: EntityStore, item: PendingDelete) -> bool:
    store.replace_resources(r for r in store.resources if r.id != item.id)
    return True


def _delete_exam(store: EntityStore, item: PendingDelete) -> bool:
    store.replace_exams(p for p in store.exams if p.id != item.id)
    return True


def _delete_lesson_plan(store: EntityStore, item: PendingDelete) -> bool:
    store.replace_lesson_plans(a for a in store.lesson_plans if a.id != item.id)
    return True


def _delete_class_group(store: EntityStore, item: PendingDelete) -> bool:
    # Livros, alunos e progresso vão junto: estão contidos na sala
    store.replace_classes(s for s in store.classes if s.id != item.id)
    return True


def _delete_calendar_event(store: EntityStore, item: PendingDelete) -> bool:
    store.replace_calendar_events(e for e in store.calendar_events if e.id != item.id)
    return True


def _delete_book(store: EntityStore, item: PendingDelete) -> bool:
    group = _owner_group(store, item)
    if group is None:
        return False
    group.books = [b for b in group.books if b.id != item.id]
    # Nenhum Progress pode apontar para um livro que não existe mais na sala
    for student in group.students:
        student.progress = [p for p in student.progress if p.book_id != item.id]
    return True


def _soft_delete_student(store: EntityStore, item: PendingDelete) -> bool:
    group = _owner_group(store, item)
    student = group.find_student(item.id) if group else None
    if student is None:
        return False
    student.status = STATUS_EXCLUDED
    return True


def _hard_delete_student(store: EntityStore, item: PendingDelete) -> bool:
    group = _owner_group(store, item)
    if group is None:
        return False
    group.students = [a for a in group.students if a.id != item.id]
    return True


def _delete_private_student(store: EntityStore, item: PendingDelete) -> bool:
    store.replace_private_students(a for a in store.private_students if a.id != item.id)
    return True


def _delete_private_lesson(store: EntityStore, item: PendingDelete) -> bool:
    owner = store.find_private_student(item.parent_id)
    if owner is None:
        return False
    owner.lessons = [a for a in owner.lessons if a.id != item.id]
    return True


DELETE_HANDLERS: Dict[ItemType, Callable[[EntityStore, PendingDelete], bool]] = {
    ItemType.NOTICE: _delete_notice,
    ItemType.RESOURCE: _delete_resource,
    ItemType.EXAM: _delete_exam,
    ItemType.LESSON_PLAN: _delete_lesson_plan,
    ItemType.CLASS_GROUP: _delete_class_group,
    ItemType.CALENDAR_EVENT: _delete_calendar_event,
    ItemType.BOOK: _delete_book,
    ItemType.STUDENT: _soft_delete_student,
    ItemType.STUDENT_HARD_DELETE: _hard_delete_student,
    ItemType.PRIVATE_STUDENT: _delete_private_student,
    ItemType.PRIVATE_LESSON: _delete_private_lesson,
}


def _check_exhaustive() -> None:
    for name, table in (("DELETE_HANDLERS", DELETE_HANDLERS), ("REFRESH_TABLE", REFRESH_TABLE)):
        missing = set(ItemType) - set(table)
        if missing:
            raise RuntimeError(f"{name} sem entrada para : {sorted(t.value for t in missing)}")


_check_exhaustive()


def _rejected(item: PendingDelete, reason: str) -> MutationOutcome:
    return MutationOutcome(
        applied=False,
        item_type=item.type.value if item.type else None,
        item_id=item.id,
        reason=reason,
    )


def _validate(item: PendingDelete) -> Optional[str]:
    if not item.id or item.type is None:
        return REASON_MISSING_FIELDS
    if item.type in _NESTED_TYPES and item.parent_id is None and item.grand_parent_id is None:
        return REASON_MISSING_PARENT
    return None


class MutationEngine:
    def __init__(self, store: EntityStore):
        self.store = store
        self._pending: Dict[Tuple[ItemType, int], PendingDelete] = {}
        # commit_removal pode rodar na thread do scheduler
        self._lock = threading.RLock()

    # --- Exclusão ---

    def request_delete(self, item: PendingDelete) -> MutationOutcome:
        """Exclusão imediata: marca e confirma na mesma chamada."""
        self.mark_pending_removal(item)
        return self.commit_removal(item)

    def mark_pending_removal(self, item: PendingDelete) -> bool:
        """
        Primeira fase: o item continua no armazenamento mas já pode ser
        exibido como "saindo". Retorna False se a requisição é inválida.
        """
        if _validate(item) is not None:
            return False
        with self._lock:
            self._pending[(item.type, item.id)] = item
        return True

    def is_pending_removal(self, item_type: ItemType, item_id: int) -> bool:
        return (item_type, item_id) in self._pending

    def commit_removal(self, item: PendingDelete) -> MutationOutcome:
        """Segunda fase: aplica a regra de cascata do tipo e levanta a flag dirty."""
        reason = _validate(item)
        if reason is not None:
            logger.debug("Exclusão ignorada (%s) : %s", reason, item)
            return _rejected(item, reason)

        with self._lock:
            self._pending.pop((item.type, item.id), None)
            if not DELETE_HANDLERS[item.type](self.store, item):
                logger.debug("Exclusão ignorada : dono não encontrado : %s", item)
                return _rejected(item, REASON_OWNER_NOT_FOUND)
            self.store.mark_dirty()

        logger.info("Item excluído : %s %s", item.type.value, item.id)
        return MutationOutcome(
            applied=True,
            item_type=item.type.value,
            item_id=item.id,
            refresh=sorted(REFRESH_TABLE[item.type], key=lambda v: v.value),
        )

    # --- Finalização e restauração de salas ---

    def finalize(self, class_group_id: int, request: FinalizeRequest) -> MutationOutcome:
        """
        Arquiva uma sala ativa. Nada é apagado; uma sala já finalizada
        não passa de novo por aqui.
        """
        group = self.store.find_class_group(class_group_id)
        outcome = MutationOutcome(applied=False, item_type=ItemType.CLASS_GROUP.value, item_id=class_group_id)
        if group is None:
            outcome.reason = REASON_NOT_FOUND
            return outcome
        if group.status != CLASS_ACTIVE:
            outcome.reason = REASON_ALREADY_FINALIZED
            return outcome

        with self._lock:
            group.status = CLASS_FINALIZED
            group.finalization = FinalizationRecord(
                date=request.resolved_date(),
                reason=request.reason,
                details=request.details,
            )
            self.store.mark_dirty()
        logger.info("Sala %s finalizada (%s)", group.id, request.reason)
        outcome.applied = True
        outcome.refresh = [ViewArea.ROSTER]
        return outcome

    def restore_class_group(self, class_group_id: int) -> MutationOutcome:
        """Volta uma sala finalizada para ativa e descarta o registro de finalização."""
        group = self.store.find_class_group(class_group_id)
        outcome = MutationOutcome(applied=False, item_type=ItemType.CLASS_GROUP.value, item_id=class_group_id)
        if group is None:
            outcome.reason = REASON_NOT_FOUND
            return outcome
        if group.status != CLASS_FINALIZED:
            outcome.reason = REASON_NOT_FINALIZED
            return outcome

        with self._lock:
            group.status = CLASS_ACTIVE
            group.finalization = None
            self.store.mark_dirty()
        logger.info("Sala %s restaurada para ativa", group.id)
        outcome.applied = True
        outcome.refresh = [ViewArea.FINALIZED_CLASSES]
        return outcome

    def restore_student(self, class_group_id: int, student_id: int) -> MutationOutcome:
        """Desfaz o soft delete de um aluno. Alunos não excluídos ficam como estão."""
        student = self.store.find_student(class_group_id, student_id)
        outcome = MutationOutcome(applied=False, item_type=ItemType.STUDENT.value, item_id=student_id)
        if student is None:
            outcome.reason = REASON_NOT_FOUND
            return outcome
        if not student.is_excluded:
            outcome.reason = REASON_NOT_EXCLUDED
            return outcome

        with self._lock:
            student.status = STATUS_ACTIVE
            self.store.mark_dirty()
        logger.info("Aluno %s restaurado na sala %s", student_id, class_group_id)
        outcome.applied = True
        outcome.refresh = [ViewArea.EXCLUDED_STUDENTS]
        return outcome
