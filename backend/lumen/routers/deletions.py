"""
Router da exclusão genérica (chamado após a confirmação do usuário).
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from lumen.dependencies import get_mutation_engine
from lumen.schemas.mutation import MutationOutcome, PendingDelete
from lumen.scheduler import schedule_removal
from lumen.services import mutation_service
from lumen.services.mutation_service import MutationEngine

router = APIRouter(prefix="/api/v1/deletions", tags=["Exclusões"])

_CALLER_ERRORS = (mutation_service.REASON_MISSING_FIELDS, mutation_service.REASON_MISSING_PARENT)


@router.post("", response_model=MutationOutcome, summary="Excluir um item")
def delete_item(item: PendingDelete, engine: MutationEngine = Depends(get_mutation_engine)):
    """
    Aplica a regra de cascata do tipo e devolve as views a renderizar de novo.
    Repetir o mesmo pedido é seguro.
    """
    outcome = engine.request_delete(item)
    if outcome.reason in _CALLER_ERRORS:
        raise HTTPException(status_code=400, detail="Requisição de exclusão incompleta.")
    if outcome.reason == mutation_service.REASON_OWNER_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Item ou dono não encontrado.")
    return outcome


@router.post("/deferred", status_code=202, summary="Agendar a exclusão de um item")
def schedule_delete(
    item: PendingDelete,
    request: Request,
    engine: MutationEngine = Depends(get_mutation_engine),
):
    """Marca o item como pendente; a remoção acontece após o intervalo de animação."""
    if not schedule_removal(request.app.state.scheduler, engine, item):
        raise HTTPException(status_code=400, detail="Requisição de exclusão incompleta.")
    return {"scheduled": True, "id": item.id, "type": item.type.value}
