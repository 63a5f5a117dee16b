"""
Router dos estados de navegação por seção.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from lumen.dependencies import get_view_state
from lumen.services.view_state_service import Section, ViewStateCoordinator
from lumen.store import EntityStore, get_store

router = APIRouter(prefix="/api/v1/view-state", tags=["Navegação"])


@router.get("/{section}", summary="Estado atual de uma seção")
def get_section(
    section: Section,
    coordinator: ViewStateCoordinator = Depends(get_view_state),
    store: EntityStore = Depends(get_store),
):
    """Devolve o estado já conferido contra o armazenamento (ids excluídos voltam para a lista)."""
    return coordinator.resolve(section, store)


@router.patch("/{section}", summary="Mesclar um estado parcial")
def patch_section(
    section: Section,
    changes: Dict[str, Any] = Body(...),
    coordinator: ViewStateCoordinator = Depends(get_view_state),
):
    try:
        return coordinator.set_state(section, **changes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/{section}/sort/{key}", summary="Clique num cabeçalho de coluna")
def toggle_sort(section: Section, key: str, coordinator: ViewStateCoordinator = Depends(get_view_state)):
    try:
        return coordinator.toggle_sort(section, key)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
