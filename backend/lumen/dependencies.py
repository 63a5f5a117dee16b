"""
Dependências FastAPI : componentes do núcleo criados no startup da API.
"""

from fastapi import Depends, Request

from lumen.services.mutation_service import MutationEngine
from lumen.services.search_service import SearchEngine
from lumen.services.view_state_service import ViewStateCoordinator
from lumen.store import EntityStore, get_store


def get_mutation_engine(request: Request) -> MutationEngine:
    # Compartilhado: guarda os itens marcados para remoção
    return request.app.state.mutation_engine


def get_search_engine(store: EntityStore = Depends(get_store)) -> SearchEngine:
    return SearchEngine(store)


def get_view_state(request: Request) -> ViewStateCoordinator:
    return request.app.state.view_state
