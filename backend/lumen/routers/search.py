"""
Router da pesquisa global.
"""

from fastapi import APIRouter, Depends, Query

from lumen.dependencies import get_search_engine
from lumen.schemas.search import SearchResults
from lumen.services.search_service import SearchEngine

router = APIRouter(prefix="/api/v1/search", tags=["Pesquisa"])


@router.get("", response_model=SearchResults, summary="Pesquisar em todas as coleções")
def search(q: str = Query(default=""), engine: SearchEngine = Depends(get_search_engine)):
    """
    Resultados agrupados por tipo. Consultas com menos de 2 caracteres
    devolvem status "type_more". O debounce fica a cargo do cliente.
    """
    return engine.search(q)
