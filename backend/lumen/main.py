"""
Ponto de entrada da API do núcleo Lumen.
Inicialização : uvicorn lumen.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lumen.routers import board, classes, deletions, private_students, search, teacher_settings, view_state
from lumen.scheduler import start_scheduler, stop_scheduler
from lumen.services.mutation_service import MutationEngine
from lumen.services.view_state_service import ViewStateCoordinator
from lumen.store import EntityStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cria o armazenamento e os componentes do núcleo; inicia e para o scheduler."""
    store = EntityStore.from_snapshot(None)
    app.state.store = store
    app.state.mutation_engine = MutationEngine(store)
    app.state.view_state = ViewStateCoordinator()
    app.state.scheduler = start_scheduler()
    yield
    stop_scheduler(app.state.scheduler)


app = FastAPI(
    title="Lumen Core API",
    description="Núcleo de dados do professor: salas, alunos, exclusões em cascata e pesquisa",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS : libera as portas de localhost em desenvolvimento
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(classes.router)
app.include_router(deletions.router)
app.include_router(search.router)
app.include_router(view_state.router)
app.include_router(board.router)
app.include_router(private_students.router)
app.include_router(teacher_settings.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepta as exceções não tratadas para que a resposta 500 passe pelo
    CORSMiddleware (sem isso o navegador vê apenas "Failed to fetch").
    """
    logger.error("Exceção não tratada : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Ocorreu um erro interno."},
    )


@app.get("/api/health", tags=["Saúde"])
def health_check():
    """Verifica se a API está no ar."""
    return {"status": "ok", "service": "Lumen Core API", "version": "0.1.0"}
