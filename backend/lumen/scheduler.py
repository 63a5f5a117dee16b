"""
Tarefas agendadas com APScheduler: pesquisa com debounce e remoção adiada.

Cada tarefa usa um id estável e replace_existing=True, então agendar de novo
cancela a anterior (cancelar-e-reagendar). Os serviços do núcleo não
dependem de tempo: os testes chamam os jobs diretamente.
"""

import itertools
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

from lumen.config import settings
from lumen.schemas.mutation import MutationOutcome, PendingDelete
from lumen.schemas.search import SearchResults
from lumen.services.mutation_service import MutationEngine
from lumen.services.search_service import SearchEngine, normalize_query

logger = logging.getLogger(__name__)

SEARCH_JOB_PREFIX = "search_debounce"

_debouncer_ids = itertools.count(1)


def _run_at(delay_ms: int) -> datetime:
    return datetime.now() + timedelta(milliseconds=delay_ms)


class SearchDebouncer:
    """
    Liga a digitação no campo de pesquisa ao SearchEngine.
    Só a última consulta de uma rajada de teclas chega a ser executada.
    """

    def __init__(
        self,
        scheduler: BackgroundScheduler,
        engine: SearchEngine,
        on_results: Callable[[SearchResults], Any],
        delay_ms: int = settings.SEARCH_DEBOUNCE_MS,
    ):
        self.scheduler = scheduler
        self.engine = engine
        self.on_results = on_results
        self.delay_ms = delay_ms
        self.job_id = f"{SEARCH_JOB_PREFIX}_{next(_debouncer_ids)}"

    def submit(self, raw_query: str) -> None:
        query = normalize_query(raw_query)
        if len(query) < self.engine.min_query_length:
            # Consulta curta: resposta imediata, sem varredura
            self.cancel()
            self.on_results(SearchResults(status="type_more", query=query))
            return
        self.scheduler.add_job(
            self.run,
            trigger="date",
            run_date=_run_at(self.delay_ms),
            args=[query],
            id=self.job_id,
            replace_existing=True,
        )

    def run(self, query: str) -> SearchResults:
        results = self.engine.search(query)
        self.on_results(results)
        return results

    def cancel(self) -> None:
        try:
            self.scheduler.remove_job(self.job_id)
        except JobLookupError:
            # Nada pendente, ou o job acabou de ser executado
            pass


def removal_job_id(item: PendingDelete) -> str:
    return f"removal_{item.type.value if item.type else 'none'}_{item.id}"


def schedule_removal(
    scheduler: BackgroundScheduler,
    engine: MutationEngine,
    item: PendingDelete,
    on_done: Optional[Callable[[MutationOutcome], Any]] = None,
    delay_ms: int = settings.REMOVAL_DELAY_MS,
) -> bool:
    """
    Marca o item como pendente e agenda a remoção de fato após delay_ms.
    Um segundo pedido para o mesmo item no intervalo substitui o job.
    Retorna False (nada agendado) se a requisição é inválida.
    """
    if not engine.mark_pending_removal(item):
        logger.debug("Remoção não agendada, requisição inválida : %s", item)
        return False

    def _commit() -> MutationOutcome:
        outcome = engine.commit_removal(item)
        if on_done is not None:
            on_done(outcome)
        return outcome

    scheduler.add_job(
        _commit,
        trigger="date",
        run_date=_run_at(delay_ms),
        id=removal_job_id(item),
        replace_existing=True,
    )
    return True


def start_scheduler() -> BackgroundScheduler:
    """Cria e inicia um planificador em segundo plano (chamado no startup da API)."""
    scheduler = BackgroundScheduler()
    scheduler.start()
    logger.info("Scheduler iniciado.")
    return scheduler


def stop_scheduler(scheduler: BackgroundScheduler) -> None:
    """Para o planificador (chamado no encerramento da API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler parado.")
