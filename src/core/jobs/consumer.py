"""
Consumidor da fila de jobs.

Loop sequencial: recebe um lote, processa mensagem por mensagem,
sem paralelismo interno. Vários processos podem rodar o mesmo loop;
o visibility timeout da fila é a única proteção entre eles, então
a entrega é at-least-once.

Retry por redelivery:
- sucesso → job COMPLETED e mensagem removida
- falha com tentativas < teto → job FAILED, mensagem NÃO removida
  (``release``: volta a ficar visível após o visibility timeout, ou
  é devolvida à fila em brokers sem esse conceito)
- falha com tentativas >= teto → job FAILED_PERMANENT, mensagem removida
- redelivery de job terminal (COMPLETED ou FAILED_PERMANENT) → descartada
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional

from src.core.shared.clock import Clock, utc_now
from src.core.shared.exceptions import DomainException, UnsupportedJobTypeError

from .entities import JobStatus, JobType, parse_payload
from .handlers import JobHandler
from .ports import JobRepository, QueueMessage, QueueTransport

logger = logging.getLogger(__name__)


def serialize_error(exc: Exception) -> str:
    """Texto do erro gravado no job (nunca vazio)."""
    if isinstance(exc, DomainException):
        return str(exc)
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


class JobConsumer:
    """
    Long-poll da fila e despacho para handlers por tipo.

    Args:
        job_repo: JobStore
        transport: Fila
        handlers: Mapa JobType → handler
        max_attempts: Teto de tentativas antes de FAILED_PERMANENT
        batch_size: Máximo de mensagens por receive
        wait_seconds: Espera do long-poll
        error_sleep_seconds: Pausa após erro no próprio loop
        clock: Fonte do "agora"
        sleep: Função de pausa (injetável nos testes)
    """

    def __init__(
        self,
        job_repo: JobRepository,
        transport: QueueTransport,
        handlers: Dict[JobType, JobHandler],
        max_attempts: int = 5,
        batch_size: int = 5,
        wait_seconds: float = 20,
        error_sleep_seconds: float = 2,
        clock: Clock = utc_now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.job_repo = job_repo
        self.transport = transport
        self.handlers = handlers
        self.max_attempts = max(1, max_attempts)
        self.batch_size = batch_size
        self.wait_seconds = wait_seconds
        self.error_sleep_seconds = error_sleep_seconds
        self.clock = clock
        self.sleep = sleep

    # =========================================================================
    # LOOP
    # =========================================================================

    def run_forever(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Roda até ``stop_event`` ser sinalizado.

        Erros do próprio loop (ex.: broker fora do ar) são logados e o
        loop dorme ``error_sleep_seconds`` antes de tentar de novo.
        """
        stop_event = stop_event or threading.Event()
        logger.info(
            f"[WORKER] Started (batch={self.batch_size}, wait={self.wait_seconds}s, "
            f"max_attempts={self.max_attempts})"
        )
        while not stop_event.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("[WORKER] Poll loop error")
                self.sleep(self.error_sleep_seconds)
        logger.info("[WORKER] Stopped")

    def poll_once(self) -> int:
        """
        Recebe um lote e processa cada mensagem em sequência.

        Returns:
            Número de mensagens recebidas
        """
        messages = self.transport.receive(self.batch_size, self.wait_seconds)
        for message in messages:
            self.process_message(message)
        return len(messages)

    # =========================================================================
    # MENSAGEM
    # =========================================================================

    def process_message(self, message: QueueMessage) -> Optional[JobStatus]:
        """
        Processa uma mensagem.

        Returns:
            Status final do job, ou None se a mensagem foi descartada
        """
        body = message.body
        job_id = body.get("jobId") if isinstance(body, dict) else None
        if not job_id:
            logger.error(f"[WORKER] Discarding malformed message: {body!r}")
            self.transport.delete(message)
            return None

        job = self.job_repo.get_by_id(job_id)
        if job is None:
            logger.warning(f"[WORKER] Job {job_id} not found, skipping")
            self.transport.delete(message)
            return None

        if job.is_terminal:
            logger.warning(f"[WORKER] Job {job_id} is {job.status.value}, dropping redelivery")
            self.transport.delete(message)
            return job.status

        job.start_attempt(self.clock())
        self.job_repo.save(job)

        try:
            result = self._dispatch(body)
            job.complete(result, self.clock())
        except Exception as exc:
            status = job.fail(serialize_error(exc), self.max_attempts, self.clock())
            self.job_repo.save(job)
            if status == JobStatus.FAILED_PERMANENT:
                logger.error(
                    f"[WORKER] Job {job_id} failed permanently after {job.attempts} "
                    f"attempt(s): {job.error}"
                )
                self.transport.delete(message)
            else:
                logger.warning(
                    f"[WORKER] Job {job_id} failed (attempt {job.attempts}/"
                    f"{self.max_attempts}): {job.error}"
                )
                self.transport.release(message)
            return status

        self.job_repo.save(job)
        self.transport.delete(message)
        logger.info(f"[WORKER] Job {job_id} completed ({job.job_type.value})")
        return job.status

    def _dispatch(self, body: dict):
        raw_type = body.get("type")
        try:
            job_type = JobType.from_string(raw_type)
        except ValueError:
            raise UnsupportedJobTypeError(str(raw_type))

        handler = self.handlers.get(job_type)
        if handler is None:
            raise UnsupportedJobTypeError(job_type.value)

        payload = parse_payload(job_type, body.get("payload"))
        return handler(payload)
