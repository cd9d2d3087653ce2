"""
Produtor da fila de jobs.

Ordem obrigatória: grava o registro QUEUED e só depois publica a
mensagem. Qualquer consumidor que receba a mensagem encontra o
registro correspondente.
"""

import logging
from typing import Optional

from src.core.reports.entities import ReportPeriod
from src.core.shared.exceptions import QueueNotConfiguredError

from .dtos import EnqueuedJobDTO
from .entities import (
    AsyncJobEntity,
    JobPayload,
    JobType,
    NotificationPayload,
    ReportPayload,
)
from .ports import JobRepository, QueueTransport

logger = logging.getLogger(__name__)


class JobQueueProducer:
    """
    Cria o registro do job e publica ``{jobId, type, payload}``.

    Args:
        job_repo: JobStore
        transport: Fila

    Example:
        producer = JobQueueProducer(job_repo, transport)
        producer.enqueue_notification("Server maintenance at 22h")
    """

    def __init__(self, job_repo: JobRepository, transport: QueueTransport):
        self.job_repo = job_repo
        self.transport = transport

    def enqueue(self, job_type: JobType, payload: JobPayload) -> EnqueuedJobDTO:
        """
        Enfileira um job.

        Returns:
            DTO com ``jobId`` e status QUEUED

        Raises:
            QueueNotConfiguredError: Fila indisponível (nenhum registro criado)
            ValidationError: Payload incompatível com o tipo
        """
        if not self.transport.is_configured():
            raise QueueNotConfiguredError()

        job = AsyncJobEntity.queue(job_type, payload)
        self.job_repo.add(job)

        try:
            self.transport.send(job.to_message())
        except Exception:
            logger.exception(f"[JOB] Publish failed for {job.job_id}; record stays QUEUED")
            raise

        logger.info(f"[JOB] Enqueued {job.job_type.value} job {job.job_id}")
        return EnqueuedJobDTO(job_id=job.job_id, status=job.status.value)

    def enqueue_report_export(self, agent_id: str, period: ReportPeriod) -> EnqueuedJobDTO:
        return self.enqueue(JobType.EXCEL_EXPORT, ReportPayload(agent_id=agent_id, period=period))

    def enqueue_report_email(self, agent_id: str, period: ReportPeriod) -> EnqueuedJobDTO:
        return self.enqueue(JobType.EMAIL_REPORT, ReportPayload(agent_id=agent_id, period=period))

    def enqueue_notification(
        self,
        content: str,
        receiver_id: Optional[str] = None,
        sender_id: str = "system",
    ) -> EnqueuedJobDTO:
        return self.enqueue(
            JobType.NOTIFICATION,
            NotificationPayload(content=content, receiver_id=receiver_id, sender_id=sender_id),
        )
