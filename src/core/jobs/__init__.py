"""
Domínio de Jobs Assíncronos.

Trabalho demorado com efeitos colaterais (planilha, e-mail,
notificação) roda fora do request:
- JobQueueProducer: grava o registro e publica a mensagem
- JobConsumer: long-poll, despacho por tipo, retry por redelivery
  com teto de tentativas
"""

from .entities import (
    AsyncJobEntity,
    EmailResult,
    ExportResult,
    JobStatus,
    JobType,
    NotificationPayload,
    NotificationResult,
    ReportPayload,
)
from .ports import JobRepository, QueueMessage, QueueTransport
from .producer import JobQueueProducer
from .consumer import JobConsumer
from .handlers import build_handler_registry

__all__ = [
    "AsyncJobEntity",
    "EmailResult",
    "ExportResult",
    "JobStatus",
    "JobType",
    "NotificationPayload",
    "NotificationResult",
    "ReportPayload",
    "JobRepository",
    "QueueMessage",
    "QueueTransport",
    "JobQueueProducer",
    "JobConsumer",
    "build_handler_registry",
]
