"""
Entidades do Domínio de Jobs Assíncronos.

Entidades:
- AsyncJobEntity: Registro durável de um job e do seu desfecho
- JobType / JobStatus: Enums do ciclo de vida
- Payloads e resultados tipados por ``JobType`` (união etiquetada)

Ciclo de vida:
    QUEUED → PROCESSING → COMPLETED
                 │
                 ├→ FAILED → (redelivery) → PROCESSING ...
                 └→ FAILED_PERMANENT (teto de tentativas atingido)

Regras:
- ``result`` só existe em COMPLETED
- ``error`` só existe em FAILED/FAILED_PERMANENT
- ``attempts`` nunca diminui; +1 por tentativa de processamento
- COMPLETED e FAILED_PERMANENT são terminais: redelivery não reprocessa
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union
import uuid

from src.core.reports.entities import ReportPeriod
from src.core.shared.clock import utc_now
from src.core.shared.exceptions import ValidationError


class JobType(Enum):
    EXCEL_EXPORT = "EXCEL_EXPORT"
    EMAIL_REPORT = "EMAIL_REPORT"
    NOTIFICATION = "NOTIFICATION"

    @classmethod
    def from_string(cls, value: str) -> "JobType":
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid job type: {value}")


class JobStatus(Enum):
    QUEUED = "QUEUED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    FAILED_PERMANENT = "FAILED_PERMANENT"

    @classmethod
    def from_string(cls, value: str) -> "JobStatus":
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid job status: {value}")


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED_PERMANENT})


# =============================================================================
# PAYLOADS (entrada dos handlers)
# =============================================================================

@dataclass(frozen=True)
class ReportPayload:
    """Entrada de EXCEL_EXPORT e EMAIL_REPORT."""

    agent_id: str
    period: ReportPeriod = ReportPeriod.WEEKLY

    def to_dict(self) -> dict:
        return {"agentId": self.agent_id, "period": self.period.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportPayload":
        agent_id = data.get("agentId")
        if not agent_id:
            raise ValidationError("agentId is required", field="agentId")
        try:
            period = ReportPeriod.from_string(data.get("period") or "weekly")
        except ValueError as e:
            raise ValidationError(str(e), field="period")
        return cls(agent_id=str(agent_id), period=period)


@dataclass(frozen=True)
class NotificationPayload:
    """Entrada de NOTIFICATION. ``receiver_id`` None = broadcast."""

    content: str
    receiver_id: Optional[str] = None
    sender_id: str = "system"

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "receiverId": self.receiver_id,
            "senderId": self.sender_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationPayload":
        content = data.get("content")
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("content is required", field="content")
        return cls(
            content=content.strip(),
            receiver_id=data.get("receiverId") or None,
            sender_id=data.get("senderId") or "system",
        )


JobPayload = Union[ReportPayload, NotificationPayload]


# =============================================================================
# RESULTADOS (saída dos handlers)
# =============================================================================

@dataclass(frozen=True)
class ExportResult:
    download_url: str
    file_name: str
    agent_id: str
    period: str

    def to_dict(self) -> dict:
        return {
            "downloadUrl": self.download_url,
            "fileName": self.file_name,
            "agentId": self.agent_id,
            "period": self.period,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportResult":
        return cls(
            download_url=data["downloadUrl"],
            file_name=data["fileName"],
            agent_id=data["agentId"],
            period=data["period"],
        )


@dataclass(frozen=True)
class EmailResult:
    sent_to: str
    agent_id: str
    period: str

    def to_dict(self) -> dict:
        return {"sentTo": self.sent_to, "agentId": self.agent_id, "period": self.period}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmailResult":
        return cls(sent_to=data["sentTo"], agent_id=data["agentId"], period=data["period"])


@dataclass(frozen=True)
class NotificationResult:
    message_id: str

    def to_dict(self) -> dict:
        return {"messageId": self.message_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationResult":
        return cls(message_id=data["messageId"])


JobResult = Union[ExportResult, EmailResult, NotificationResult]


# Tipo do job → (classe do payload, classe do resultado)
JOB_SHAPES = {
    JobType.EXCEL_EXPORT: (ReportPayload, ExportResult),
    JobType.EMAIL_REPORT: (ReportPayload, EmailResult),
    JobType.NOTIFICATION: (NotificationPayload, NotificationResult),
}


def parse_payload(job_type: JobType, data: Optional[Dict[str, Any]]) -> JobPayload:
    """
    Converte o dict JSON no payload tipado do ``job_type``.

    Raises:
        ValidationError: Se o dict não tiver o formato esperado
    """
    if not isinstance(data, dict):
        raise ValidationError("payload must be an object", field="payload")
    payload_cls, _ = JOB_SHAPES[job_type]
    return payload_cls.from_dict(data)


def parse_result(job_type: JobType, data: Optional[Dict[str, Any]]) -> Optional[JobResult]:
    if not data:
        return None
    _, result_cls = JOB_SHAPES[job_type]
    return result_cls.from_dict(data)


@dataclass
class AsyncJobEntity:
    """
    Entidade de Domínio: AsyncJob.

    Criada pelo JobQueueProducer (QUEUED) e alterada somente pelo
    JobConsumer. Nunca é removida.

    Attributes:
        job_id: Identificador único (UUID)
        job_type: Tipo do job (etiqueta da união)
        status: Estado atual
        payload: Entrada tipada do handler
        result: Saída tipada (só em COMPLETED)
        error: Erro serializado (só em FAILED*)
        attempts: Tentativas de processamento
    """

    job_type: JobType
    payload: JobPayload
    job_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: JobStatus = JobStatus.QUEUED
    result: Optional[JobResult] = None
    error: Optional[str] = None
    attempts: int = 0
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def queue(cls, job_type: JobType, payload: JobPayload) -> "AsyncJobEntity":
        """
        Factory: novo job em QUEUED.

        Raises:
            ValidationError: Se o payload não corresponde ao tipo
        """
        payload_cls, _ = JOB_SHAPES[job_type]
        if not isinstance(payload, payload_cls):
            raise ValidationError(
                f"{job_type.value} requires a {payload_cls.__name__}", field="payload"
            )
        return cls(job_type=job_type, payload=payload)

    @property
    def is_terminal(self) -> bool:
        """Redeliveries de jobs terminais são descartadas pelo consumer."""
        return self.status in TERMINAL_STATUSES

    def start_attempt(self, now: datetime) -> None:
        """Marca PROCESSING, incrementa tentativas e limpa erro anterior."""
        self.status = JobStatus.PROCESSING
        self.attempts += 1
        self.error = None
        self.result = None
        self.updated_at = now

    def complete(self, result: JobResult, now: datetime) -> None:
        _, result_cls = JOB_SHAPES[self.job_type]
        if not isinstance(result, result_cls):
            raise TypeError(
                f"{self.job_type.value} handler must return {result_cls.__name__}"
            )
        self.status = JobStatus.COMPLETED
        self.result = result
        self.error = None
        self.updated_at = now

    def fail(self, error: str, max_attempts: int, now: datetime) -> JobStatus:
        """
        Registra falha.

        Returns:
            FAILED se ainda cabe nova tentativa, FAILED_PERMANENT caso contrário
        """
        self.status = (
            JobStatus.FAILED_PERMANENT
            if self.attempts >= max_attempts
            else JobStatus.FAILED
        )
        self.error = error or "Unknown error"
        self.result = None
        self.updated_at = now
        return self.status

    def to_status_dict(self) -> dict:
        """Formato da resposta de consulta de status."""
        return {
            "jobId": self.job_id,
            "type": self.job_type.value,
            "status": self.status.value,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "attempts": self.attempts,
            "updatedAt": self.updated_at.isoformat(),
        }

    def to_message(self) -> dict:
        """Corpo publicado na fila."""
        return {
            "jobId": self.job_id,
            "type": self.job_type.value,
            "payload": self.payload.to_dict(),
        }
