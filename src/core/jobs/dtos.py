"""
DTOs do Domínio de Jobs.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.core.reports.entities import ReportPeriod
from src.core.shared.exceptions import ValidationError
from src.core.shared.pagination import PageRequest

from .entities import JobStatus, JobType, NotificationPayload


@dataclass(frozen=True)
class EnqueuedJobDTO:
    """Resposta do enqueue (HTTP 202)."""

    job_id: str
    status: str

    def to_dict(self) -> dict:
        return {"jobId": self.job_id, "status": self.status}


@dataclass(frozen=True)
class ListJobsQueryDTO:
    """
    Filtros da listagem de jobs.

    Attributes:
        page: Paginação já validada
        status: Filtrar por status (opcional)
        job_type: Filtrar por tipo (opcional)
    """

    page: PageRequest
    status: Optional[JobStatus] = None
    job_type: Optional[JobType] = None

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "ListJobsQueryDTO":
        status = job_type = None
        try:
            if params.get("status"):
                status = JobStatus.from_string(params["status"])
        except ValueError as e:
            raise ValidationError(str(e), field="status")
        try:
            if params.get("type"):
                job_type = JobType.from_string(params["type"])
        except ValueError as e:
            raise ValidationError(str(e), field="type")
        return cls(
            page=PageRequest.from_raw(params.get("page"), params.get("limit")),
            status=status,
            job_type=job_type,
        )


def parse_period(value: Any) -> ReportPeriod:
    """Período do relatório; default ``weekly``."""
    try:
        return ReportPeriod.from_string(value or "weekly")
    except ValueError as e:
        raise ValidationError(str(e), field="period")


def parse_notification_request(data: Dict[str, Any]) -> NotificationPayload:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return NotificationPayload.from_dict(data)
