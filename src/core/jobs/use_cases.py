"""
Use Cases de consulta e enfileiramento de jobs.
"""

from src.core.shared.exceptions import EntityNotFoundError
from src.core.shared.pagination import PaginatedResultDTO

from .dtos import EnqueuedJobDTO, ListJobsQueryDTO, parse_notification_request, parse_period
from .entities import AsyncJobEntity
from .ports import JobRepository
from .producer import JobQueueProducer


class GetJobService:
    """Use Case: status de um job."""

    def __init__(self, job_repo: JobRepository):
        self.job_repo = job_repo

    def execute(self, job_id: str) -> AsyncJobEntity:
        """
        Raises:
            EntityNotFoundError: JOB_NOT_FOUND
        """
        job = self.job_repo.get_by_id(job_id)
        if job is None:
            raise EntityNotFoundError(
                "Job not found", entity_type="AsyncJob", entity_id=job_id, code="JOB_NOT_FOUND"
            )
        return job


class ListJobsService:
    """Use Case: jobs paginados, mais novos primeiro."""

    def __init__(self, job_repo: JobRepository):
        self.job_repo = job_repo

    def execute(self, query: ListJobsQueryDTO) -> PaginatedResultDTO:
        jobs, total = self.job_repo.list_paginated(
            status=query.status,
            job_type=query.job_type,
            offset=query.page.offset,
            limit=query.page.limit,
        )
        return PaginatedResultDTO(
            items=jobs,
            total=total,
            page=query.page.page,
            limit=query.page.limit,
            serializer=AsyncJobEntity.to_status_dict,
        )


class EnqueueReportExportService:
    def __init__(self, producer: JobQueueProducer):
        self.producer = producer

    def execute(self, agent_id: str, period: str = None) -> EnqueuedJobDTO:
        return self.producer.enqueue_report_export(agent_id, parse_period(period))


class EnqueueReportEmailService:
    def __init__(self, producer: JobQueueProducer):
        self.producer = producer

    def execute(self, agent_id: str, period: str = None) -> EnqueuedJobDTO:
        return self.producer.enqueue_report_email(agent_id, parse_period(period))


class EnqueueNotificationService:
    """Use Case: broadcast manual de supervisor."""

    def __init__(self, producer: JobQueueProducer):
        self.producer = producer

    def execute(self, data: dict) -> EnqueuedJobDTO:
        payload = parse_notification_request(data)
        return self.producer.enqueue_notification(
            payload.content, receiver_id=payload.receiver_id, sender_id=payload.sender_id
        )
