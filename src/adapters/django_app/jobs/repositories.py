"""
Repositórios Django do domínio de Jobs.

- DjangoJobRepository: JobStore (tabela async_jobs)
- DjangoBroadcastSink: mensagens BROADCAST (tabela broadcast_messages)
- DjangoAgentDirectory: leitura do cadastro de agentes (tabela agents)
"""

from typing import List, Optional, Tuple
import logging
import uuid

from django.utils import timezone

from src.core.jobs.entities import AsyncJobEntity, JobStatus, JobType
from src.core.reports.entities import AgentProfile

from ..shared.repository import paginate_queryset
from .mappers import AsyncJobMapper
from .models import AgentModel, AsyncJobModel, BroadcastMessageModel

logger = logging.getLogger(__name__)


class DjangoJobRepository:
    """
    Implementação Django do JobRepository.

    Implementa a interface definida em src/core/jobs/ports.py.
    """

    def __init__(self):
        self._mapper = AsyncJobMapper()

    def add(self, job: AsyncJobEntity) -> None:
        self._mapper.to_model(job).save(force_insert=True)
        logger.debug(f"Job saved: {job.job_id} ({job.job_type.value})")

    def save(self, job: AsyncJobEntity) -> None:
        """
        Atualiza os campos mutáveis do job.

        Note:
            ``created_at``, ``type`` e ``payload`` nunca mudam depois do insert
        """
        AsyncJobModel.objects.filter(job_id=job.job_id).update(
            status=job.status.value,
            result=job.result.to_dict() if job.result else None,
            error=job.error,
            attempts=job.attempts,
            updated_at=job.updated_at,
        )

    def get_by_id(self, job_id: str) -> Optional[AsyncJobEntity]:
        try:
            return self._mapper.to_entity(AsyncJobModel.objects.get(job_id=job_id))
        except AsyncJobModel.DoesNotExist:
            return None

    def list_paginated(
        self,
        status: Optional[JobStatus] = None,
        job_type: Optional[JobType] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[AsyncJobEntity], int]:
        queryset = AsyncJobModel.objects.all()
        if status:
            queryset = queryset.filter(status=status.value)
        if job_type:
            queryset = queryset.filter(type=job_type.value)

        models, total = paginate_queryset(queryset.order_by('-created_at'), offset, limit)
        return self._mapper.to_entity_list(models), total


class DjangoBroadcastSink:
    """Grava mensagens BROADCAST criadas por jobs NOTIFICATION."""

    def publish(self, sender_id: str, receiver_id: Optional[str], content: str) -> str:
        message = BroadcastMessageModel.objects.create(
            message_id=str(uuid.uuid4()),
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            message_type='BROADCAST',
            timestamp=timezone.now(),
        )
        logger.info(f"Broadcast message {message.message_id} → {receiver_id or 'all'}")
        return message.message_id


class DjangoAgentDirectory:
    """AgentDirectory sobre a tabela agents (busca case-insensitive)."""

    def get_agent(self, agent_id: str) -> Optional[AgentProfile]:
        model = AgentModel.objects.filter(agent_id__iexact=agent_id).first()
        if model is None:
            return None
        return AgentProfile(agent_id=model.agent_id, name=model.name, email=model.email or None)
