"""
Mappers entre AsyncJobEntity (Core) e AsyncJobModel (Django).

Payload e result vivem como JSON no banco; a conversão para as
classes tipadas usa o ``type`` do job como etiqueta.
"""

from typing import List

from src.core.jobs.entities import (
    AsyncJobEntity,
    JobStatus,
    JobType,
    parse_payload,
    parse_result,
)

from .models import AsyncJobModel


class AsyncJobMapper:
    """
    Mapper para conversão entre AsyncJobEntity e AsyncJobModel.

    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity
    """

    @staticmethod
    def to_model(entity: AsyncJobEntity) -> AsyncJobModel:
        """
        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return AsyncJobModel(
            job_id=entity.job_id,
            type=entity.job_type.value,
            status=entity.status.value,
            payload=entity.payload.to_dict(),
            result=entity.result.to_dict() if entity.result else None,
            error=entity.error,
            attempts=entity.attempts,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def to_entity(model: AsyncJobModel) -> AsyncJobEntity:
        job_type = JobType(model.type)
        return AsyncJobEntity(
            job_id=model.job_id,
            job_type=job_type,
            status=JobStatus(model.status),
            payload=parse_payload(job_type, model.payload),
            result=parse_result(job_type, model.result),
            error=model.error,
            attempts=model.attempts,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_entity_list(models) -> List[AsyncJobEntity]:
        return [AsyncJobMapper.to_entity(model) for model in models]
