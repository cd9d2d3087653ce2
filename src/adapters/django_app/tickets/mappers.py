"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- Converter TicketEntity → TicketModel (para persistência)
- Converter TicketModel → TicketEntity (para uso no Core)
- Converter campos parciais da entidade em kwargs de ``update()``

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from enum import Enum
from typing import Any, Dict, List

from src.core.tickets.entities import (
    AssignedBy,
    IssueType,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)

from .models import TicketModel


class TicketMapper:
    """
    Mapper para conversão entre TicketEntity e TicketModel.

    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity
    - to_entity_list(): List[Model] → List[Entity]
    - to_update_fields(): campos da Entity → colunas
    """

    @staticmethod
    def to_model(entity: TicketEntity) -> TicketModel:
        """
        Converte TicketEntity para TicketModel.

        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return TicketModel(
            ticket_id=entity.ticket_id,
            display_id=entity.display_id,
            agent_id=entity.agent_id,
            issue_type=entity.issue_type.value,
            description=entity.description,
            status=entity.status.value,
            priority=entity.priority.value,
            issue_date_time=entity.issue_date_time,
            assigned_by=entity.assigned_by.value if entity.assigned_by else None,
            created_by=entity.created_by,
            call_duration=entity.call_duration,
            started_at=entity.started_at,
            resolution_requested_at=entity.resolution_requested_at,
            resolved_at=entity.resolved_at,
            rejected_at=entity.rejected_at,
            rejection_reason=entity.rejection_reason,
            resolution_notes=entity.resolution_notes,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def to_entity(model: TicketModel) -> TicketEntity:
        """
        Converte TicketModel para TicketEntity.

        Note:
            Bypassa validações do factory method .create()
            pois dados já foram validados na criação original
        """
        return TicketEntity(
            ticket_id=model.ticket_id,
            display_id=model.display_id,
            agent_id=model.agent_id,
            issue_type=IssueType.from_string(model.issue_type),
            description=model.description,
            status=TicketStatus(model.status),
            priority=TicketPriority(model.priority),
            issue_date_time=model.issue_date_time,
            assigned_by=AssignedBy(model.assigned_by) if model.assigned_by else None,
            created_by=model.created_by,
            call_duration=model.call_duration,
            started_at=model.started_at,
            resolution_requested_at=model.resolution_requested_at,
            resolved_at=model.resolved_at,
            rejected_at=model.rejected_at,
            rejection_reason=model.rejection_reason,
            resolution_notes=model.resolution_notes,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_entity_list(models) -> List[TicketEntity]:
        return [TicketMapper.to_entity(model) for model in models]

    @staticmethod
    def to_update_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Converte campos parciais da Entity para kwargs do ORM.

        Atributos da Entity e colunas do Model têm o mesmo nome;
        só os Enums precisam virar string.
        """
        return {
            name: value.value if isinstance(value, Enum) else value
            for name, value in fields.items()
        }
