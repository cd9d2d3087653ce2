"""
Repositórios Django para persistência de Tickets.

Implementam as interfaces (Ports) definidas no Core.
São DRIVEN ADAPTERS - acionados pelo Core em resposta a operações.

Responsabilidades:
- Implementar TicketRepository protocol
- Mapear entities para models e vice-versa
- Update condicional atômico (UPDATE ... WHERE status = esperado)

Princípios:
- Repository não contém lógica de negócio
- Usa Mapper para conversões
- Trata apenas persistência
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging

from django.utils import timezone

from src.core.tickets.entities import (
    FINAL_STATUSES,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)

from ..shared.repository import slice_queryset
from .mappers import TicketMapper
from .models import TicketModel

logger = logging.getLogger(__name__)


class DjangoTicketRepository:
    """
    Implementação Django do TicketRepository.

    Implementa a interface definida em src/core/tickets/ports.py.

    Example:
        repo = DjangoTicketRepository()
        repo.add(ticket_entity)
        ticket = repo.get_by_id("T-1")
    """

    def __init__(self):
        self._mapper = TicketMapper()

    def add(self, ticket: TicketEntity) -> None:
        """
        Insere ticket novo.

        Note:
            ``force_insert`` garante que nunca vira update silencioso
        """
        self._mapper.to_model(ticket).save(force_insert=True)
        logger.info(f"Ticket saved: {ticket.ticket_id}")

    def get_by_id(self, ticket_id: str) -> Optional[TicketEntity]:
        try:
            model = TicketModel.objects.get(ticket_id=ticket_id)
            return self._mapper.to_entity(model)
        except TicketModel.DoesNotExist:
            logger.debug(f"Ticket not found: {ticket_id}")
            return None

    def update_if_status(
        self,
        ticket_id: str,
        expected_status: TicketStatus,
        fields: Dict[str, Any],
    ) -> bool:
        """
        Compare-and-set em um único UPDATE.

        Returns:
            True se a linha ainda tinha ``expected_status`` e foi gravada
        """
        values = self._mapper.to_update_fields(fields)
        values["updated_at"] = timezone.now()

        rows = TicketModel.objects.filter(
            ticket_id=ticket_id,
            status=expected_status.value,
        ).update(**values)

        logger.debug(f"Conditional update {ticket_id} ({expected_status.value}): {rows} row(s)")
        return rows == 1

    # =========================================================================
    # SLA
    # =========================================================================

    def _breach_queryset(self, cutoff: datetime):
        return (
            TicketModel.objects
            .filter(issue_date_time__lt=cutoff)
            .exclude(status__in=[s.value for s in FINAL_STATUSES])
            .order_by('issue_date_time')
        )

    def list_sla_breaches(
        self,
        cutoff: datetime,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[TicketEntity]:
        queryset = slice_queryset(self._breach_queryset(cutoff), offset, limit)
        return self._mapper.to_entity_list(queryset)

    def count_sla_breaches(self, cutoff: datetime) -> int:
        return self._breach_queryset(cutoff).count()

    def bulk_set_priority(self, ticket_ids: List[str], priority: TicketPriority) -> int:
        """Um único UPDATE para todos os IDs."""
        return TicketModel.objects.filter(ticket_id__in=ticket_ids).update(
            priority=priority.value,
            updated_at=timezone.now(),
        )

    # =========================================================================
    # Relatórios / Atividade
    # =========================================================================

    def list_by_agent_since(self, agent_id: str, since: datetime) -> List[TicketEntity]:
        models = TicketModel.objects.filter(
            agent_id__iexact=agent_id,
            issue_date_time__gte=since,
        )
        return self._mapper.to_entity_list(models)

    def list_resolved_by_agent_since(self, agent_id: str, since: datetime) -> List[TicketEntity]:
        models = TicketModel.objects.filter(
            agent_id__iexact=agent_id,
            status=TicketStatus.RESOLVED.value,
            resolved_at__gte=since,
        )
        return self._mapper.to_entity_list(models)

    def list_created_by(
        self,
        supervisor_id: str,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[TicketEntity], int]:
        queryset = TicketModel.objects.filter(created_by=supervisor_id).order_by('-issue_date_time')
        total = queryset.count()
        return self._mapper.to_entity_list(slice_queryset(queryset, offset, limit)), total

    def count(self) -> int:
        return TicketModel.objects.count()
