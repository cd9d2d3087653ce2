"""
Ports (Interfaces) do Domínio de Tickets.

Define os contratos que os Adapters de infraestrutura devem implementar
para persistência e consulta de tickets.

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    # No Adapter (Django)
    class DjangoTicketRepository:
        def add(self, ticket: TicketEntity) -> None:
            TicketMapper.to_model(ticket).save()
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from src.core.shared.clock import utc_now

from .entities import FINAL_STATUSES, TicketEntity, TicketPriority, TicketStatus


@runtime_checkable
class TicketRepository(Protocol):
    """
    Interface para persistência de Tickets (TicketStore).

    Implementações:
    - DjangoTicketRepository (ORM)
    - InMemoryTicketRepository (para testes)

    Não existe ``delete``: tickets são registro de auditoria.
    """

    def add(self, ticket: TicketEntity) -> None:
        """
        Insere um ticket novo.

        Args:
            ticket: Entidade a ser persistida
        """
        ...

    def get_by_id(self, ticket_id: str) -> Optional[TicketEntity]:
        """
        Busca ticket por ID.

        Returns:
            Entidade encontrada ou None se não existir
        """
        ...

    def update_if_status(
        self,
        ticket_id: str,
        expected_status: TicketStatus,
        fields: Dict[str, Any],
    ) -> bool:
        """
        Update condicional (compare-and-set) sobre o status.

        Aplica ``fields`` somente se o status gravado ainda for
        ``expected_status``. A operação deve ser atômica no storage.

        Args:
            ticket_id: Ticket alvo
            expected_status: Status lido antes da validação
            fields: Atributos da entidade a gravar

        Returns:
            True se uma linha foi alterada, False caso contrário
        """
        ...

    def list_sla_breaches(
        self,
        cutoff: datetime,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[TicketEntity]:
        """
        Tickets não finalizados com ``issue_date_time < cutoff``.

        Ordenados do mais antigo para o mais novo.
        """
        ...

    def count_sla_breaches(self, cutoff: datetime) -> int:
        ...

    def bulk_set_priority(self, ticket_ids: List[str], priority: TicketPriority) -> int:
        """
        Altera a prioridade de vários tickets de uma vez.

        Returns:
            Número de tickets alterados
        """
        ...

    def list_by_agent_since(self, agent_id: str, since: datetime) -> List[TicketEntity]:
        """Tickets do agente abertos a partir de ``since``."""
        ...

    def list_resolved_by_agent_since(self, agent_id: str, since: datetime) -> List[TicketEntity]:
        """Tickets RESOLVED do agente com ``resolved_at >= since``."""
        ...

    def list_created_by(
        self, supervisor_id: str, offset: int = 0, limit: Optional[int] = None
    ) -> Tuple[List[TicketEntity], int]:
        """
        Tickets criados por um supervisor, mais novos primeiro.

        Returns:
            Tupla (página de tickets, total)
        """
        ...


class InMemoryTicketRepository:
    """
    Implementação em memória do TicketRepository.

    Útil para:
    - Testes unitários
    - Prototipagem

    Não usar em produção!

    Example:
        repo = InMemoryTicketRepository()
        repo.add(ticket)
        found = repo.get_by_id(ticket.ticket_id)
    """

    def __init__(self):
        self._tickets: Dict[str, TicketEntity] = {}

    def add(self, ticket: TicketEntity) -> None:
        self._tickets[ticket.ticket_id] = replace(ticket)

    def get_by_id(self, ticket_id: str) -> Optional[TicketEntity]:
        ticket = self._tickets.get(ticket_id)
        # Cópia: quem lê não pode alterar o "banco" por referência
        return replace(ticket) if ticket else None

    def update_if_status(self, ticket_id, expected_status, fields) -> bool:
        ticket = self._tickets.get(ticket_id)
        if ticket is None or ticket.status != expected_status:
            return False
        self._tickets[ticket_id] = replace(ticket, updated_at=utc_now(), **fields)
        return True

    def list_sla_breaches(self, cutoff, offset=0, limit=None) -> List[TicketEntity]:
        breaches = sorted(
            (
                t for t in self._tickets.values()
                if t.status not in FINAL_STATUSES and t.issue_date_time < cutoff
            ),
            key=lambda t: t.issue_date_time,
        )
        end = None if limit is None else offset + limit
        return [replace(t) for t in breaches[offset:end]]

    def count_sla_breaches(self, cutoff) -> int:
        return len(self.list_sla_breaches(cutoff))

    def bulk_set_priority(self, ticket_ids, priority) -> int:
        changed = 0
        for ticket_id in ticket_ids:
            ticket = self._tickets.get(ticket_id)
            if ticket is not None:
                self._tickets[ticket_id] = replace(
                    ticket, priority=priority, updated_at=utc_now()
                )
                changed += 1
        return changed

    def list_by_agent_since(self, agent_id, since) -> List[TicketEntity]:
        return [
            replace(t) for t in self._tickets.values()
            if t.agent_id.lower() == agent_id.lower() and t.issue_date_time >= since
        ]

    def list_resolved_by_agent_since(self, agent_id, since) -> List[TicketEntity]:
        return [
            replace(t) for t in self._tickets.values()
            if t.agent_id.lower() == agent_id.lower()
            and t.status == TicketStatus.RESOLVED
            and t.resolved_at is not None
            and t.resolved_at >= since
        ]

    def list_created_by(self, supervisor_id, offset=0, limit=None):
        tickets = sorted(
            (t for t in self._tickets.values() if t.created_by == supervisor_id),
            key=lambda t: t.issue_date_time,
            reverse=True,
        )
        end = None if limit is None else offset + limit
        return [replace(t) for t in tickets[offset:end]], len(tickets)

    def count(self) -> int:
        return len(self._tickets)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._tickets.clear()
