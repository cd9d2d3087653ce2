"""
Máquina de estados do ciclo de vida de tickets.

Único ponto de mutação de tickets: a API HTTP e a action do admin
passam por aqui. Dois regimes, escolhidos pela proveniência:

- Self-service: qualquer status pode ser gravado diretamente.
- Supervisionado: ciclo estrito
  ASSIGNED → IN_PROGRESS → RESOLUTION_REQUESTED → RESOLVED,
  com devolução RESOLUTION_REQUESTED → IN_PROGRESS.

Em qualquer regime, ticket RESOLVED/REJECTED não aceita mutações.

A escrita é um update condicional sobre o status lido; se outro
processo mudou o ticket no meio do caminho, nada é gravado e
ConcurrencyError é lançada.
"""

import logging
from typing import Any, Dict, Optional

from src.core.shared.clock import Clock, utc_now
from src.core.shared.exceptions import (
    ConcurrencyError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
)

from .entities import TicketEntity, TicketStatus
from .ports import TicketRepository

logger = logging.getLogger(__name__)


FINALIZED_MESSAGE = "Finalized ticket cannot transition"

# Status atual → (próximos permitidos, mensagem de recusa)
SUPERVISOR_CYCLE = {
    TicketStatus.ASSIGNED: (
        {TicketStatus.IN_PROGRESS},
        "Assigned supervisor ticket must be accepted first",
    ),
    TicketStatus.IN_PROGRESS: (
        {TicketStatus.RESOLUTION_REQUESTED},
        "Supervisor ticket in progress must request resolution first",
    ),
    TicketStatus.RESOLUTION_REQUESTED: (
        {TicketStatus.RESOLVED, TicketStatus.IN_PROGRESS},
        "Awaiting-resolution ticket can only be approved or sent back to in-progress",
    ),
}


class TicketStateMachine:
    """
    Valida e aplica transições de status contra o TicketRepository.

    Args:
        ticket_repo: Repositório de tickets (TicketStore)
        clock: Fonte do "agora" usada nos carimbos automáticos

    Example:
        machine = TicketStateMachine(ticket_repo)
        machine.apply_transition("T-1", {"status": TicketStatus.IN_PROGRESS})
    """

    def __init__(self, ticket_repo: TicketRepository, clock: Clock = utc_now):
        self.ticket_repo = ticket_repo
        self.clock = clock

    def validate_transition(
        self,
        ticket: TicketEntity,
        next_status: Optional[TicketStatus],
    ) -> None:
        """
        Verifica se a mutação pedida é permitida.

        Args:
            ticket: Estado atual do ticket
            next_status: Status pedido (None quando o PATCH não muda status)

        Raises:
            InvalidStatusTransitionError: Se a regra do regime recusar
        """
        if ticket.is_finalized:
            raise InvalidStatusTransitionError(
                FINALIZED_MESSAGE,
                current_status=ticket.status.value,
                next_status=next_status.value if next_status else None,
            )

        if next_status is None or not ticket.is_supervisor_gated:
            return

        rule = SUPERVISOR_CYCLE.get(ticket.status)
        if rule is None:
            return

        allowed, message = rule
        if next_status not in allowed:
            raise InvalidStatusTransitionError(
                message,
                current_status=ticket.status.value,
                next_status=next_status.value,
            )

    def apply_transition(
        self,
        ticket_id: str,
        requested_fields: Dict[str, Any],
    ) -> TicketEntity:
        """
        Lê, valida e grava a mutação de forma atômica.

        ``requested_fields`` usa os nomes de atributo da entidade;
        ``status`` (se presente) deve ser um TicketStatus.

        Carimbos automáticos:
        - entrar em RESOLUTION_REQUESTED sem ``resolution_requested_at``
        - entrar em RESOLVED sem ``resolved_at``

        Returns:
            Ticket após a escrita

        Raises:
            EntityNotFoundError: Ticket não existe
            InvalidStatusTransitionError: Transição recusada
            ConcurrencyError: Ticket mudou entre leitura e escrita
        """
        ticket = self.ticket_repo.get_by_id(ticket_id)
        if ticket is None:
            raise EntityNotFoundError(
                "Ticket not found", entity_type="Ticket", entity_id=ticket_id
            )

        fields = dict(requested_fields)
        next_status = fields.get("status")

        self.validate_transition(ticket, next_status)

        if next_status == TicketStatus.RESOLUTION_REQUESTED and not fields.get(
            "resolution_requested_at"
        ):
            fields["resolution_requested_at"] = self.clock()
        if next_status == TicketStatus.RESOLVED and not fields.get("resolved_at"):
            fields["resolved_at"] = self.clock()

        updated = self.ticket_repo.update_if_status(ticket_id, ticket.status, fields)
        if not updated:
            if self.ticket_repo.get_by_id(ticket_id) is None:
                raise EntityNotFoundError(
                    "Ticket not found", entity_type="Ticket", entity_id=ticket_id
                )
            logger.warning(
                f"Lost race on ticket {ticket_id} (expected status {ticket.status.value})"
            )
            raise ConcurrencyError("Ticket was modified concurrently")

        if next_status is not None and next_status != ticket.status:
            logger.info(
                f"Ticket {ticket_id}: {ticket.status.value} → {next_status.value}"
            )

        return self.ticket_repo.get_by_id(ticket_id)
