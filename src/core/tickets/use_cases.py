"""
Use Cases (Application Services) do Domínio de Tickets.

Use Cases implementados:
- CreateTicketService: Registra ticket (idempotente por ticket_id)
- GetTicketService: Obtém ticket específico
- UpdateTicketService: PATCH via TicketStateMachine
- ListSupervisorActivityService: Tickets criados por um supervisor

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI)
- Sem lógica de infraestrutura
"""

import logging
from typing import Tuple

from src.core.shared.exceptions import EntityNotFoundError
from src.core.shared.pagination import PageRequest, PaginatedResultDTO

from .dtos import CreateTicketInputDTO, TicketOutputDTO, TicketUpdateInputDTO
from .entities import TicketEntity
from .ports import TicketRepository
from .state_machine import TicketStateMachine

logger = logging.getLogger(__name__)


class CreateTicketService:
    """
    Use Case: Registrar um ticket.

    Fluxo:
    1. Se ``ticket_id`` já existe, devolve o ticket gravado sem alterar
       (reenvio de sincronização offline)
    2. Criar entidade (validações na entidade)
    3. Persistir via repositório

    Example:
        service = CreateTicketService(ticket_repo)
        output, created = service.execute(input_dto)
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, input_dto: CreateTicketInputDTO) -> Tuple[TicketOutputDTO, bool]:
        """
        Returns:
            Tupla (DTO do ticket, True se foi criado agora)

        Raises:
            ValidationError: Se dados inválidos
        """
        if input_dto.ticket_id:
            existing = self.ticket_repo.get_by_id(input_dto.ticket_id)
            if existing is not None:
                logger.info(f"Ticket {existing.ticket_id} already registered, skipping")
                return TicketOutputDTO.from_entity(existing), False

        ticket = TicketEntity.create(
            agent_id=input_dto.agent_id,
            issue_type=input_dto.issue_type,
            description=input_dto.description,
            ticket_id=input_dto.ticket_id,
            display_id=input_dto.display_id,
            status=input_dto.status,
            priority=input_dto.priority,
            issue_date_time=input_dto.issue_date_time,
            assigned_by=input_dto.assigned_by,
            created_by=input_dto.created_by,
            call_duration=input_dto.call_duration,
        )
        self.ticket_repo.add(ticket)

        logger.info(
            f"Ticket {ticket.ticket_id} created for agent {ticket.agent_id} "
            f"(createdBy={ticket.created_by}, assignedBy="
            f"{ticket.assigned_by.value if ticket.assigned_by else None})"
        )
        return TicketOutputDTO.from_entity(ticket), True


class GetTicketService:
    """Use Case: Obter ticket por ID."""

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, ticket_id: str) -> TicketOutputDTO:
        ticket = self.ticket_repo.get_by_id(ticket_id)
        if not ticket:
            raise EntityNotFoundError(
                "Ticket not found", entity_type="Ticket", entity_id=ticket_id
            )
        return TicketOutputDTO.from_entity(ticket)


class UpdateTicketService:
    """
    Use Case: Atualizar ticket (PATCH).

    Toda a regra de transição mora na TicketStateMachine; este
    serviço só traduz o DTO validado em campos da entidade.
    """

    def __init__(self, state_machine: TicketStateMachine):
        self.state_machine = state_machine

    def execute(self, input_dto: TicketUpdateInputDTO) -> TicketOutputDTO:
        """
        Raises:
            EntityNotFoundError, InvalidStatusTransitionError, ConcurrencyError
        """
        fields = dict(input_dto.fields)
        if input_dto.status is not None:
            fields["status"] = input_dto.status

        ticket = self.state_machine.apply_transition(input_dto.ticket_id, fields)
        return TicketOutputDTO.from_entity(ticket)


class ListSupervisorActivityService:
    """Use Case: Tickets criados por um supervisor, paginados."""

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, supervisor_id: str, page: PageRequest) -> PaginatedResultDTO:
        tickets, total = self.ticket_repo.list_created_by(
            supervisor_id, offset=page.offset, limit=page.limit
        )
        return PaginatedResultDTO(
            items=[TicketOutputDTO.from_entity(t) for t in tickets],
            total=total,
            page=page.page,
            limit=page.limit,
        )
