"""
Domínio de Tickets - Ciclo de vida de chamados do helpdesk.

Este módulo contém toda a lógica de negócio relacionada a tickets
de agentes e supervisores, incluindo:
- Entidades (TicketEntity, TicketStatus, TicketPriority, AssignedBy)
- Máquina de estados (TicketStateMachine)
- Use Cases (CreateTicket, GetTicket, UpdateTicket, SupervisorActivity)
- DTOs (Input/Output Data Transfer Objects)
- Ports (Interfaces para repositórios)

Características do Domínio:
- Regime supervisionado ou self-service, decidido pela proveniência
- Ticket finalizado é imutável
- Escrita por update condicional (sem lost update)
"""

from .entities import (
    AssignedBy,
    IssueType,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)
from .dtos import CreateTicketInputDTO, TicketOutputDTO, TicketUpdateInputDTO
from .ports import InMemoryTicketRepository, TicketRepository
from .state_machine import TicketStateMachine
from .use_cases import (
    CreateTicketService,
    GetTicketService,
    ListSupervisorActivityService,
    UpdateTicketService,
)

__all__ = [
    # Entities
    "AssignedBy",
    "IssueType",
    "TicketEntity",
    "TicketPriority",
    "TicketStatus",
    # DTOs
    "CreateTicketInputDTO",
    "TicketOutputDTO",
    "TicketUpdateInputDTO",
    # Ports
    "InMemoryTicketRepository",
    "TicketRepository",
    # State machine
    "TicketStateMachine",
    # Use Cases
    "CreateTicketService",
    "GetTicketService",
    "ListSupervisorActivityService",
    "UpdateTicketService",
]
