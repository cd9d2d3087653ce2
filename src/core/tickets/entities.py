"""
Entidades do Domínio de Tickets.

Este módulo define as entidades de domínio que encapsulam
regras de negócio relacionadas a tickets do helpdesk.

Entidades:
- TicketEntity: Agregado principal do domínio
- TicketStatus: Estados possíveis de um ticket
- TicketPriority: Níveis de prioridade
- AssignedBy: Proveniência da atribuição
- IssueType: Categoria do problema

Regras de Negócio Encapsuladas:
- Validação de dados na criação
- Regime de transição (supervisionado ou self-service)
- Ticket finalizado é imutável
- Predicado de violação de SLA
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
import uuid

from src.core.shared.clock import utc_now
from src.core.shared.exceptions import ValidationError


class TicketStatus(Enum):
    """
    Estados possíveis de um ticket.

    Fluxo supervisionado:
        ASSIGNED → IN_PROGRESS → RESOLUTION_REQUESTED → RESOLVED
                        ↑                 │
                        └─────────────────┘ (devolvido)

    RESOLVED e REJECTED são terminais.
    """

    OPEN = "OPEN"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLUTION_REQUESTED = "RESOLUTION_REQUESTED"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"

    @property
    def is_final(self) -> bool:
        return self in (TicketStatus.RESOLVED, TicketStatus.REJECTED)

    @classmethod
    def from_string(cls, value: str) -> "TicketStatus":
        """
        Converte string para enum.

        Raises:
            ValueError: Se valor inválido
        """
        try:
            return cls[str(value).strip().upper().replace(" ", "_")]
        except KeyError:
            raise ValueError(f"Invalid status: {value}")


FINAL_STATUSES = (TicketStatus.RESOLVED, TicketStatus.REJECTED)


class TicketPriority(Enum):
    """Níveis de prioridade. O scanner de SLA escala para URGENT."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @classmethod
    def from_string(cls, value: str) -> "TicketPriority":
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid priority: {value}")


class AssignedBy(Enum):
    """Quem atribuiu o ticket ao agente."""

    SUPERVISOR = "SUPERVISOR"
    SYSTEM = "SYSTEM"

    @classmethod
    def from_string(cls, value: str) -> "AssignedBy":
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid assignedBy: {value}")


class IssueType(Enum):
    FOH = "FOH"
    BOH = "BOH"
    KIOSK = "KIOSK"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str) -> "IssueType":
        for issue_type in cls:
            if issue_type.value.lower() == str(value).strip().lower():
                return issue_type
        raise ValueError(f"Invalid issueType: {value}")


@dataclass
class TicketEntity:
    """
    Entidade de Domínio: Ticket.

    Agregado principal do helpdesk. Depois de criado, só é alterado
    pela TicketStateMachine (exceto a escalada de prioridade em lote
    feita pelo scanner de SLA). Nunca é removido.

    Invariantes:
    - Descrição entre 5 e 1000 caracteres
    - Agente é obrigatório
    - Ticket RESOLVED/REJECTED não aceita mais mutações

    Attributes:
        ticket_id: Identificador único
        display_id: Identificador curto para exibição
        agent_id: Agente dono do ticket
        issue_type: Categoria do problema
        description: Descrição livre
        status: Estado atual
        priority: Prioridade (default MEDIUM)
        issue_date_time: Instante de abertura (base do SLA)
        assigned_by: Proveniência da atribuição (SUPERVISOR/SYSTEM/None)
        created_by: Supervisor que criou o ticket (ou None)
        call_duration: Duração da chamada em segundos
        started_at / resolution_requested_at / resolved_at / rejected_at:
            Marcos de tempo do ciclo de vida
        rejection_reason: Motivo da rejeição
        resolution_notes: Notas de resolução
        updated_at: Última alteração

    Example:
        ticket = TicketEntity.create(
            agent_id="AG-01",
            issue_type=IssueType.KIOSK,
            description="Kiosk screen frozen",
        )
    """

    # Identificação
    ticket_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    display_id: Optional[str] = None

    # Dados principais
    agent_id: str = ""
    issue_type: IssueType = IssueType.OTHER
    description: str = ""

    # Estado
    status: TicketStatus = field(default=TicketStatus.OPEN)
    priority: TicketPriority = field(default=TicketPriority.MEDIUM)
    issue_date_time: datetime = field(default_factory=utc_now)

    # Proveniência
    assigned_by: Optional[AssignedBy] = None
    created_by: Optional[str] = None

    call_duration: Optional[int] = None

    # Marcos de tempo
    started_at: Optional[datetime] = None
    resolution_requested_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None

    rejection_reason: Optional[str] = None
    resolution_notes: Optional[str] = None

    updated_at: datetime = field(default_factory=utc_now)

    # Constantes de validação
    DESCRIPTION_MIN_LENGTH: int = 5
    DESCRIPTION_MAX_LENGTH: int = 1000

    @classmethod
    def create(
        cls,
        agent_id: str,
        issue_type: IssueType,
        description: str,
        ticket_id: Optional[str] = None,
        display_id: Optional[str] = None,
        status: TicketStatus = TicketStatus.OPEN,
        priority: TicketPriority = TicketPriority.MEDIUM,
        issue_date_time: Optional[datetime] = None,
        assigned_by: Optional[AssignedBy] = None,
        created_by: Optional[str] = None,
        call_duration: Optional[int] = None,
    ) -> "TicketEntity":
        """
        Factory method para criar ticket com validações.

        Um ticket não pode nascer finalizado.

        Raises:
            ValidationError: Se dados de entrada inválidos
        """
        if not agent_id or not str(agent_id).strip():
            raise ValidationError("agentId is required", field="agentId")
        cls.validate_description(description)
        if status.is_final:
            raise ValidationError(
                "Ticket cannot be created in a finalized status", field="status"
            )
        if call_duration is not None and call_duration < 0:
            raise ValidationError("callDuration must be positive", field="callDuration")

        now = utc_now()
        return cls(
            ticket_id=ticket_id or str(uuid.uuid4()),
            display_id=display_id,
            agent_id=str(agent_id).strip(),
            issue_type=issue_type,
            description=description.strip(),
            status=status,
            priority=priority,
            issue_date_time=issue_date_time or now,
            assigned_by=assigned_by,
            created_by=created_by or None,
            call_duration=call_duration,
            updated_at=now,
        )

    @classmethod
    def validate_description(cls, description: str) -> None:
        """Valida descrição do ticket."""
        if not description or not description.strip():
            raise ValidationError("description is required", field="description")

        size = len(description.strip())
        if size < cls.DESCRIPTION_MIN_LENGTH:
            raise ValidationError(
                f"description must have at least {cls.DESCRIPTION_MIN_LENGTH} characters",
                field="description",
            )
        if size > cls.DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"description must have at most {cls.DESCRIPTION_MAX_LENGTH} characters",
                field="description",
            )

    # =========================================================================
    # PROPRIEDADES DE REGRA DE NEGÓCIO
    # =========================================================================

    @property
    def is_supervisor_gated(self) -> bool:
        """
        Ticket segue o ciclo supervisionado?

        Atribuído por supervisor, ou criado por supervisor e já fora de OPEN.
        """
        if self.assigned_by == AssignedBy.SUPERVISOR:
            return True
        return bool(self.created_by) and self.status != TicketStatus.OPEN

    @property
    def is_finalized(self) -> bool:
        return self.status.is_final

    def is_sla_breached(self, now: datetime, hours: int) -> bool:
        """
        Verifica violação de SLA.

        Args:
            now: Instante de referência
            hours: Idade máxima tolerada em horas

        Returns:
            True se o ticket não está finalizado e foi aberto
            antes de ``now - hours``
        """
        if self.is_finalized:
            return False
        return self.issue_date_time < now - timedelta(hours=hours)

    def __eq__(self, other: object) -> bool:
        """Igualdade baseada em identidade (ticket_id)."""
        if not isinstance(other, TicketEntity):
            return False
        return self.ticket_id == other.ticket_id

    def __hash__(self) -> int:
        return hash(self.ticket_id)

    def __repr__(self) -> str:
        return (
            f"TicketEntity(ticket_id={self.ticket_id!r}, "
            f"status={self.status.value}, priority={self.priority.value})"
        )
