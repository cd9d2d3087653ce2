"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento de entidades para a camada HTTP.

Tipos de DTOs:
- Input DTOs: Recebem o corpo JSON já validado
- Output DTOs: Formatam dados para resposta (chaves camelCase)

A validação de entrada acontece aqui, antes de qualquer chamada à
máquina de estados: campos desconhecidos, status inválido e
timestamps malformados viram VALIDATION_ERROR.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.core.shared.clock import isoformat_or_none, parse_instant
from src.core.shared.exceptions import ValidationError

from .entities import (
    AssignedBy,
    IssueType,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)


def _enum_or_error(enum_cls, value: Any, path: str):
    try:
        return enum_cls.from_string(value)
    except ValueError as e:
        raise ValidationError(str(e), field=path)


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CreateTicketInputDTO:
    """
    DTO de entrada para criar ticket.

    Imutável (frozen=True) para garantir que dados
    validados não sejam alterados acidentalmente.

    Attributes:
        agent_id: Agente dono do ticket
        issue_type: Categoria (FOH, BOH, KIOSK, other)
        description: Descrição livre
        ticket_id: Identificador fornecido pelo cliente (sync offline)
        display_id: Identificador curto
        status: Status inicial (default OPEN)
        priority: Prioridade (default MEDIUM)
        issue_date_time: Instante de abertura (default agora)
        assigned_by: SUPERVISOR ou SYSTEM
        created_by: Supervisor criador
        call_duration: Duração da chamada em segundos
    """

    agent_id: str
    issue_type: IssueType
    description: str
    ticket_id: Optional[str] = None
    display_id: Optional[str] = None
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    issue_date_time: Optional[datetime] = None
    assigned_by: Optional[AssignedBy] = None
    created_by: Optional[str] = None
    call_duration: Optional[int] = None

    @classmethod
    def from_request(cls, data: Dict[str, Any]) -> "CreateTicketInputDTO":
        """
        Constrói o DTO a partir do corpo JSON.

        Raises:
            ValidationError: Se campos obrigatórios faltarem ou forem inválidos
        """
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        missing = [
            {"path": name, "message": f"{name} is required"}
            for name in ("agentId", "issueType", "description")
            if not data.get(name)
        ]
        if missing:
            raise ValidationError("Invalid request data", details=missing)

        call_duration = data.get("callDuration")
        if call_duration is not None:
            if isinstance(call_duration, bool) or not isinstance(call_duration, (int, float)):
                raise ValidationError("callDuration must be a number", field="callDuration")
            call_duration = int(call_duration)

        return cls(
            agent_id=str(data["agentId"]),
            issue_type=_enum_or_error(IssueType, data["issueType"], "issueType"),
            description=str(data["description"]),
            ticket_id=data.get("ticketId"),
            display_id=data.get("displayId"),
            status=_enum_or_error(TicketStatus, data.get("status") or "OPEN", "status"),
            priority=_enum_or_error(TicketPriority, data.get("priority") or "MEDIUM", "priority"),
            issue_date_time=(
                parse_instant(data["issueDateTime"], "issueDateTime")
                if data.get("issueDateTime") is not None else None
            ),
            assigned_by=(
                _enum_or_error(AssignedBy, data["assignedBy"], "assignedBy")
                if data.get("assignedBy") else None
            ),
            created_by=data.get("createdBy") or None,
            call_duration=call_duration,
        )


@dataclass(frozen=True)
class TicketUpdateInputDTO:
    """
    Campos pedidos num PATCH de ticket.

    Só os campos presentes no corpo são aplicados. ``status`` ausente
    significa que não há transição de status a validar.
    """

    ticket_id: str
    status: Optional[TicketStatus] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    # Nome no JSON → (atributo na entidade, é timestamp?)
    ALLOWED_FIELDS = {
        "description": ("description", False),
        "resolutionNotes": ("resolution_notes", False),
        "rejectionReason": ("rejection_reason", False),
        "startedAt": ("started_at", True),
        "resolutionRequestedAt": ("resolution_requested_at", True),
        "resolvedAt": ("resolved_at", True),
        "rejectedAt": ("rejected_at", True),
    }

    @classmethod
    def from_request(cls, ticket_id: str, data: Dict[str, Any]) -> "TicketUpdateInputDTO":
        """
        Valida o corpo do PATCH.

        Raises:
            ValidationError: Corpo vazio, campo desconhecido,
                status inválido ou timestamp malformado
        """
        if not isinstance(data, dict) or not data:
            raise ValidationError("At least one field must be provided")

        unknown = sorted(set(data) - set(cls.ALLOWED_FIELDS) - {"status"})
        if unknown:
            raise ValidationError(
                "Invalid request data",
                details=[{"path": name, "message": "Unknown field"} for name in unknown],
            )

        status = None
        if data.get("status") is not None:
            status = _enum_or_error(TicketStatus, data["status"], "status")

        fields: Dict[str, Any] = {}
        for json_name, (attribute, is_instant) in cls.ALLOWED_FIELDS.items():
            if json_name not in data:
                continue
            value = data[json_name]
            if value is not None and is_instant:
                value = parse_instant(value, json_name)
            elif value is not None and not isinstance(value, str):
                raise ValidationError(f"{json_name} must be a string", field=json_name)
            fields[attribute] = value

        if "description" in fields:
            TicketEntity.validate_description(fields["description"] or "")
            fields["description"] = fields["description"].strip()

        if status is None and not fields:
            raise ValidationError("At least one field must be provided")

        return cls(ticket_id=ticket_id, status=status, fields=fields)


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TicketOutputDTO:
    """
    DTO de saída completo com dados do ticket.

    Timestamps saem em ISO-8601; chaves em camelCase.
    """

    ticket_id: str
    display_id: Optional[str]
    agent_id: str
    issue_type: str
    description: str
    status: str
    priority: str
    issue_date_time: datetime
    assigned_by: Optional[str]
    created_by: Optional[str]
    call_duration: Optional[int]
    started_at: Optional[datetime]
    resolution_requested_at: Optional[datetime]
    resolved_at: Optional[datetime]
    rejected_at: Optional[datetime]
    rejection_reason: Optional[str]
    resolution_notes: Optional[str]
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: TicketEntity) -> "TicketOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Entidade TicketEntity

        Returns:
            DTO com dados da entidade
        """
        return cls(
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

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "ticketId": self.ticket_id,
            "displayId": self.display_id,
            "agentId": self.agent_id,
            "issueType": self.issue_type,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "issueDateTime": self.issue_date_time.isoformat(),
            "assignedBy": self.assigned_by,
            "createdBy": self.created_by,
            "callDuration": self.call_duration,
            "startedAt": isoformat_or_none(self.started_at),
            "resolutionRequestedAt": isoformat_or_none(self.resolution_requested_at),
            "resolvedAt": isoformat_or_none(self.resolved_at),
            "rejectedAt": isoformat_or_none(self.rejected_at),
            "rejectionReason": self.rejection_reason,
            "resolutionNotes": self.resolution_notes,
            "updatedAt": self.updated_at.isoformat(),
        }


def ticket_list_to_dicts(tickets: List[TicketEntity]) -> List[dict]:
    return [TicketOutputDTO.from_entity(ticket).to_dict() for ticket in tickets]
