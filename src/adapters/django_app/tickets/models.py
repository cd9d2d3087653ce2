"""
Django Models para o domínio de Tickets.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em src/core/tickets/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Lógica de negócio fica nas Entities e na TicketStateMachine
- Models são mapeados para/de Entities via Mappers
"""

from django.db import models
from django.utils import timezone


class TicketStatusChoices(models.TextChoices):
    """Choices para status de ticket (espelha TicketStatus do Core)."""
    OPEN = 'OPEN', 'Open'
    ASSIGNED = 'ASSIGNED', 'Assigned'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    RESOLUTION_REQUESTED = 'RESOLUTION_REQUESTED', 'Resolution requested'
    RESOLVED = 'RESOLVED', 'Resolved'
    REJECTED = 'REJECTED', 'Rejected'


class TicketPriorityChoices(models.TextChoices):
    """Choices para prioridade de ticket (espelha TicketPriority do Core)."""
    LOW = 'LOW', 'Low'
    MEDIUM = 'MEDIUM', 'Medium'
    HIGH = 'HIGH', 'High'
    URGENT = 'URGENT', 'Urgent'


class AssignedByChoices(models.TextChoices):
    SUPERVISOR = 'SUPERVISOR', 'Supervisor'
    SYSTEM = 'SYSTEM', 'System'


class IssueTypeChoices(models.TextChoices):
    FOH = 'FOH', 'Front of house'
    BOH = 'BOH', 'Back of house'
    KIOSK = 'KIOSK', 'Kiosk'
    OTHER = 'other', 'Other'


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Sem delete: ticket é registro de auditoria.

    Fields:
        ticket_id: Primary key (gerada pela Entity ou pelo cliente)
        status / priority: Choices espelhando o Core
        issue_date_time: Base do cálculo de SLA
        assigned_by / created_by: Proveniência (define o regime)
        started_at ... rejected_at: Marcos do ciclo de vida
    """

    # Primary Key - gerada pela Entity
    ticket_id = models.CharField(
        max_length=64,
        primary_key=True,
        editable=False,
        help_text="Identificador único do ticket"
    )

    display_id = models.CharField(
        max_length=32,
        null=True,
        blank=True,
        help_text="Identificador curto para exibição"
    )

    agent_id = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Agente dono do ticket"
    )

    issue_type = models.CharField(
        max_length=10,
        choices=IssueTypeChoices.choices,
        default=IssueTypeChoices.OTHER,
    )

    description = models.TextField(
        help_text="Descrição do problema"
    )

    # Estado
    status = models.CharField(
        max_length=30,
        choices=TicketStatusChoices.choices,
        default=TicketStatusChoices.OPEN,
        db_index=True,
        help_text="Estado atual do ticket"
    )

    priority = models.CharField(
        max_length=10,
        choices=TicketPriorityChoices.choices,
        default=TicketPriorityChoices.MEDIUM,
        db_index=True,
    )

    issue_date_time = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="Instante de abertura (base do SLA)"
    )

    # Proveniência
    assigned_by = models.CharField(
        max_length=20,
        choices=AssignedByChoices.choices,
        null=True,
        blank=True,
    )

    created_by = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        db_index=True,
        help_text="Supervisor que criou o ticket"
    )

    call_duration = models.PositiveIntegerField(null=True, blank=True)

    # Marcos de tempo
    started_at = models.DateTimeField(null=True, blank=True)
    resolution_requested_at = models.DateTimeField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)

    rejection_reason = models.TextField(null=True, blank=True)
    resolution_notes = models.TextField(null=True, blank=True)

    updated_at = models.DateTimeField(
        default=timezone.now,
        help_text="Data/hora da última atualização"
    )

    class Meta:
        db_table = 'tickets'
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['-issue_date_time']
        indexes = [
            # Varredura de SLA
            models.Index(fields=['status', 'issue_date_time'], name='tickets_status_issued_idx'),
            # Relatórios por agente
            models.Index(fields=['agent_id', 'issue_date_time'], name='tickets_agent_issued_idx'),
            models.Index(fields=['created_by', 'issue_date_time'], name='tickets_creator_issued_idx'),
        ]

    def __str__(self):
        return f"[{self.display_id or self.ticket_id[:8]}] {self.status}"

    def __repr__(self):
        return f"<TicketModel ticket_id={self.ticket_id[:8]} status={self.status}>"
