"""
Django Admin para o domínio de Tickets.

O admin é somente leitura para status e marcos de tempo: mudanças de
status passam pelas actions, que chamam a mesma TicketStateMachine
usada pela API.
"""

from django.contrib import admin, messages
from django.utils import timezone
from django.utils.html import format_html

from src.config.container import get_container
from src.core.shared.exceptions import DomainException
from src.core.tickets.entities import TicketStatus

from .models import TicketModel


def _badge(color: str, text: str):
    return format_html(
        '<span style="background-color: {}; color: white; padding: 3px 8px; '
        'border-radius: 3px; font-size: 11px;">{}</span>',
        color,
        text
    )


@admin.register(TicketModel)
class TicketAdmin(admin.ModelAdmin):
    """Admin para TicketModel."""

    list_display = [
        'ticket_id_curto',
        'agent_id',
        'issue_type',
        'status_badge',
        'priority_badge',
        'created_by',
        'issue_date_time',
        'idade',
    ]

    list_filter = [
        'status',
        'priority',
        'issue_type',
        'assigned_by',
    ]

    search_fields = [
        'ticket_id',
        'display_id',
        'agent_id',
        'created_by',
        'description',
    ]

    readonly_fields = [
        'ticket_id',
        'status',
        'priority',
        'issue_date_time',
        'assigned_by',
        'created_by',
        'started_at',
        'resolution_requested_at',
        'resolved_at',
        'rejected_at',
        'updated_at',
    ]

    ordering = ['-issue_date_time']

    date_hierarchy = 'issue_date_time'

    actions = ['aceitar', 'solicitar_resolucao', 'aprovar_resolucao']

    def has_delete_permission(self, request, obj=None):
        # Ticket é registro de auditoria
        return False

    def ticket_id_curto(self, obj):
        """Exibe ID curto (primeiros 8 caracteres)."""
        return obj.display_id or obj.ticket_id[:8] + '...'
    ticket_id_curto.short_description = 'ID'

    def status_badge(self, obj):
        """Exibe status com badge colorido."""
        colors = {
            'OPEN': '#17a2b8',
            'ASSIGNED': '#6f42c1',
            'IN_PROGRESS': '#ffc107',
            'RESOLUTION_REQUESTED': '#6c757d',
            'RESOLVED': '#28a745',
            'REJECTED': '#343a40',
        }
        return _badge(colors.get(obj.status, '#6c757d'), obj.status)
    status_badge.short_description = 'Status'

    def priority_badge(self, obj):
        """Exibe prioridade com badge colorido."""
        colors = {
            'LOW': '#28a745',
            'MEDIUM': '#ffc107',
            'HIGH': '#fd7e14',
            'URGENT': '#dc3545',
        }
        return _badge(colors.get(obj.priority, '#6c757d'), obj.priority)
    priority_badge.short_description = 'Prioridade'

    def idade(self, obj):
        """Horas desde a abertura."""
        horas = (timezone.now() - obj.issue_date_time).total_seconds() / 3600
        return f"{horas:.1f}h"
    idade.short_description = 'Idade'

    # =========================================================================
    # Actions (via TicketStateMachine)
    # =========================================================================

    def _transicionar(self, request, queryset, status: TicketStatus):
        state_machine = get_container().ticket_state_machine()
        ok = 0
        for ticket_id in queryset.values_list('ticket_id', flat=True):
            try:
                state_machine.apply_transition(ticket_id, {'status': status})
                ok += 1
            except DomainException as e:
                self.message_user(request, f"{ticket_id}: {e.message}", level=messages.WARNING)
        if ok:
            self.message_user(request, f"{ok} ticket(s) → {status.value}")

    @admin.action(description='Aceitar (IN_PROGRESS)')
    def aceitar(self, request, queryset):
        self._transicionar(request, queryset, TicketStatus.IN_PROGRESS)

    @admin.action(description='Solicitar resolução')
    def solicitar_resolucao(self, request, queryset):
        self._transicionar(request, queryset, TicketStatus.RESOLUTION_REQUESTED)

    @admin.action(description='Aprovar resolução (RESOLVED)')
    def aprovar_resolucao(self, request, queryset):
        self._transicionar(request, queryset, TicketStatus.RESOLVED)
