"""
Testes dos repositórios Django (SQLite em memória).

Testa:
- DjangoTicketRepository: insert, update condicional, SLA, relatórios
- DjangoJobRepository: insert/save/listagem
- DjangoBroadcastSink e DjangoAgentDirectory
"""

from datetime import timedelta

import pytest

from src.core.jobs.entities import (
    AsyncJobEntity,
    ExportResult,
    JobStatus,
    JobType,
    NotificationPayload,
    ReportPayload,
)
from src.core.reports.entities import ReportPeriod
from src.core.tickets.entities import (
    AssignedBy,
    IssueType,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)

from tests.conftest import NOW

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def build_ticket(ticket_id, hours_ago=0, **kwargs):
    defaults = {
        'agent_id': 'AG-01',
        'issue_type': IssueType.BOH,
        'description': 'Fryer temperature alarm',
        'ticket_id': ticket_id,
        'issue_date_time': NOW - timedelta(hours=hours_ago),
    }
    defaults.update(kwargs)
    return TicketEntity.create(**defaults)


@pytest.fixture
def repo():
    from src.adapters.django_app.tickets.repositories import DjangoTicketRepository
    return DjangoTicketRepository()


@pytest.fixture
def jobs():
    from src.adapters.django_app.jobs.repositories import DjangoJobRepository
    return DjangoJobRepository()


class TestDjangoTicketRepository:

    def test_add_e_get(self, repo):
        repo.add(build_ticket('T-1', assigned_by=AssignedBy.SUPERVISOR, created_by='SUP-1'))

        ticket = repo.get_by_id('T-1')

        assert ticket.agent_id == 'AG-01'
        assert ticket.issue_type == IssueType.BOH
        assert ticket.status == TicketStatus.OPEN
        assert ticket.assigned_by == AssignedBy.SUPERVISOR
        assert ticket.issue_date_time == NOW

    def test_get_inexistente(self, repo):
        assert repo.get_by_id('missing') is None

    def test_update_if_status_grava(self, repo):
        repo.add(build_ticket('T-1'))

        ok = repo.update_if_status(
            'T-1',
            TicketStatus.OPEN,
            {'status': TicketStatus.RESOLUTION_REQUESTED, 'resolution_requested_at': NOW},
        )

        assert ok is True
        ticket = repo.get_by_id('T-1')
        assert ticket.status == TicketStatus.RESOLUTION_REQUESTED
        assert ticket.resolution_requested_at == NOW

    def test_update_if_status_status_divergente(self, repo):
        """Outro processo mudou o status: nada é gravado."""
        repo.add(build_ticket('T-1', status=TicketStatus.IN_PROGRESS))

        ok = repo.update_if_status('T-1', TicketStatus.OPEN, {'description': 'Changed text'})

        assert ok is False
        assert repo.get_by_id('T-1').description == 'Fryer temperature alarm'

    def test_violacoes_mais_antigas_primeiro(self, repo):
        repo.add(build_ticket('T-30', hours_ago=30))
        repo.add(build_ticket('T-48', hours_ago=48))
        repo.add(build_ticket('T-2', hours_ago=2))
        resolved = build_ticket('T-72', hours_ago=72, status=TicketStatus.IN_PROGRESS)
        repo.add(resolved)
        repo.update_if_status('T-72', TicketStatus.IN_PROGRESS, {'status': TicketStatus.RESOLVED})

        cutoff = NOW - timedelta(hours=24)

        assert [t.ticket_id for t in repo.list_sla_breaches(cutoff)] == ['T-48', 'T-30']
        assert [t.ticket_id for t in repo.list_sla_breaches(cutoff, offset=1, limit=1)] == ['T-30']
        assert repo.count_sla_breaches(cutoff) == 2

    def test_bulk_set_priority(self, repo):
        repo.add(build_ticket('T-1'))
        repo.add(build_ticket('T-2'))
        repo.add(build_ticket('T-3'))

        rows = repo.bulk_set_priority(['T-1', 'T-3'], TicketPriority.URGENT)

        assert rows == 2
        assert repo.get_by_id('T-1').priority == TicketPriority.URGENT
        assert repo.get_by_id('T-2').priority == TicketPriority.MEDIUM

    def test_consultas_por_agente_ignoram_caixa(self, repo):
        repo.add(build_ticket('T-1', agent_id='ag-01', hours_ago=1, status=TicketStatus.IN_PROGRESS))
        repo.add(build_ticket('T-old', hours_ago=24 * 40))
        repo.update_if_status(
            'T-1', TicketStatus.IN_PROGRESS, {'status': TicketStatus.RESOLVED, 'resolved_at': NOW}
        )

        since = NOW - timedelta(days=7)

        assert [t.ticket_id for t in repo.list_by_agent_since('AG-01', since)] == ['T-1']
        assert [t.ticket_id for t in repo.list_resolved_by_agent_since('AG-01', since)] == ['T-1']

    def test_list_created_by(self, repo):
        repo.add(build_ticket('T-1', hours_ago=3, created_by='SUP-1'))
        repo.add(build_ticket('T-2', hours_ago=1, created_by='SUP-1'))
        repo.add(build_ticket('T-3', created_by='SUP-2'))

        tickets, total = repo.list_created_by('SUP-1', offset=0, limit=10)

        assert total == 2
        assert [t.ticket_id for t in tickets] == ['T-2', 'T-1']


class TestDjangoJobRepository:

    def test_add_save_get(self, jobs):
        job = AsyncJobEntity.queue(
            JobType.EXCEL_EXPORT, ReportPayload('AG-01', ReportPeriod.MONTHLY)
        )
        jobs.add(job)

        job.start_attempt(NOW)
        job.complete(ExportResult('/media/reports/a.xlsx', 'a.xlsx', 'AG-01', 'monthly'), NOW)
        jobs.save(job)

        stored = jobs.get_by_id(job.job_id)
        assert stored.status == JobStatus.COMPLETED
        assert stored.attempts == 1
        assert stored.payload == ReportPayload('AG-01', ReportPeriod.MONTHLY)
        assert stored.result.download_url == '/media/reports/a.xlsx'
        assert stored.error is None

    def test_get_inexistente(self, jobs):
        assert jobs.get_by_id('nope') is None

    def test_listagem_filtrada(self, jobs):
        jobs.add(AsyncJobEntity.queue(JobType.NOTIFICATION, NotificationPayload('hello')))
        jobs.add(AsyncJobEntity.queue(JobType.NOTIFICATION, NotificationPayload('again')))
        jobs.add(AsyncJobEntity.queue(JobType.EMAIL_REPORT, ReportPayload('AG-01')))

        items, total = jobs.list_paginated(job_type=JobType.NOTIFICATION, offset=0, limit=1)

        assert total == 2
        assert len(items) == 1
        assert items[0].job_type == JobType.NOTIFICATION

        _, queued = jobs.list_paginated(status=JobStatus.QUEUED)
        assert queued == 3


class TestBroadcastEAgentes:

    def test_broadcast_sink_grava_mensagem(self):
        from src.adapters.django_app.jobs.models import BroadcastMessageModel
        from src.adapters.django_app.jobs.repositories import DjangoBroadcastSink

        message_id = DjangoBroadcastSink().publish('system', None, 'SLA breached')

        stored = BroadcastMessageModel.objects.get(message_id=message_id)
        assert stored.content == 'SLA breached'
        assert stored.receiver_id is None
        assert stored.message_type == 'BROADCAST'

    def test_diretorio_de_agentes(self):
        from src.adapters.django_app.jobs.models import AgentModel
        from src.adapters.django_app.jobs.repositories import DjangoAgentDirectory

        AgentModel.objects.create(agent_id='AG-01', name='Ana Souza', email='ana@example.com')
        AgentModel.objects.create(agent_id='AG-02', name='Bruno Lima', email='')
        directory = DjangoAgentDirectory()

        assert directory.get_agent('ag-01').email == 'ana@example.com'
        assert directory.get_agent('AG-02').email is None
        assert directory.get_agent('AG-99') is None
