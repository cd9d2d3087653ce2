"""
Testes do ReportMetricsBuilder.
"""

from datetime import timedelta

import pytest

from src.core.reports.entities import AgentProfile, ReportPeriod
from src.core.reports.metrics import ReportMetricsBuilder
from src.core.reports.ports import InMemoryAgentDirectory
from src.core.shared.exceptions import EntityNotFoundError
from src.core.tickets.entities import TicketStatus

from tests.conftest import NOW

pytestmark = pytest.mark.unit


@pytest.fixture
def agents():
    return InMemoryAgentDirectory([AgentProfile("AG-01", "Ana Souza", "ana@example.com")])


@pytest.fixture
def builder(ticket_repo, agents, clock):
    return ReportMetricsBuilder(ticket_repo, agents, clock=clock)


def _resolve(ticket_repo, ticket, started_hours_ago, handle_minutes):
    started = NOW - timedelta(hours=started_hours_ago)
    ticket_repo.update_if_status(
        ticket.ticket_id,
        ticket.status,
        {
            "status": TicketStatus.RESOLVED,
            "started_at": started,
            "resolved_at": started + timedelta(minutes=handle_minutes),
        },
    )


class TestReportMetricsBuilder:

    def test_metricas_semanais(self, builder, ticket_repo, make_ticket):
        t1 = make_ticket(issue_date_time=NOW - timedelta(days=1))
        t2 = make_ticket(issue_date_time=NOW - timedelta(days=2))
        t3 = make_ticket(issue_date_time=NOW - timedelta(days=3))
        make_ticket(issue_date_time=NOW - timedelta(days=9))  # fora da janela
        make_ticket(agent_id="AG-02", issue_date_time=NOW - timedelta(days=1))

        _resolve(ticket_repo, t1, started_hours_ago=5, handle_minutes=10)
        _resolve(ticket_repo, t2, started_hours_ago=30, handle_minutes=20)
        ticket_repo.update_if_status(t3.ticket_id, TicketStatus.OPEN, {"status": TicketStatus.REJECTED})

        report = builder.build("ag-01", ReportPeriod.WEEKLY)

        assert report.agent.agent_id == "AG-01"
        assert report.date_from == NOW - timedelta(days=7)
        assert report.date_to == NOW
        assert report.metrics.to_dict() == {
            "totalRaised": 3,
            "totalResolved": 2,
            "totalRejected": 1,
            "avgHandleTimeSeconds": 900,
            "slaPercent": 66.67,
        }

    def test_mensal_cobre_30_dias(self, builder, make_ticket):
        make_ticket(issue_date_time=NOW - timedelta(days=20))

        report = builder.build("AG-01", ReportPeriod.MONTHLY)

        assert report.metrics.total_raised == 1
        assert report.metrics.sla_percent == 0.0

    def test_sem_tickets(self, builder):
        metrics = builder.build("AG-01", ReportPeriod.WEEKLY).metrics
        assert metrics.total_raised == 0
        assert metrics.avg_handle_time_seconds == 0

    def test_agente_desconhecido(self, builder):
        with pytest.raises(EntityNotFoundError) as exc_info:
            builder.build("nobody", ReportPeriod.WEEKLY)
        assert exc_info.value.code == "AGENT_NOT_FOUND"

    def test_linhas_da_planilha(self, builder):
        rows = dict(builder.build("AG-01", ReportPeriod.WEEKLY).rows())
        assert rows["Agent Name"] == "Ana Souza"
        assert rows["Period"] == "WEEKLY"
        assert rows["SLA %"] == 0.0
