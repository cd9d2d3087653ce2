"""
Cálculo das métricas de desempenho de um agente.
"""

import logging

from src.core.shared.clock import Clock, utc_now
from src.core.shared.exceptions import EntityNotFoundError
from src.core.tickets.entities import TicketStatus
from src.core.tickets.ports import TicketRepository

from .entities import AgentReport, ReportMetrics, ReportPeriod
from .ports import AgentDirectory

logger = logging.getLogger(__name__)


class ReportMetricsBuilder:
    """
    Monta o AgentReport de um agente para um período.

    Args:
        ticket_repo: Fonte dos tickets
        agent_directory: Cadastro de agentes
        clock: Fonte do "agora" (fim da janela)

    Example:
        builder = ReportMetricsBuilder(ticket_repo, agents)
        report = builder.build("AG-01", ReportPeriod.WEEKLY)
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        agent_directory: AgentDirectory,
        clock: Clock = utc_now,
    ):
        self.ticket_repo = ticket_repo
        self.agent_directory = agent_directory
        self.clock = clock

    def build(self, agent_id: str, period: ReportPeriod) -> AgentReport:
        """
        Raises:
            EntityNotFoundError: AGENT_NOT_FOUND se o agente não existe
        """
        agent = self.agent_directory.get_agent(agent_id)
        if agent is None:
            raise EntityNotFoundError(
                "Agent not found",
                entity_type="Agent",
                entity_id=agent_id,
                code="AGENT_NOT_FOUND",
            )

        now = self.clock()
        since = now - period.window

        raised = self.ticket_repo.list_by_agent_since(agent.agent_id, since)
        total_raised = len(raised)
        total_resolved = sum(1 for t in raised if t.status == TicketStatus.RESOLVED)
        total_rejected = sum(1 for t in raised if t.status == TicketStatus.REJECTED)

        handle_times = [
            (t.resolved_at - t.started_at).total_seconds()
            for t in self.ticket_repo.list_resolved_by_agent_since(agent.agent_id, since)
            if t.started_at is not None
        ]
        avg_handle_time = int(sum(handle_times) / len(handle_times)) if handle_times else 0
        sla_percent = (
            round(total_resolved / total_raised * 100, 2) if total_raised else 0.0
        )

        logger.debug(
            f"Report {agent.agent_id}/{period.value}: raised={total_raised} "
            f"resolved={total_resolved} aht={avg_handle_time}s"
        )

        return AgentReport(
            period=period,
            date_from=since,
            date_to=now,
            agent=agent,
            metrics=ReportMetrics(
                total_raised=total_raised,
                total_resolved=total_resolved,
                total_rejected=total_rejected,
                avg_handle_time_seconds=avg_handle_time,
                sla_percent=sla_percent,
            ),
        )
