"""
Entidades do relatório de desempenho de agentes.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple


class ReportPeriod(Enum):
    """Janela do relatório."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def window(self) -> timedelta:
        return timedelta(days=30 if self is ReportPeriod.MONTHLY else 7)

    @classmethod
    def from_string(cls, value: str) -> "ReportPeriod":
        for period in cls:
            if period.value == str(value).strip().lower():
                return period
        raise ValueError(f"Invalid period: {value}")


@dataclass(frozen=True)
class AgentProfile:
    agent_id: str
    name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class ReportMetrics:
    """
    Métricas agregadas de um agente na janela.

    Attributes:
        total_raised: Tickets abertos na janela
        total_resolved: Desses, quantos estão RESOLVED
        total_rejected: Desses, quantos estão REJECTED
        avg_handle_time_seconds: Média de resolved_at - started_at
        sla_percent: resolved / raised * 100 (2 casas)
    """

    total_raised: int = 0
    total_resolved: int = 0
    total_rejected: int = 0
    avg_handle_time_seconds: int = 0
    sla_percent: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalRaised": self.total_raised,
            "totalResolved": self.total_resolved,
            "totalRejected": self.total_rejected,
            "avgHandleTimeSeconds": self.avg_handle_time_seconds,
            "slaPercent": self.sla_percent,
        }


@dataclass(frozen=True)
class AgentReport:
    period: ReportPeriod
    date_from: datetime
    date_to: datetime
    agent: AgentProfile
    metrics: ReportMetrics

    def rows(self) -> List[Tuple[str, object]]:
        """Linhas Métrica/Valor na ordem da planilha."""
        return [
            ("Agent ID", self.agent.agent_id),
            ("Agent Name", self.agent.name),
            ("Period", self.period.value.upper()),
            ("From", self.date_from.isoformat()),
            ("To", self.date_to.isoformat()),
            ("Total Tickets Raised", self.metrics.total_raised),
            ("Total Tickets Resolved", self.metrics.total_resolved),
            ("Total Tickets Rejected", self.metrics.total_rejected),
            ("AHT (Seconds)", self.metrics.avg_handle_time_seconds),
            ("SLA %", self.metrics.sla_percent),
            ("Generated At", self.date_to.isoformat()),
        ]

    def to_dict(self) -> dict:
        return {
            "period": self.period.value,
            "from": self.date_from.isoformat(),
            "to": self.date_to.isoformat(),
            "agent": {
                "agentId": self.agent.agent_id,
                "name": self.agent.name,
                "email": self.agent.email,
            },
            "metrics": self.metrics.to_dict(),
        }
