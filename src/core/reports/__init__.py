"""
Domínio de Relatórios - Métricas de desempenho por agente.

Usado pelos handlers EXCEL_EXPORT e EMAIL_REPORT da fila de jobs.
"""

from .entities import AgentProfile, AgentReport, ReportMetrics, ReportPeriod
from .metrics import ReportMetricsBuilder
from .ports import AgentDirectory, ReportMailer, ReportRenderer, ReportStorage

__all__ = [
    "AgentProfile",
    "AgentReport",
    "ReportMetrics",
    "ReportPeriod",
    "ReportMetricsBuilder",
    "AgentDirectory",
    "ReportMailer",
    "ReportRenderer",
    "ReportStorage",
]
