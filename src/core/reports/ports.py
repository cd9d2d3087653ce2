"""
Ports do domínio de relatórios.

Renderização de planilha, armazenamento de arquivo e envio de e-mail
são funções opacas para o core; os adapters Django implementam cada uma.
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import AgentProfile, AgentReport


@runtime_checkable
class AgentDirectory(Protocol):
    def get_agent(self, agent_id: str) -> Optional[AgentProfile]:
        """Busca agente por ID (sem diferenciar maiúsculas)."""
        ...


class ReportRenderer(Protocol):
    def render(self, report: AgentReport) -> bytes:
        """Gera o arquivo .xlsx do relatório."""
        ...


class ReportStorage(Protocol):
    def save(self, file_name: str, content: bytes) -> str:
        """
        Persiste o arquivo em local baixável.

        Returns:
            URL de download
        """
        ...


class ReportMailer(Protocol):
    def send_report(self, report: AgentReport, attachment_name: str, content: bytes) -> str:
        """
        Envia o relatório por e-mail ao agente.

        Returns:
            Endereço do destinatário
        """
        ...


class InMemoryAgentDirectory:
    """Diretório de agentes em memória (testes)."""

    def __init__(self, agents: Optional[List[AgentProfile]] = None):
        self._agents: Dict[str, AgentProfile] = {}
        for agent in agents or []:
            self.add(agent)

    def add(self, agent: AgentProfile) -> None:
        self._agents[agent.agent_id.lower()] = agent

    def get_agent(self, agent_id: str) -> Optional[AgentProfile]:
        return self._agents.get(str(agent_id).lower())


class InMemoryReportStorage:
    def __init__(self, base_url: str = "/media/"):
        self.base_url = base_url
        self.files: Dict[str, bytes] = {}

    def save(self, file_name: str, content: bytes) -> str:
        self.files[file_name] = content
        return f"{self.base_url}{file_name}"


class InMemoryReportMailer:
    def __init__(self):
        self.sent: List[dict] = []

    def send_report(self, report, attachment_name, content) -> str:
        self.sent.append(
            {"to": report.agent.email, "attachment": attachment_name, "content": content}
        )
        return report.agent.email
