"""
Configurações globais do Pytest para o Helpdesk.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures compartilhadas pelos testes de core e adapters.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest


NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Relógio controlável: chamar devolve o "agora" atual."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture
def clock():
    """Relógio congelado em NOW."""
    return FrozenClock()


@pytest.fixture
def ticket_repo():
    from src.core.tickets.ports import InMemoryTicketRepository
    return InMemoryTicketRepository()


@pytest.fixture
def job_repo():
    from src.core.jobs.ports import InMemoryJobRepository
    return InMemoryJobRepository()


@pytest.fixture
def transport(clock):
    """Fila em memória com visibility timeout de 60s no relógio congelado."""
    from src.core.jobs.ports import InMemoryQueueTransport
    return InMemoryQueueTransport(visibility_timeout=60, clock=clock)


@pytest.fixture
def make_ticket(ticket_repo):
    """Factory: cria e persiste um ticket no repositório em memória."""
    from src.core.tickets.entities import IssueType, TicketEntity

    def _make(**kwargs):
        defaults = {
            "agent_id": "AG-01",
            "issue_type": IssueType.KIOSK,
            "description": "Kiosk screen frozen",
        }
        defaults.update(kwargs)
        ticket = TicketEntity.create(**defaults)
        ticket_repo.add(ticket)
        return ticket

    return _make


def pytest_configure(config):
    """Configuração do pytest."""
    config.addinivalue_line("markers", "unit: testes de unidade (sem Django)")
    config.addinivalue_line("markers", "integration: testes com banco/Django")
