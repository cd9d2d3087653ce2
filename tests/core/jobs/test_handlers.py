"""
Testes dos handlers por tipo de job (com ports em memória).
"""

from unittest.mock import Mock

import pytest

from src.core.jobs.entities import (
    EmailResult,
    ExportResult,
    JobType,
    NotificationPayload,
    NotificationResult,
    ReportPayload,
)
from src.core.jobs.handlers import (
    EmailReportHandler,
    ExcelExportHandler,
    NotificationHandler,
    build_handler_registry,
)
from src.core.jobs.ports import InMemoryBroadcastSink
from src.core.reports.entities import AgentProfile, ReportPeriod
from src.core.reports.metrics import ReportMetricsBuilder
from src.core.reports.ports import (
    InMemoryAgentDirectory,
    InMemoryReportMailer,
    InMemoryReportStorage,
)
from src.core.shared.exceptions import BusinessRuleViolationError, EntityNotFoundError

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer():
    renderer = Mock()
    renderer.render.return_value = b"xlsx-bytes"
    return renderer


@pytest.fixture
def builder(ticket_repo, clock):
    agents = InMemoryAgentDirectory(
        [
            AgentProfile("AG-01", "Ana Souza", "ana@example.com"),
            AgentProfile("AG-02", "Bruno Lima"),
        ]
    )
    return ReportMetricsBuilder(ticket_repo, agents, clock=clock)


class TestExcelExportHandler:

    def test_gera_arquivo_baixavel(self, builder, renderer, clock):
        storage = InMemoryReportStorage(base_url="/media/reports/")
        handler = ExcelExportHandler(builder, renderer, storage, clock=clock)

        result = handler(ReportPayload("ag-01", ReportPeriod.MONTHLY))

        assert result == ExportResult(
            download_url="/media/reports/AG-01-monthly-1710072000000.xlsx",
            file_name="AG-01-monthly-1710072000000.xlsx",
            agent_id="AG-01",
            period="monthly",
        )
        assert storage.files[result.file_name] == b"xlsx-bytes"

    def test_agente_desconhecido_propaga(self, builder, renderer):
        handler = ExcelExportHandler(builder, renderer, InMemoryReportStorage())
        with pytest.raises(EntityNotFoundError):
            handler(ReportPayload("ghost"))


class TestEmailReportHandler:

    def test_envia_para_o_agente(self, builder, renderer):
        mailer = InMemoryReportMailer()

        result = EmailReportHandler(builder, renderer, mailer)(ReportPayload("AG-01"))

        assert result == EmailResult(sent_to="ana@example.com", agent_id="AG-01", period="weekly")
        assert mailer.sent[0]["attachment"] == "AG-01-weekly-report.xlsx"

    def test_agente_sem_email(self, builder, renderer):
        mailer = InMemoryReportMailer()

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            EmailReportHandler(builder, renderer, mailer)(ReportPayload("AG-02"))

        assert exc_info.value.code == "AGENT_EMAIL_NOT_CONFIGURED"
        assert mailer.sent == []


class TestNotificationHandler:

    def test_grava_broadcast(self):
        sink = InMemoryBroadcastSink()

        result = NotificationHandler(sink)(NotificationPayload(content="hello", receiver_id="AG-01"))

        assert result == NotificationResult(message_id=sink.messages[0]["messageId"])
        assert sink.messages[0]["type"] == "BROADCAST"
        assert sink.messages[0]["receiverId"] == "AG-01"


def test_registry_cobre_todos_os_tipos(builder, renderer):
    registry = build_handler_registry(
        builder, renderer, InMemoryReportStorage(), InMemoryReportMailer(), InMemoryBroadcastSink()
    )
    assert set(registry) == set(JobType)
