"""
Handlers por tipo de job.

Cada handler recebe o payload tipado e devolve o resultado tipado
correspondente. Exceções sobem para o JobConsumer, que as registra
no job.
"""

import logging
from typing import Callable, Dict

from src.core.reports.metrics import ReportMetricsBuilder
from src.core.reports.ports import ReportMailer, ReportRenderer, ReportStorage
from src.core.shared.clock import Clock, to_epoch_ms, utc_now
from src.core.shared.exceptions import BusinessRuleViolationError

from .entities import (
    EmailResult,
    ExportResult,
    JobPayload,
    JobResult,
    JobType,
    NotificationPayload,
    NotificationResult,
    ReportPayload,
)
from .ports import BroadcastSink

logger = logging.getLogger(__name__)

JobHandler = Callable[[JobPayload], JobResult]


class ExcelExportHandler:
    """EXCEL_EXPORT: métricas → planilha → arquivo baixável."""

    def __init__(
        self,
        metrics_builder: ReportMetricsBuilder,
        renderer: ReportRenderer,
        storage: ReportStorage,
        clock: Clock = utc_now,
    ):
        self.metrics_builder = metrics_builder
        self.renderer = renderer
        self.storage = storage
        self.clock = clock

    def __call__(self, payload: ReportPayload) -> ExportResult:
        report = self.metrics_builder.build(payload.agent_id, payload.period)
        content = self.renderer.render(report)

        file_name = (
            f"{report.agent.agent_id}-{payload.period.value}-{to_epoch_ms(self.clock())}.xlsx"
        )
        download_url = self.storage.save(file_name, content)

        logger.info(f"[JOB] Report exported to {download_url}")
        return ExportResult(
            download_url=download_url,
            file_name=file_name,
            agent_id=report.agent.agent_id,
            period=payload.period.value,
        )


class EmailReportHandler:
    """EMAIL_REPORT: métricas → planilha → e-mail para o agente."""

    def __init__(
        self,
        metrics_builder: ReportMetricsBuilder,
        renderer: ReportRenderer,
        mailer: ReportMailer,
    ):
        self.metrics_builder = metrics_builder
        self.renderer = renderer
        self.mailer = mailer

    def __call__(self, payload: ReportPayload) -> EmailResult:
        report = self.metrics_builder.build(payload.agent_id, payload.period)
        if not report.agent.email:
            raise BusinessRuleViolationError(
                f"Agent {report.agent.agent_id} has no email configured",
                rule="AGENT_EMAIL_NOT_CONFIGURED",
            )

        content = self.renderer.render(report)
        attachment_name = f"{report.agent.agent_id}-{payload.period.value}-report.xlsx"
        sent_to = self.mailer.send_report(report, attachment_name, content)

        logger.info(f"[JOB] Report emailed to {sent_to}")
        return EmailResult(
            sent_to=sent_to,
            agent_id=report.agent.agent_id,
            period=payload.period.value,
        )


class NotificationHandler:
    """NOTIFICATION: grava mensagem BROADCAST."""

    def __init__(self, sink: BroadcastSink):
        self.sink = sink

    def __call__(self, payload: NotificationPayload) -> NotificationResult:
        message_id = self.sink.publish(
            sender_id=payload.sender_id,
            receiver_id=payload.receiver_id,
            content=payload.content,
        )
        return NotificationResult(message_id=message_id)


def build_handler_registry(
    metrics_builder: ReportMetricsBuilder,
    renderer: ReportRenderer,
    storage: ReportStorage,
    mailer: ReportMailer,
    sink: BroadcastSink,
    clock: Clock = utc_now,
) -> Dict[JobType, JobHandler]:
    """Registro padrão tipo → handler usado pelo worker."""
    return {
        JobType.EXCEL_EXPORT: ExcelExportHandler(metrics_builder, renderer, storage, clock),
        JobType.EMAIL_REPORT: EmailReportHandler(metrics_builder, renderer, mailer),
        JobType.NOTIFICATION: NotificationHandler(sink),
    }
