"""
Testes da entidade AsyncJob e da união etiquetada payload/result.
"""

import pytest

from src.core.jobs.entities import (
    AsyncJobEntity,
    EmailResult,
    ExportResult,
    JobStatus,
    JobType,
    NotificationPayload,
    NotificationResult,
    ReportPayload,
    parse_payload,
)
from src.core.reports.entities import ReportPeriod
from src.core.shared.exceptions import ValidationError

from tests.conftest import NOW

pytestmark = pytest.mark.unit


class TestQueue:

    def test_novo_job_em_queued(self):
        job = AsyncJobEntity.queue(JobType.NOTIFICATION, NotificationPayload(content="hi"))

        assert job.status == JobStatus.QUEUED
        assert job.attempts == 0
        assert job.result is None and job.error is None
        assert job.to_message() == {
            "jobId": job.job_id,
            "type": "NOTIFICATION",
            "payload": {"content": "hi", "receiverId": None, "senderId": "system"},
        }

    def test_payload_incompativel_com_tipo(self):
        with pytest.raises(ValidationError):
            AsyncJobEntity.queue(JobType.EXCEL_EXPORT, NotificationPayload(content="hi"))


class TestLifecycle:

    def _job(self):
        return AsyncJobEntity.queue(JobType.EXCEL_EXPORT, ReportPayload("AG-01", ReportPeriod.WEEKLY))

    def test_tentativa_incrementa_e_limpa_erro(self):
        job = self._job()
        job.error = "previous"

        job.start_attempt(NOW)

        assert job.status == JobStatus.PROCESSING
        assert job.attempts == 1
        assert job.error is None
        assert job.updated_at == NOW

    def test_complete_exige_resultado_do_tipo(self):
        job = self._job()
        job.start_attempt(NOW)

        with pytest.raises(TypeError):
            job.complete(EmailResult(sent_to="a@b.c", agent_id="AG-01", period="weekly"), NOW)

        job.complete(ExportResult("/media/x.xlsx", "x.xlsx", "AG-01", "weekly"), NOW)
        assert job.status == JobStatus.COMPLETED
        assert job.to_status_dict()["result"]["downloadUrl"] == "/media/x.xlsx"
        assert job.is_terminal is True

    def test_falha_abaixo_do_teto(self):
        job = self._job()
        job.start_attempt(NOW)

        assert job.fail("boom", max_attempts=3, now=NOW) == JobStatus.FAILED
        assert job.error == "boom"
        assert job.is_terminal is False

    def test_falha_no_teto_e_permanente(self):
        job = self._job()
        for _ in range(3):
            job.start_attempt(NOW)

        assert job.fail("boom", max_attempts=3, now=NOW) == JobStatus.FAILED_PERMANENT
        assert job.is_terminal is True

    def test_erro_nunca_vazio(self):
        job = self._job()
        job.start_attempt(NOW)
        job.fail("", max_attempts=3, now=NOW)
        assert job.error


class TestPayloadParsing:

    def test_report_payload_default_weekly(self):
        payload = parse_payload(JobType.EMAIL_REPORT, {"agentId": "AG-01"})
        assert payload == ReportPayload("AG-01", ReportPeriod.WEEKLY)

    def test_report_payload_sem_agente(self):
        with pytest.raises(ValidationError):
            parse_payload(JobType.EXCEL_EXPORT, {"period": "monthly"})

    def test_periodo_invalido(self):
        with pytest.raises(ValidationError):
            parse_payload(JobType.EXCEL_EXPORT, {"agentId": "AG-01", "period": "daily"})

    def test_notification_sem_conteudo(self):
        with pytest.raises(ValidationError):
            parse_payload(JobType.NOTIFICATION, {"content": "   "})

    def test_payload_nao_objeto(self):
        with pytest.raises(ValidationError):
            parse_payload(JobType.NOTIFICATION, "hello")

    def test_status_dict(self):
        job = AsyncJobEntity.queue(JobType.NOTIFICATION, NotificationPayload(content="hi"))
        job.start_attempt(NOW)
        job.complete(NotificationResult(message_id="m-1"), NOW)

        assert job.to_status_dict() == {
            "jobId": job.job_id,
            "type": "NOTIFICATION",
            "status": "COMPLETED",
            "result": {"messageId": "m-1"},
            "error": None,
            "attempts": 1,
            "updatedAt": NOW.isoformat(),
        }
