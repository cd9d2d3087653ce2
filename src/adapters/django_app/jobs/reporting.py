"""
Adapters dos ports de relatório.

- OpenpyxlReportRenderer: planilha .xlsx (openpyxl)
- DjangoReportStorage: arquivo no storage padrão do Django (MEDIA)
- DjangoReportMailer: e-mail com anexo via django.core.mail
"""

from io import BytesIO
import logging
import posixpath

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.core.mail import EmailMessage
from openpyxl import Workbook
from openpyxl.styles import Font

from src.core.reports.entities import AgentReport
from src.core.shared.exceptions import BusinessRuleViolationError

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


class OpenpyxlReportRenderer:
    """Uma aba "Agent Report" com colunas Metric / Value."""

    sheet_title = 'Agent Report'

    def render(self, report: AgentReport) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.sheet_title

        sheet.append(['Metric', 'Value'])
        for cell in sheet[1]:
            cell.font = Font(bold=True)

        for metric, value in report.rows():
            sheet.append([metric, value])

        sheet.column_dimensions['A'].width = 28
        sheet.column_dimensions['B'].width = 36

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()


class DjangoReportStorage:
    """
    Salva o relatório no ``default_storage``.

    Args:
        directory: Subpasta dentro de MEDIA_ROOT
    """

    def __init__(self, directory: str = 'reports'):
        self.directory = directory

    def save(self, file_name: str, content: bytes) -> str:
        path = default_storage.save(posixpath.join(self.directory, file_name), ContentFile(content))
        url = default_storage.url(path)
        logger.info(f"Report stored at {path}")
        return url


class DjangoReportMailer:
    """
    Envia o relatório ao e-mail do agente.

    Raises:
        BusinessRuleViolationError: EMAIL_NOT_CONFIGURED se não há SMTP
    """

    def __init__(self, from_email: str = None):
        self.from_email = from_email

    def _is_configured(self) -> bool:
        backend = getattr(settings, 'EMAIL_BACKEND', '')
        if not backend.endswith('smtp.EmailBackend'):
            return True
        return bool(getattr(settings, 'EMAIL_HOST', None) and getattr(settings, 'EMAIL_HOST_USER', None))

    def send_report(self, report: AgentReport, attachment_name: str, content: bytes) -> str:
        if not self._is_configured():
            raise BusinessRuleViolationError(
                "Email transport is not configured",
                rule="EMAIL_NOT_CONFIGURED",
            )

        message = EmailMessage(
            subject=f"Performance Report ({report.period.value}) - {report.agent.name}",
            body=(
                f"Hello {report.agent.name},\n\n"
                f"Attached is your {report.period.value} performance report "
                f"({report.date_from:%Y-%m-%d} to {report.date_to:%Y-%m-%d}).\n"
            ),
            from_email=self.from_email,
            to=[report.agent.email],
        )
        message.attach(attachment_name, content, XLSX_CONTENT_TYPE)
        message.send(fail_silently=False)

        logger.info(f"Report {attachment_name} sent to {report.agent.email}")
        return report.agent.email
