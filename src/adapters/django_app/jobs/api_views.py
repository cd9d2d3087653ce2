"""
API Views JSON de relatórios, notificações e status de jobs.

Endpoints (montados em /api/analytics/):
- POST /agent/<id>/report/export/  - Enfileira EXCEL_EXPORT (202)
- POST /agent/<id>/report/email/   - Enfileira EMAIL_REPORT (202)
- POST /notifications/             - Enfileira NOTIFICATION (202)
- GET  /jobs/<id>/                 - Status de um job
- GET  /jobs/?page&limit&status&type - Jobs paginados
"""

import logging

from django.http import HttpRequest, JsonResponse

from src.core.jobs.dtos import ListJobsQueryDTO

from ..shared.api_views import BaseAPIView, json_response

logger = logging.getLogger(__name__)


class _EnqueueReportView(BaseAPIView):
    """Base dos endpoints de relatório; ``period`` no body ou na query."""

    service_name = None

    def post(self, request: HttpRequest, agent_id: str) -> JsonResponse:
        try:
            data = self.parse_body(request)
            period = data.get('period') or request.GET.get('period')
            enqueued = self.get_service(self.service_name).execute(agent_id, period)
            return json_response(enqueued.to_dict(), status=202)

        except Exception as e:
            return self.handle_exception(e)


class ReportExportAPIView(_EnqueueReportView):
    """POST /api/analytics/agent/<id>/report/export/ {period}"""

    service_name = 'enqueue_report_export_service'


class ReportEmailAPIView(_EnqueueReportView):
    """POST /api/analytics/agent/<id>/report/email/ {period}"""

    service_name = 'enqueue_report_email_service'


class NotificationAPIView(BaseAPIView):
    """
    POST /api/analytics/notifications/

    Body JSON:
    {
        "content": "string (obrigatório)",
        "receiverId": "string (opcional, ausente = todos)",
        "senderId": "string (opcional, default system)"
    }
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            enqueued = self.get_service('enqueue_notification_service').execute(
                self.parse_body(request)
            )
            return json_response(enqueued.to_dict(), status=202)

        except Exception as e:
            return self.handle_exception(e)


class JobDetailAPIView(BaseAPIView):
    """GET /api/analytics/jobs/<id>/"""

    def get(self, request: HttpRequest, job_id: str) -> JsonResponse:
        try:
            job = self.get_service('get_job_service').execute(job_id)
            return json_response(job.to_status_dict())

        except Exception as e:
            return self.handle_exception(e)


class JobListAPIView(BaseAPIView):
    """GET /api/analytics/jobs/?page&limit&status&type"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            query = ListJobsQueryDTO.from_params(request.GET)
            result = self.get_service('list_jobs_service').execute(query)
            return json_response(result.to_dict())

        except Exception as e:
            return self.handle_exception(e)
