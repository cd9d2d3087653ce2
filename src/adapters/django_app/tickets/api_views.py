"""
API Views JSON para o domínio de Tickets.

Endpoints:
- POST  /api/tickets/                        - Registrar ticket
- GET   /api/tickets/<id>/                   - Obter ticket
- PATCH /api/tickets/<id>/                   - Atualizar (TicketStateMachine)
- GET   /api/supervisors/<id>/activity/      - Tickets criados pelo supervisor
- POST  /api/analytics/sla/automate/         - Varredura + escalada de SLA
- GET   /api/analytics/sla/breaches/         - Violações de SLA paginadas
"""

import logging

from django.http import HttpRequest, JsonResponse

from src.core.shared.pagination import PageRequest
from src.core.tickets.dtos import CreateTicketInputDTO, TicketUpdateInputDTO

from ..shared.api_views import BaseAPIView, json_response

logger = logging.getLogger(__name__)


class TicketAPIListView(BaseAPIView):
    """
    POST /api/tickets/ - Registra ticket.

    Body JSON:
    {
        "ticketId": "string (opcional, sync offline)",
        "agentId": "string (obrigatório)",
        "issueType": "FOH|BOH|KIOSK|other (obrigatório)",
        "description": "string 5..1000 (obrigatório)",
        "status": "OPEN|ASSIGNED|... (opcional)",
        "issueDateTime": "ISO-8601 ou epoch ms (opcional)",
        "assignedBy": "SUPERVISOR|SYSTEM (opcional)",
        "createdBy": "string (opcional)",
        "callDuration": "number (opcional)"
    }
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            input_dto = CreateTicketInputDTO.from_request(self.parse_body(request))
            output, created = self.get_service('create_ticket_service').execute(input_dto)

            if created:
                logger.info(f"API: Ticket criado: {output.ticket_id}")
            return json_response(output.to_dict(), status=201 if created else 200)

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIDetailView(BaseAPIView):
    """
    GET   /api/tickets/<id>/ - Obter ticket
    PATCH /api/tickets/<id>/ - Atualizar ticket
    """

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            ticket = self.get_service('get_ticket_service').execute(pk)
            return json_response(ticket.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Atualiza ticket parcialmente.

        Body JSON (pelo menos um campo):
        {
            "status": "IN_PROGRESS|RESOLUTION_REQUESTED|RESOLVED|...",
            "description": "string",
            "resolutionNotes": "string",
            "rejectionReason": "string",
            "startedAt" / "resolutionRequestedAt" / "resolvedAt" / "rejectedAt":
                "ISO-8601 ou epoch ms"
        }
        """
        try:
            input_dto = TicketUpdateInputDTO.from_request(pk, self.parse_body(request))
            self.get_service('update_ticket_service').execute(input_dto)
            return json_response({'ok': True})

        except Exception as e:
            return self.handle_exception(e)


class SupervisorActivityAPIView(BaseAPIView):
    """GET /api/supervisors/<id>/activity/?page&limit"""

    def get(self, request: HttpRequest, supervisor_id: str) -> JsonResponse:
        try:
            page = PageRequest.from_raw(request.GET.get('page'), request.GET.get('limit'))
            result = self.get_service('supervisor_activity_service').execute(supervisor_id, page)
            return json_response(result.to_dict())

        except Exception as e:
            return self.handle_exception(e)


class SlaAutomateAPIView(BaseAPIView):
    """
    POST /api/analytics/sla/automate/

    Body JSON: {"hours": 24}
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)
            result = self.get_service('sla_breach_scanner').scan(data.get('hours'))
            return json_response({'ok': True, **result.to_dict()})

        except Exception as e:
            return self.handle_exception(e)


class SlaBreachesAPIView(BaseAPIView):
    """GET /api/analytics/sla/breaches/?hours&page&limit"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            page = PageRequest.from_raw(request.GET.get('page'), request.GET.get('limit'))
            result = self.get_service('list_sla_breaches_service').execute(
                request.GET.get('hours'), page
            )
            return json_response(result.to_dict())

        except Exception as e:
            return self.handle_exception(e)
