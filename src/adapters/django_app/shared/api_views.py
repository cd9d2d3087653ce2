"""
Base das API Views JSON.

Formato:
- Entrada: JSON
- Saída de sucesso: o próprio objeto de resposta
- Saída de erro: ``{error, message, timestamp[, details]}``

Mapeamento de exceções:
    ValidationError              → 400
    InvalidStatusTransitionError → 400
    EntityNotFoundError          → 404
    ConcurrencyError             → 409
    BusinessRuleViolationError   → 422
    QueueNotConfiguredError      → 503
    qualquer outra               → 500 INTERNAL_ERROR
"""

import json
import logging
from typing import Any, Dict, List, Optional

from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.config.container import get_container
from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    ConcurrencyError,
    DomainException,
    EntityNotFoundError,
    InvalidStatusTransitionError,
    QueueNotConfiguredError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def json_response(data: Any, status: int = 200) -> JsonResponse:
    """Resposta JSON de sucesso (aceita listas)."""
    return JsonResponse(data, status=status, safe=False)


def error_response(
    code: str,
    message: str,
    status: int,
    details: Optional[List[Dict[str, str]]] = None,
) -> JsonResponse:
    """
    Cria resposta de erro padronizada.

    Args:
        code: Código estável (VALIDATION_ERROR, NOT_FOUND, ...)
        message: Mensagem legível
        status: HTTP status code
        details: Problemas por campo (opcional)
    """
    body = {
        'error': code,
        'message': message,
        'timestamp': timezone.now().isoformat(),
    }
    if details:
        body['details'] = details
    return JsonResponse(body, status=status)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: Se JSON inválido
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Invalid JSON body: {e}")

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tratamento de erros padronizado
    """

    def get_service(self, service_name: str):
        """Obtém service do container."""
        container = get_container()
        return getattr(container, service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Args:
            e: Exceção capturada

        Returns:
            JsonResponse com erro
        """
        if isinstance(e, ValidationError):
            return error_response(
                e.code,
                e.message,
                400,
                details=e.details,
            )

        if isinstance(e, InvalidStatusTransitionError):
            return error_response(e.code, e.message, 400)

        if isinstance(e, EntityNotFoundError):
            return error_response(e.code, e.message, 404)

        if isinstance(e, ConcurrencyError):
            return error_response(e.code, e.message, 409)

        if isinstance(e, BusinessRuleViolationError):
            return error_response(e.code, e.message, 422)

        if isinstance(e, QueueNotConfiguredError):
            logger.error(f"Enqueue refused: {e}")
            return error_response(e.code, e.message, 503)

        if isinstance(e, DomainException):
            return error_response(e.code, e.message, 400)

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return error_response('INTERNAL_ERROR', 'Internal server error', 500)
