"""
Exceções de Domínio do Helpdesk Workflow.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas. O atributo
``code`` de cada exceção é exatamente o código devolvido no campo
``error`` das respostas JSON.

Hierarquia:
    DomainException (base)
    ├── ValidationError (VALIDATION_ERROR)
    ├── EntityNotFoundError (NOT_FOUND, JOB_NOT_FOUND, AGENT_NOT_FOUND)
    ├── BusinessRuleViolationError (BUSINESS_RULE_VIOLATION)
    │   └── InvalidStatusTransitionError (INVALID_STATUS_TRANSITION)
    ├── ConcurrencyError (CONCURRENT_MODIFICATION)
    ├── QueueNotConfiguredError (QUEUE_NOT_CONFIGURED)
    └── UnsupportedJobTypeError (UNSUPPORTED_JOB_TYPE)
"""

from typing import Dict, List, Optional


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            state_machine.apply_transition(ticket_id, fields)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando dados fornecidos não atendem aos requisitos
    mínimos para processamento. Nunca chega à máquina de estados.

    Args:
        message: Descrição do problema
        field: Campo inválido (opcional)
        details: Lista de problemas no formato ``{"path", "message"}``

    Example:
        if len(description) < 5:
            raise ValidationError("Description too short", field="description")
    """

    def __init__(
        self,
        message: str,
        field: str = None,
        details: Optional[List[Dict[str, str]]] = None,
    ):
        self.field = field
        self.details = details or (
            [{"path": field, "message": message}] if field else []
        )
        super().__init__(message, "VALIDATION_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.details:
            result["details"] = self.details
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Lançada quando uma busca por ID não retorna resultado. O código
    padrão é NOT_FOUND; jobs e agentes usam códigos próprios.

    Example:
        ticket = repo.get_by_id(ticket_id)
        if not ticket:
            raise EntityNotFoundError(
                "Ticket not found", entity_type="Ticket", entity_id=ticket_id
            )
    """

    def __init__(
        self,
        message: str,
        entity_type: str = None,
        entity_id: str = None,
        code: str = "NOT_FOUND",
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_id:
            result["entityId"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Lançada quando uma operação viola uma regra de negócio
    estabelecida no domínio.

    Example:
        if not agent.email:
            raise BusinessRuleViolationError(
                "Agent has no email configured",
                rule="AGENT_EMAIL_NOT_CONFIGURED",
            )
    """

    def __init__(self, message: str, rule: str = None, code: str = None):
        self.rule = rule
        super().__init__(message, code or rule or "BUSINESS_RULE_VIOLATION")


class InvalidStatusTransitionError(BusinessRuleViolationError):
    """
    Transição de status recusada pela máquina de estados.

    A mensagem é legível por humanos e devolvida como está ao cliente.
    """

    def __init__(self, message: str, current_status: str = None, next_status: str = None):
        self.current_status = current_status
        self.next_status = next_status
        super().__init__(
            message,
            rule="supervisor_cycle",
            code="INVALID_STATUS_TRANSITION",
        )


class ConcurrencyError(DomainException):
    """
    Erro de concorrência/conflito de versão.

    Lançada quando o update condicional não encontra mais o status
    lido, ou seja, outro processo alterou o ticket entre a leitura
    e a escrita.

    Example:
        if not repo.update_if_status(ticket_id, expected, fields):
            raise ConcurrencyError("Ticket was modified concurrently")
    """

    def __init__(self, message: str):
        super().__init__(message, "CONCURRENT_MODIFICATION")


class QueueNotConfiguredError(DomainException):
    """Transporte de fila ausente; nenhum registro de job é criado."""

    def __init__(self, message: str = "Job queue is not configured"):
        super().__init__(message, "QUEUE_NOT_CONFIGURED")


class UnsupportedJobTypeError(DomainException):
    """Nenhum handler registrado para o tipo do job."""

    def __init__(self, job_type: str):
        self.job_type = job_type
        super().__init__(f"Unsupported job type: {job_type}", "UNSUPPORTED_JOB_TYPE")
