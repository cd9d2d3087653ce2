"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Paginação
- Relógio (Clock) injetável
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ConcurrencyError,
    QueueNotConfiguredError,
    UnsupportedJobTypeError,
)
from .pagination import PageRequest, PaginatedResultDTO

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "InvalidStatusTransitionError",
    "ConcurrencyError",
    "QueueNotConfiguredError",
    "UnsupportedJobTypeError",
    "PageRequest",
    "PaginatedResultDTO",
]
