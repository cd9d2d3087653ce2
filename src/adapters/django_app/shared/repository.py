"""
Helpers de repositório compartilhados pelos adapters Django.

Princípios:
- Repositórios são stateless
- Não contêm lógica de negócio
- Apenas persistência e queries
"""

from typing import List, Optional, Tuple, TypeVar
import logging

from django.db import models
from django.db.models import QuerySet

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=models.Model)


def slice_queryset(queryset: QuerySet, offset: int = 0, limit: Optional[int] = None) -> QuerySet:
    """Aplica offset/limit (LIMIT/OFFSET no SQL)."""
    if limit is None:
        return queryset[offset:] if offset else queryset
    return queryset[offset:offset + limit]


def paginate_queryset(
    queryset: QuerySet,
    offset: int = 0,
    limit: Optional[int] = None,
) -> Tuple[List[M], int]:
    """
    Conta e fatia um queryset.

    Returns:
        Tupla (models da página, total sem paginação)
    """
    total = queryset.count()
    return list(slice_queryset(queryset, offset, limit)), total
