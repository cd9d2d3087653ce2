"""
Paginação compartilhada entre os domínios.

Todas as listagens são 1-indexed e limitam ``limit`` a ``MAX_LIMIT``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageRequest:
    """
    Parâmetros de paginação já validados.

    Attributes:
        page: Página atual (começa em 1)
        limit: Itens por página (1..MAX_LIMIT)
    """

    page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_raw(cls, page: Any = None, limit: Any = None) -> "PageRequest":
        """
        Constrói a partir de valores crus (query string).

        Valores acima de MAX_LIMIT são truncados, não recusados.

        Raises:
            ValidationError: Se page/limit não forem inteiros positivos
        """
        page_value = _parse_positive_int(page, "page", default=1)
        limit_value = _parse_positive_int(limit, "limit", default=DEFAULT_LIMIT)
        return cls(page=page_value, limit=min(limit_value, MAX_LIMIT))


def _parse_positive_int(value: Any, name: str, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer", field=name)
    if number < 1:
        raise ValidationError(f"{name} must be >= 1", field=name)
    return number


@dataclass
class PaginatedResultDTO(Generic[T]):
    """
    DTO para resultados paginados.

    Attributes:
        items: Itens da página atual
        total: Total de itens (sem paginação)
        page: Página atual
        limit: Itens por página
    """

    items: List[T]
    total: int
    page: int
    limit: int
    serializer: Optional[Callable[[T], dict]] = field(default=None, repr=False)

    @property
    def pages(self) -> int:
        """Calcula total de páginas."""
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    def to_dict(self, items_key: str = "items") -> dict:
        serialize = self.serializer or (lambda item: item.to_dict())
        return {
            "total": self.total,
            "pages": self.pages,
            "currentPage": self.page,
            items_key: [serialize(item) for item in self.items],
        }
