"""
DTOs do Domínio de SLA.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from src.core.tickets.dtos import TicketOutputDTO


@dataclass
class SlaScanResultDTO:
    """Resultado de uma varredura com escalada."""

    escalated: int = 0
    notified: bool = False
    ticket_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "escalated": self.escalated,
            "notified": self.notified,
            "ticketIds": list(self.ticket_ids),
        }


@dataclass
class SlaBreachPageDTO:
    """Página de tickets violando SLA."""

    hours: int
    threshold: datetime
    total: int
    page: int
    limit: int
    breaches: List[TicketOutputDTO] = field(default_factory=list)

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    def to_dict(self) -> dict:
        return {
            "hours": self.hours,
            "threshold": self.threshold.isoformat(),
            "total": self.total,
            "pages": self.pages,
            "currentPage": self.page,
            "breaches": [b.to_dict() for b in self.breaches],
        }
