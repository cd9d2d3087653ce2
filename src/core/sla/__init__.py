"""
Domínio de SLA - Varredura e escalada de tickets atrasados.

Sob demanda: não há agendamento; quem chama é o endpoint HTTP.
"""

from .dtos import SlaBreachPageDTO, SlaScanResultDTO
from .use_cases import ListSlaBreachesService, SlaBreachScanner, parse_hours

__all__ = [
    "SlaBreachPageDTO",
    "SlaScanResultDTO",
    "ListSlaBreachesService",
    "SlaBreachScanner",
    "parse_hours",
]
