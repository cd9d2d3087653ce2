"""
Use Cases de SLA.

- SlaBreachScanner: escala para URGENT e notifica supervisores
- ListSlaBreachesService: consulta paginada das violações

A varredura não deduplica notificações: rodar de novo com os mesmos
tickets em aberto gera outra notificação. Também não há rollback: se
o enqueue falhar depois da escrita em lote, a prioridade continua
URGENT e o erro sobe para quem chamou.
"""

import logging
from datetime import datetime, timedelta
from typing import Any

from src.core.jobs.producer import JobQueueProducer
from src.core.shared.clock import Clock, utc_now
from src.core.shared.exceptions import ValidationError
from src.core.shared.pagination import PageRequest
from src.core.tickets.dtos import TicketOutputDTO
from src.core.tickets.entities import TicketPriority
from src.core.tickets.ports import TicketRepository

from .dtos import SlaBreachPageDTO, SlaScanResultDTO

logger = logging.getLogger(__name__)

DEFAULT_HOURS = 24
MIN_HOURS = 1


def parse_hours(value: Any, default: int = DEFAULT_HOURS) -> int:
    """
    Valida o limiar em horas.

    Raises:
        ValidationError: Não inteiro ou menor que 1
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError("hours must be an integer", field="hours")
    try:
        hours = int(value)
    except (TypeError, ValueError):
        raise ValidationError("hours must be an integer", field="hours")
    if isinstance(value, float) and value != hours:
        raise ValidationError("hours must be an integer", field="hours")
    if hours < MIN_HOURS:
        raise ValidationError(f"hours must be >= {MIN_HOURS}", field="hours")
    return hours


def breach_cutoff(now: datetime, hours: int) -> datetime:
    return now - timedelta(hours=hours)


class SlaBreachScanner:
    """
    Varredura sob demanda de tickets atrasados.

    Algoritmo:
    1. Buscar tickets não finalizados com issue_date_time < agora - horas
    2. Nenhum → ``{escalated: 0, notified: false}`` e nada mais
    3. Prioridade URGENT em lote
    4. Exatamente um job NOTIFICATION (broadcast, receiver None)

    Example:
        scanner = SlaBreachScanner(ticket_repo, producer)
        result = scanner.scan(hours=24)
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        producer: JobQueueProducer,
        clock: Clock = utc_now,
    ):
        self.ticket_repo = ticket_repo
        self.producer = producer
        self.clock = clock

    def scan(self, hours: int = DEFAULT_HOURS) -> SlaScanResultDTO:
        """
        Raises:
            ValidationError: hours inválido
            QueueNotConfiguredError: fila ausente (prioridade já escalada)
        """
        hours = parse_hours(hours)
        cutoff = breach_cutoff(self.clock(), hours)

        breaches = self.ticket_repo.list_sla_breaches(cutoff)
        if not breaches:
            logger.info(f"[SLA] No breaches older than {hours}h")
            return SlaScanResultDTO()

        ticket_ids = [ticket.ticket_id for ticket in breaches]
        escalated = self.ticket_repo.bulk_set_priority(ticket_ids, TicketPriority.URGENT)
        logger.info(f"[SLA] Escalated {escalated} ticket(s) to URGENT")

        content = (
            f"SLA automation escalated {len(ticket_ids)} breached ticket(s) "
            f"older than {hours}h: {', '.join(ticket_ids)}"
        )
        job = self.producer.enqueue_notification(content, receiver_id=None)
        logger.info(f"[SLA] Notification job {job.job_id} enqueued")

        return SlaScanResultDTO(
            escalated=len(ticket_ids),
            notified=True,
            ticket_ids=ticket_ids,
        )


class ListSlaBreachesService:
    """Use Case: violações de SLA, mais antigas primeiro."""

    def __init__(self, ticket_repo: TicketRepository, clock: Clock = utc_now):
        self.ticket_repo = ticket_repo
        self.clock = clock

    def execute(self, hours: Any, page: PageRequest) -> SlaBreachPageDTO:
        hours = parse_hours(hours)
        cutoff = breach_cutoff(self.clock(), hours)

        tickets = self.ticket_repo.list_sla_breaches(
            cutoff, offset=page.offset, limit=page.limit
        )
        return SlaBreachPageDTO(
            hours=hours,
            threshold=cutoff,
            total=self.ticket_repo.count_sla_breaches(cutoff),
            page=page.page,
            limit=page.limit,
            breaches=[TicketOutputDTO.from_entity(t) for t in tickets],
        )
