"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.

Ciclo de vida explícito (nada é criado sob demanda):
- init_container(): cria, configura a partir do Django settings e
  inicializa os resources (conexão com a fila)
- get_container(): devolve o container inicializado
- shutdown_container(): libera os resources

Padrões:
- Resource: Clients externos com init/shutdown (conexão kombu)
- Singleton: Uma instância para toda app (repositories, adapters)
- Factory: Nova instância por chamada (services)

Importado só depois do ``django.setup()`` (AppConfig.ready, views,
admin, management commands), por isso os adapters são importados
diretamente.
"""

import logging
from typing import Optional

from dependency_injector import containers, providers

from src.adapters.django_app.jobs.reporting import (
    DjangoReportMailer,
    DjangoReportStorage,
    OpenpyxlReportRenderer,
)
from src.adapters.django_app.jobs.repositories import (
    DjangoAgentDirectory,
    DjangoBroadcastSink,
    DjangoJobRepository,
)
from src.adapters.django_app.jobs.transport import KombuQueueTransport, init_queue_connection
from src.adapters.django_app.tickets.repositories import DjangoTicketRepository
from src.core.jobs.consumer import JobConsumer
from src.core.jobs.handlers import build_handler_registry
from src.core.jobs.producer import JobQueueProducer
from src.core.jobs.use_cases import (
    EnqueueNotificationService,
    EnqueueReportEmailService,
    EnqueueReportExportService,
    GetJobService,
    ListJobsService,
)
from src.core.reports.metrics import ReportMetricsBuilder
from src.core.shared.clock import utc_now
from src.core.sla.use_cases import ListSlaBreachesService, SlaBreachScanner
from src.core.tickets.state_machine import TicketStateMachine
from src.core.tickets.use_cases import (
    CreateTicketService,
    GetTicketService,
    ListSupervisorActivityService,
    UpdateTicketService,
)

logger = logging.getLogger(__name__)


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: valores vindos do Django settings
    - Infrastructure: conexão da fila, transporte
    - Repositories / Adapters: persistência, planilha, storage, e-mail
    - Services: Use Cases

    Example:
        container = init_container()
        scanner = container.sla_breach_scanner()
        result = scanner.scan(24)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    clock = providers.Object(utc_now)

    # =========================================================================
    # Infrastructure
    # =========================================================================

    queue_connection = providers.Resource(
        init_queue_connection,
        url=config.queue.url,
        transport_options=providers.Dict(
            visibility_timeout=config.queue.visibility_timeout,
        ),
    )

    queue_transport = providers.Singleton(
        KombuQueueTransport,
        connection=queue_connection,
        queue_name=config.queue.name,
        prefetch_count=config.queue.batch_size,
    )

    # =========================================================================
    # Repositories / Adapters (Singleton)
    # =========================================================================

    ticket_repository = providers.Singleton(DjangoTicketRepository)

    job_repository = providers.Singleton(DjangoJobRepository)

    broadcast_sink = providers.Singleton(DjangoBroadcastSink)

    agent_directory = providers.Singleton(DjangoAgentDirectory)

    report_renderer = providers.Singleton(OpenpyxlReportRenderer)

    report_storage = providers.Singleton(
        DjangoReportStorage,
        directory=config.reports.directory,
    )

    report_mailer = providers.Singleton(
        DjangoReportMailer,
        from_email=config.email.from_email,
    )

    # =========================================================================
    # Tickets
    # =========================================================================

    ticket_state_machine = providers.Factory(
        TicketStateMachine,
        ticket_repo=ticket_repository,
        clock=clock,
    )

    create_ticket_service = providers.Factory(
        CreateTicketService,
        ticket_repo=ticket_repository,
    )

    get_ticket_service = providers.Factory(
        GetTicketService,
        ticket_repo=ticket_repository,
    )

    update_ticket_service = providers.Factory(
        UpdateTicketService,
        state_machine=ticket_state_machine,
    )

    supervisor_activity_service = providers.Factory(
        ListSupervisorActivityService,
        ticket_repo=ticket_repository,
    )

    # =========================================================================
    # Jobs
    # =========================================================================

    job_producer = providers.Factory(
        JobQueueProducer,
        job_repo=job_repository,
        transport=queue_transport,
    )

    get_job_service = providers.Factory(GetJobService, job_repo=job_repository)

    list_jobs_service = providers.Factory(ListJobsService, job_repo=job_repository)

    enqueue_report_export_service = providers.Factory(
        EnqueueReportExportService,
        producer=job_producer,
    )

    enqueue_report_email_service = providers.Factory(
        EnqueueReportEmailService,
        producer=job_producer,
    )

    enqueue_notification_service = providers.Factory(
        EnqueueNotificationService,
        producer=job_producer,
    )

    # =========================================================================
    # SLA
    # =========================================================================

    sla_breach_scanner = providers.Factory(
        SlaBreachScanner,
        ticket_repo=ticket_repository,
        producer=job_producer,
        clock=clock,
    )

    list_sla_breaches_service = providers.Factory(
        ListSlaBreachesService,
        ticket_repo=ticket_repository,
        clock=clock,
    )

    # =========================================================================
    # Worker
    # =========================================================================

    report_metrics_builder = providers.Factory(
        ReportMetricsBuilder,
        ticket_repo=ticket_repository,
        agent_directory=agent_directory,
        clock=clock,
    )

    job_handlers = providers.Factory(
        build_handler_registry,
        metrics_builder=report_metrics_builder,
        renderer=report_renderer,
        storage=report_storage,
        mailer=report_mailer,
        sink=broadcast_sink,
        clock=clock,
    )

    job_consumer = providers.Factory(
        JobConsumer,
        job_repo=job_repository,
        transport=queue_transport,
        handlers=job_handlers,
        max_attempts=config.worker.max_attempts,
        batch_size=config.queue.batch_size,
        wait_seconds=config.queue.wait_seconds,
        clock=clock,
    )


# =============================================================================
# Ciclo de vida
# =============================================================================

_container: Optional[Container] = None


def container_config(settings) -> dict:
    """Converte o Django settings no dict do ``providers.Configuration``."""
    return {
        'queue': {
            'url': settings.JOB_QUEUE_URL,
            'name': settings.JOB_QUEUE_NAME,
            'wait_seconds': settings.JOB_QUEUE_WAIT_SECONDS,
            'visibility_timeout': settings.JOB_QUEUE_VISIBILITY_TIMEOUT,
            'batch_size': settings.JOB_QUEUE_BATCH_SIZE,
        },
        'worker': {
            'max_attempts': settings.JOB_MAX_ATTEMPTS,
        },
        'reports': {
            'directory': settings.REPORTS_DIRECTORY,
        },
        'email': {
            'from_email': settings.DEFAULT_FROM_EMAIL,
        },
    }


def init_container(settings=None) -> Container:
    """
    Cria e inicializa o container do processo.

    Idempotente: chamadas seguintes devolvem o mesmo container.
    """
    global _container
    if _container is not None:
        return _container

    if settings is None:
        from django.conf import settings

    container = Container()
    container.config.from_dict(container_config(settings))
    container.init_resources()

    _container = container
    logger.info("DI container initialized")
    return container


def get_container() -> Container:
    """
    Retorna o container inicializado.

    Raises:
        RuntimeError: Se init_container() ainda não foi chamado
    """
    if _container is None:
        raise RuntimeError("DI container not initialized; call init_container() first")
    return _container


def shutdown_container() -> None:
    """Libera os resources (conexão da fila) e descarta o container."""
    global _container
    if _container is None:
        return

    _container.shutdown_resources()
    _container = None
    logger.info("DI container shut down")


def reset_container() -> None:
    """Reseta o container (útil para testes)."""
    shutdown_container()
