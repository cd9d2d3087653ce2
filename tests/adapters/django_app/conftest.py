"""
Configuração pytest para testes com Django.

Este arquivo configura:
- Django settings para testes (SQLite em memória, fila desligada)
- Container DI com adapters em memória para testes de API
- Client HTTP com ``get_container`` substituído
"""

import tempfile
from unittest.mock import patch

import pytest


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            DEBUG=False,
            SECRET_KEY='test-secret-key',
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.admin',
                'django.contrib.auth',
                'django.contrib.contenttypes',
                'django.contrib.sessions',
                'django.contrib.messages',
                'src.adapters.django_app.tickets',
                'src.adapters.django_app.jobs',
            ],
            ROOT_URLCONF='src.config.urls',
            MIDDLEWARE=[],
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='UTC',
            MEDIA_ROOT=tempfile.mkdtemp(prefix='helpdesk-media-'),
            MEDIA_URL='/media/',
            REPORTS_DIRECTORY='reports',
            EMAIL_BACKEND='django.core.mail.backends.locmem.EmailBackend',
            DEFAULT_FROM_EMAIL='helpdesk@example.com',
            JOB_QUEUE_URL='',
            JOB_QUEUE_NAME='helpdesk-jobs-test',
            JOB_QUEUE_WAIT_SECONDS=1,
            JOB_QUEUE_VISIBILITY_TIMEOUT=60,
            JOB_QUEUE_BATCH_SIZE=5,
            JOB_MAX_ATTEMPTS=3,
            SLA_DEFAULT_HOURS=24,
        )
        django.setup()


@pytest.fixture
def memory_container(clock):
    """
    Container real com todos os adapters de I/O trocados por
    versões em memória.
    """
    from dependency_injector import providers
    from django.conf import settings

    from src.config.container import Container, container_config
    from src.core.jobs.ports import (
        InMemoryBroadcastSink,
        InMemoryJobRepository,
        InMemoryQueueTransport,
    )
    from src.core.reports.entities import AgentProfile
    from src.core.reports.ports import (
        InMemoryAgentDirectory,
        InMemoryReportMailer,
        InMemoryReportStorage,
    )
    from src.core.tickets.ports import InMemoryTicketRepository

    container = Container()
    container.config.from_dict(container_config(settings))

    container.clock.override(providers.Object(clock))
    container.ticket_repository.override(providers.Singleton(InMemoryTicketRepository))
    container.job_repository.override(providers.Singleton(InMemoryJobRepository))
    container.queue_transport.override(providers.Singleton(InMemoryQueueTransport, clock=clock))
    container.broadcast_sink.override(providers.Singleton(InMemoryBroadcastSink))
    container.agent_directory.override(
        providers.Singleton(
            InMemoryAgentDirectory,
            [
                AgentProfile('AG-01', 'Ana Souza', 'ana@example.com'),
                AgentProfile('AG-02', 'Bruno Lima'),
            ],
        )
    )
    container.report_storage.override(providers.Singleton(InMemoryReportStorage))
    container.report_mailer.override(providers.Singleton(InMemoryReportMailer))

    return container


@pytest.fixture
def api_client(memory_container):
    """Client HTTP cujas views usam o ``memory_container``."""
    from django.test import Client

    with patch(
        'src.adapters.django_app.shared.api_views.get_container',
        return_value=memory_container,
    ):
        yield Client()
