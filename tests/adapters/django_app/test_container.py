"""
Testes do ciclo de vida do container DI e do comando run_job_worker.
"""

from io import StringIO
from unittest.mock import patch

import pytest
from dependency_injector import providers
from django.conf import settings
from django.core.management import CommandError, call_command

from src.adapters.django_app.jobs.repositories import DjangoJobRepository
from src.adapters.django_app.jobs.transport import KombuQueueTransport
from src.config import container as container_module


WORKER = 'src.adapters.django_app.jobs.management.commands.run_job_worker'


@pytest.fixture
def fresh_container():
    """Descarta o container do processo e restaura ao final."""
    container_module.reset_container()
    yield
    container_module.reset_container()
    container_module.init_container()


class TestContainerLifecycle:

    def test_get_sem_init_falha(self, fresh_container):
        with pytest.raises(RuntimeError):
            container_module.get_container()

    def test_init_idempotente(self, fresh_container):
        first = container_module.init_container(settings)
        second = container_module.init_container(settings)

        assert first is second
        assert container_module.get_container() is first

    def test_fila_sem_url(self, fresh_container):
        container = container_module.init_container(settings)

        transport = container.queue_transport()

        assert isinstance(transport, KombuQueueTransport)
        assert transport.is_configured() is False
        assert transport.queue_name == 'helpdesk-jobs-test'

    def test_adapters_django(self, fresh_container):
        container = container_module.init_container(settings)

        assert isinstance(container.job_repository(), DjangoJobRepository)
        assert container.job_consumer().max_attempts == 3

    def test_shutdown(self, fresh_container):
        container_module.init_container(settings)
        container_module.shutdown_container()

        with pytest.raises(RuntimeError):
            container_module.get_container()


class TestRunJobWorkerCommand:

    def test_fila_nao_configurada(self):
        with pytest.raises(CommandError):
            call_command('run_job_worker', '--once')

    def test_once_processa_um_lote(self, memory_container):
        memory_container.job_producer().enqueue_notification('Store 12 offline')
        out = StringIO()

        with patch(f'{WORKER}.get_container', return_value=memory_container), \
                patch(f'{WORKER}.shutdown_container') as shutdown, \
                patch(f'{WORKER}.signal.signal'):
            call_command('run_job_worker', '--once', stdout=out)

        assert '1 message(s) processed' in out.getvalue()
        assert memory_container.broadcast_sink().messages[0]['content'] == 'Store 12 offline'
        assert memory_container.queue_transport().pending == 0
        shutdown.assert_called_once()

    def test_loop_para_no_sinal(self, memory_container):
        """run_forever recebe o stop_event que os handlers de sinal acionam."""
        consumer = memory_container.job_consumer()
        memory_container.job_consumer.override(providers.Object(consumer))

        def run_forever(stop_event):
            assert not stop_event.is_set()

        with patch(f'{WORKER}.get_container', return_value=memory_container), \
                patch(f'{WORKER}.shutdown_container'), \
                patch(f'{WORKER}.signal.signal') as register, \
                patch.object(consumer, 'run_forever', side_effect=run_forever) as loop:
            call_command('run_job_worker')

        loop.assert_called_once()
        assert register.call_count == 2


@pytest.mark.integration
@pytest.mark.django_db
class TestFluxoCompletoKombu:
    """Container real: Django ORM + kombu ``memory://``."""

    def test_exportacao_de_ponta_a_ponta(self):
        from src.adapters.django_app.jobs.models import AgentModel, AsyncJobModel
        from src.config.container import Container, container_config

        AgentModel.objects.create(agent_id='AG-01', name='Ana Souza', email='ana@example.com')

        container = Container()
        config = container_config(settings)
        config['queue'].update(url='memory://', name='helpdesk-jobs-e2e', wait_seconds=1)
        container.config.from_dict(config)
        container.init_resources()
        try:
            job = container.enqueue_report_export_service().execute('AG-01', 'weekly')
            assert AsyncJobModel.objects.get(job_id=job.job_id).status == 'QUEUED'

            consumer = container.job_consumer()
            assert consumer.poll_once() == 1
            consumer.transport.close()

            stored = AsyncJobModel.objects.get(job_id=job.job_id)
            assert stored.status == 'COMPLETED'
            assert stored.attempts == 1
            assert stored.result['downloadUrl'].startswith('/media/reports/AG-01-weekly-')
        finally:
            container.shutdown_resources()
