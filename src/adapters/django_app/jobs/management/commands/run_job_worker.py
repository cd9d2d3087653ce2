"""
Worker da fila de jobs.

Uso:
    python -m django run_job_worker --settings=src.config.settings
    python -m django run_job_worker --once   # um único lote (cron/debug)

Vários workers podem rodar em paralelo; cada um é um loop
sequencial. SIGTERM/SIGINT terminam o lote corrente e saem.
"""

import logging
import signal
import threading

from django.core.management.base import BaseCommand, CommandError

from src.config.container import get_container, shutdown_container

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Consome a fila de jobs (EXCEL_EXPORT, EMAIL_REPORT, NOTIFICATION)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help='Processa um único lote e sai',
        )

    def handle(self, *args, **options):
        container = get_container()
        if not container.queue_transport().is_configured():
            raise CommandError('Job queue is not configured or unreachable; nothing to consume')

        consumer = container.job_consumer()
        stop_event = threading.Event()

        def _stop(signum, frame):
            logger.info(f"[WORKER] Signal {signum} received, stopping after current batch")
            stop_event.set()

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)

        try:
            if options['once']:
                count = consumer.poll_once()
                self.stdout.write(self.style.SUCCESS(f'{count} message(s) processed'))
            else:
                consumer.run_forever(stop_event)
        finally:
            consumer.transport.close()
            shutdown_container()
