"""
Transporte da fila de jobs sobre kombu.

Qualquer broker suportado pelo kombu serve (``sqs://``, ``redis://``,
``amqp://``, ``memory://`` nos testes). A redelivery de um job que
falhou depende do broker:

- SQS e Redis: a mensagem não confirmada (ack) volta a ficar visível
  depois do ``visibility_timeout``
- demais (AMQP, memory): a mensagem é devolvida à fila com ``requeue``
  assim que o consumer desiste dela

Broker fora do ar vira QueueNotConfiguredError, tanto na checagem
que precede o enqueue quanto no publish.

Uso:
    connection = Connection(settings.JOB_QUEUE_URL)
    transport = KombuQueueTransport(connection, 'helpdesk-jobs')
    transport.send({'jobId': '...', 'type': 'NOTIFICATION', 'payload': {...}})
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from kombu import Connection, Exchange, Queue
from kombu.exceptions import ContentDisallowed, DecodeError, OperationalError
from kombu.pools import producers

from src.core.jobs.ports import QueueMessage
from src.core.shared.exceptions import QueueNotConfiguredError

logger = logging.getLogger(__name__)

# Brokers em que mensagem não confirmada reaparece sozinha
VISIBILITY_TIMEOUT_TRANSPORTS = frozenset({'sqs', 'redis', 'rediss'})

PUBLISH_RETRY_POLICY = {
    'max_retries': 3,
    'interval_start': 0,
    'interval_step': 0.5,
    'interval_max': 2,
}


def init_queue_connection(
    url: Optional[str],
    transport_options: Optional[Dict[str, Any]] = None,
) -> Iterator[Optional[Connection]]:
    """
    Resource do container: abre a conexão no init e libera no shutdown.

    URL vazia significa fila não configurada; o resource vale None e
    o produtor recusa enfileirar.
    """
    if not url:
        logger.warning("JOB_QUEUE_URL not set; job queue disabled")
        yield None
        return

    connection = Connection(url, transport_options=transport_options or {})
    logger.info(f"Job queue connection ready ({connection.as_uri()})")
    try:
        yield connection
    finally:
        connection.release()
        logger.info("Job queue connection released")


class KombuQueueTransport:
    """
    Implementação kombu do QueueTransport.

    O envio usa o pool de producers do kombu (seguro entre threads do
    servidor web); o recebimento usa uma SimpleQueue dedicada, criada
    no primeiro ``receive`` (só o worker recebe).

    Args:
        connection: Conexão kombu, ou None se a fila não está configurada
        queue_name: Nome da fila (e da exchange direct homônima)
        prefetch_count: Máximo de mensagens não confirmadas com o worker
    """

    def __init__(
        self,
        connection: Optional[Connection],
        queue_name: str = 'helpdesk-jobs',
        prefetch_count: int = 5,
    ):
        self.connection = connection
        self.queue_name = queue_name
        self.prefetch_count = prefetch_count
        self.exchange = Exchange(queue_name, type='direct', durable=True)
        self.queue = Queue(queue_name, self.exchange, routing_key=queue_name, durable=True)
        self._simple_queue = None

    def is_configured(self) -> bool:
        """URL definida e broker alcançável."""
        if self.connection is None:
            return False
        try:
            self.connection.ensure_connection(max_retries=1, interval_start=0, interval_step=0)
        except OperationalError as e:
            logger.error(f"Job queue unreachable: {e}")
            return False
        return True

    @property
    def redelivers_on_timeout(self) -> bool:
        return str(self.connection.transport_cls).lower() in VISIBILITY_TIMEOUT_TRANSPORTS

    def send(self, body: Dict[str, Any]) -> None:
        try:
            with producers[self.connection].acquire(block=True) as producer:
                producer.publish(
                    body,
                    exchange=self.exchange,
                    routing_key=self.queue_name,
                    declare=[self.queue],
                    serializer='json',
                    retry=True,
                    retry_policy=PUBLISH_RETRY_POLICY,
                )
        except OperationalError as e:
            raise QueueNotConfiguredError(f"Job queue unreachable: {e}") from e

    def receive(self, max_messages: int, wait_seconds: float) -> List[QueueMessage]:
        """
        Bloqueia até ``wait_seconds`` pela primeira mensagem e então
        drena, sem esperar, até completar ``max_messages``.
        """
        simple_queue = self._get_simple_queue()
        received = []

        try:
            received.append(self._wrap(simple_queue.get(block=True, timeout=wait_seconds)))
            while len(received) < max_messages:
                received.append(self._wrap(simple_queue.get_nowait()))
        except simple_queue.Empty:
            pass

        return received

    def delete(self, message: QueueMessage) -> None:
        message.receipt.ack()

    def release(self, message: QueueMessage) -> None:
        if self.redelivers_on_timeout:
            return
        message.receipt.requeue()

    def close(self) -> None:
        if self._simple_queue is not None:
            self._simple_queue.close()
            self._simple_queue = None

    def _get_simple_queue(self):
        if self._simple_queue is None:
            self._simple_queue = self.connection.SimpleQueue(self.queue, serializer='json')
            self._simple_queue.consumer.qos(prefetch_count=self.prefetch_count)
        return self._simple_queue

    @staticmethod
    def _wrap(message) -> QueueMessage:
        try:
            body = message.payload
        except (DecodeError, ContentDisallowed) as e:
            logger.error(f"Undecodable queue message: {e}")
            body = None
        return QueueMessage(body=body, receipt=message)
