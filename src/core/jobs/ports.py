"""
Ports (Interfaces) do Domínio de Jobs.

- JobRepository: persistência de AsyncJob (JobStore)
- QueueTransport: fila com send, receive em lote com espera,
  delete e visibility timeout
- BroadcastSink: destino das mensagens de NOTIFICATION

Cada port tem uma implementação em memória para testes.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable
import itertools
import uuid

from src.core.shared.clock import Clock, utc_now

from .entities import AsyncJobEntity, JobStatus, JobType


@runtime_checkable
class JobRepository(Protocol):
    """
    Interface para persistência de AsyncJob.

    Implementações:
    - DjangoJobRepository (ORM)
    - InMemoryJobRepository (para testes)
    """

    def add(self, job: AsyncJobEntity) -> None:
        """Insere o registro (status QUEUED)."""
        ...

    def save(self, job: AsyncJobEntity) -> None:
        """Atualiza status, result, error e attempts de um job existente."""
        ...

    def get_by_id(self, job_id: str) -> Optional[AsyncJobEntity]:
        ...

    def list_paginated(
        self,
        status: Optional[JobStatus] = None,
        job_type: Optional[JobType] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[AsyncJobEntity], int]:
        """
        Jobs mais novos primeiro.

        Returns:
            Tupla (página, total filtrado)
        """
        ...


@dataclass
class QueueMessage:
    """
    Mensagem recebida da fila.

    Attributes:
        body: Corpo decodificado (``{jobId, type, payload}`` esperado)
        receipt: Handle opaco do transporte, usado no delete
    """

    body: Any
    receipt: Any = None


@runtime_checkable
class QueueTransport(Protocol):
    """
    Interface da fila de jobs.

    Mensagens recebidas e não removidas voltam a ficar visíveis
    depois do visibility timeout (redelivery).
    """

    def is_configured(self) -> bool:
        ...

    def send(self, body: Dict[str, Any]) -> None:
        ...

    def receive(self, max_messages: int, wait_seconds: float) -> List[QueueMessage]:
        """Long-poll: bloqueia até ``wait_seconds`` esperando mensagens."""
        ...

    def delete(self, message: QueueMessage) -> None:
        """Confirmação explícita; a mensagem não será reentregue."""
        ...

    def release(self, message: QueueMessage) -> None:
        """
        Desiste da mensagem sem confirmá-la, para nova entrega.

        Filas com visibility timeout não precisam fazer nada; as demais
        devolvem a mensagem à fila.
        """
        ...

    def close(self) -> None:
        """Libera os recursos de recebimento (fim do worker)."""
        ...


class BroadcastSink(Protocol):
    def publish(self, sender_id: str, receiver_id: Optional[str], content: str) -> str:
        """
        Persiste mensagem do tipo BROADCAST.

        Returns:
            ID da mensagem criada
        """
        ...


# =============================================================================
# IMPLEMENTAÇÕES EM MEMÓRIA
# =============================================================================

class InMemoryJobRepository:
    """JobRepository em memória. Não usar em produção!"""

    def __init__(self):
        self._jobs: Dict[str, AsyncJobEntity] = {}

    def add(self, job: AsyncJobEntity) -> None:
        if job.job_id in self._jobs:
            raise ValueError(f"Job {job.job_id} already exists")
        self._jobs[job.job_id] = deepcopy(job)

    def save(self, job: AsyncJobEntity) -> None:
        self._jobs[job.job_id] = deepcopy(job)

    def get_by_id(self, job_id: str) -> Optional[AsyncJobEntity]:
        job = self._jobs.get(job_id)
        return deepcopy(job) if job else None

    def list_paginated(self, status=None, job_type=None, offset=0, limit=20):
        jobs = [
            j for j in self._jobs.values()
            if (status is None or j.status == status)
            and (job_type is None or j.job_type == job_type)
        ]
        jobs.sort(key=lambda j: j.created_at, reverse=True)
        return [deepcopy(j) for j in jobs[offset:offset + limit]], len(jobs)

    def count(self) -> int:
        return len(self._jobs)


@dataclass
class _StoredMessage:
    message_id: int
    body: Dict[str, Any]
    invisible_until: Optional[datetime] = None
    receive_count: int = 0


class InMemoryQueueTransport:
    """
    Fila em memória que simula o visibility timeout.

    O relógio é injetável: avançá-lo além do timeout torna visíveis
    de novo as mensagens recebidas e não removidas.

    Args:
        visibility_timeout: Segundos em que a mensagem fica oculta
        clock: Fonte do "agora"
        configured: False simula fila não configurada
    """

    def __init__(
        self,
        visibility_timeout: int = 60,
        clock: Clock = utc_now,
        configured: bool = True,
    ):
        self.visibility_timeout = visibility_timeout
        self.clock = clock
        self.configured = configured
        self._messages: List[_StoredMessage] = []
        self._ids = itertools.count(1)

    def is_configured(self) -> bool:
        return self.configured

    def send(self, body):
        self._messages.append(_StoredMessage(message_id=next(self._ids), body=deepcopy(body)))

    def receive(self, max_messages, wait_seconds):
        now = self.clock()
        received = []
        for stored in self._messages:
            if len(received) >= max_messages:
                break
            if stored.invisible_until is not None and stored.invisible_until > now:
                continue
            stored.invisible_until = now + timedelta(seconds=self.visibility_timeout)
            stored.receive_count += 1
            received.append(QueueMessage(body=deepcopy(stored.body), receipt=stored.message_id))
        return received

    def delete(self, message):
        self._messages = [m for m in self._messages if m.message_id != message.receipt]

    def release(self, message):
        # o visibility timeout simulado cuida da redelivery
        pass

    def close(self):
        pass

    @property
    def pending(self) -> int:
        """Mensagens ainda não removidas (visíveis ou em voo)."""
        return len(self._messages)


@dataclass
class InMemoryBroadcastSink:
    messages: List[dict] = field(default_factory=list)

    def publish(self, sender_id, receiver_id, content) -> str:
        message_id = str(uuid.uuid4())
        self.messages.append(
            {
                "messageId": message_id,
                "senderId": sender_id,
                "receiverId": receiver_id,
                "content": content,
                "type": "BROADCAST",
            }
        )
        return message_id
