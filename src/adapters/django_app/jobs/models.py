"""
Django Models do domínio de Jobs e dos colaboradores dos handlers.

Models:
- AsyncJobModel: Registro durável de cada job (JobStore)
- BroadcastMessageModel: Mensagens BROADCAST geradas por NOTIFICATION
- AgentModel: Cadastro de agentes lido pelos relatórios

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Payload/result são JSON camelCase; o formato é definido pelas
  classes tipadas em src/core/jobs/entities.py
"""

from django.db import models
from django.utils import timezone


class JobTypeChoices(models.TextChoices):
    EXCEL_EXPORT = 'EXCEL_EXPORT', 'Excel export'
    EMAIL_REPORT = 'EMAIL_REPORT', 'Email report'
    NOTIFICATION = 'NOTIFICATION', 'Notification'


class JobStatusChoices(models.TextChoices):
    QUEUED = 'QUEUED', 'Queued'
    PROCESSING = 'PROCESSING', 'Processing'
    COMPLETED = 'COMPLETED', 'Completed'
    FAILED = 'FAILED', 'Failed'
    FAILED_PERMANENT = 'FAILED_PERMANENT', 'Failed permanently'


class AsyncJobModel(models.Model):
    """
    Model Django para persistência de AsyncJob.

    Um registro por job_id; nunca removido.
    """

    job_id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único do job"
    )

    type = models.CharField(
        max_length=20,
        choices=JobTypeChoices.choices,
    )

    status = models.CharField(
        max_length=20,
        choices=JobStatusChoices.choices,
        default=JobStatusChoices.QUEUED,
        db_index=True,
    )

    payload = models.JSONField(
        default=dict,
        blank=True,
        help_text="Entrada do handler (camelCase)"
    )

    result = models.JSONField(
        null=True,
        blank=True,
        help_text="Saída do handler, presente só em COMPLETED"
    )

    error = models.TextField(null=True, blank=True)

    attempts = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'async_jobs'
        verbose_name = 'Async job'
        verbose_name_plural = 'Async jobs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['type', 'status', '-created_at'], name='async_jobs_type_status_idx'),
        ]

    def __str__(self):
        return f"[{self.job_id[:8]}] {self.type} {self.status}"


class BroadcastMessageModel(models.Model):
    """Mensagem criada por jobs NOTIFICATION. ``receiver_id`` nulo = todos."""

    message_id = models.CharField(max_length=36, primary_key=True, editable=False)
    sender_id = models.CharField(max_length=100, default='system')
    receiver_id = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    content = models.TextField()
    message_type = models.CharField(max_length=20, default='BROADCAST')
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'broadcast_messages'
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.sender_id} → {self.receiver_id or '*'}: {self.content[:40]}"


class AgentModel(models.Model):
    """Cadastro mínimo de agentes para os relatórios."""

    agent_id = models.CharField(max_length=100, primary_key=True)
    name = models.CharField(max_length=200)
    email = models.EmailField(null=True, blank=True)

    class Meta:
        db_table = 'agents'
        ordering = ['agent_id']

    def __str__(self):
        return f"{self.agent_id} ({self.name})"
