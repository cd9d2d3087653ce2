"""
Migration inicial para o domínio de Jobs.

Cria as tabelas:
- async_jobs: Registro de jobs assíncronos
- broadcast_messages: Mensagens de NOTIFICATION
- agents: Cadastro de agentes
"""

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='AsyncJobModel',
            fields=[
                ('job_id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único do job'
                )),
                ('type', models.CharField(
                    max_length=20,
                    choices=[
                        ('EXCEL_EXPORT', 'Excel export'),
                        ('EMAIL_REPORT', 'Email report'),
                        ('NOTIFICATION', 'Notification'),
                    ],
                )),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('QUEUED', 'Queued'),
                        ('PROCESSING', 'Processing'),
                        ('COMPLETED', 'Completed'),
                        ('FAILED', 'Failed'),
                        ('FAILED_PERMANENT', 'Failed permanently'),
                    ],
                    default='QUEUED',
                    db_index=True,
                )),
                ('payload', models.JSONField(
                    default=dict,
                    blank=True,
                    help_text='Entrada do handler (camelCase)'
                )),
                ('result', models.JSONField(
                    null=True,
                    blank=True,
                    help_text='Saída do handler, presente só em COMPLETED'
                )),
                ('error', models.TextField(null=True, blank=True)),
                ('attempts', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, db_index=True)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'verbose_name': 'Async job',
                'verbose_name_plural': 'Async jobs',
                'db_table': 'async_jobs',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['type', 'status', '-created_at'], name='async_jobs_type_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BroadcastMessageModel',
            fields=[
                ('message_id', models.CharField(max_length=36, primary_key=True, serialize=False, editable=False)),
                ('sender_id', models.CharField(max_length=100, default='system')),
                ('receiver_id', models.CharField(max_length=100, null=True, blank=True, db_index=True)),
                ('content', models.TextField()),
                ('message_type', models.CharField(max_length=20, default='BROADCAST')),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now, db_index=True)),
            ],
            options={
                'db_table': 'broadcast_messages',
                'ordering': ['-timestamp'],
            },
        ),
        migrations.CreateModel(
            name='AgentModel',
            fields=[
                ('agent_id', models.CharField(max_length=100, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(max_length=254, null=True, blank=True)),
            ],
            options={
                'db_table': 'agents',
                'ordering': ['agent_id'],
            },
        ),
    ]
