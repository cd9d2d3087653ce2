"""
Migration inicial para o domínio de Tickets.

Cria a tabela:
- tickets: Tabela principal de tickets
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
            name='TicketModel',
            fields=[
                ('ticket_id', models.CharField(
                    max_length=64,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='Identificador único do ticket'
                )),
                ('display_id', models.CharField(
                    max_length=32,
                    null=True,
                    blank=True,
                    help_text='Identificador curto para exibição'
                )),
                ('agent_id', models.CharField(
                    max_length=100,
                    db_index=True,
                    help_text='Agente dono do ticket'
                )),
                ('issue_type', models.CharField(
                    max_length=10,
                    choices=[
                        ('FOH', 'Front of house'),
                        ('BOH', 'Back of house'),
                        ('KIOSK', 'Kiosk'),
                        ('other', 'Other'),
                    ],
                    default='other',
                )),
                ('description', models.TextField(
                    help_text='Descrição do problema'
                )),
                ('status', models.CharField(
                    max_length=30,
                    choices=[
                        ('OPEN', 'Open'),
                        ('ASSIGNED', 'Assigned'),
                        ('IN_PROGRESS', 'In progress'),
                        ('RESOLUTION_REQUESTED', 'Resolution requested'),
                        ('RESOLVED', 'Resolved'),
                        ('REJECTED', 'Rejected'),
                    ],
                    default='OPEN',
                    db_index=True,
                    help_text='Estado atual do ticket'
                )),
                ('priority', models.CharField(
                    max_length=10,
                    choices=[
                        ('LOW', 'Low'),
                        ('MEDIUM', 'Medium'),
                        ('HIGH', 'High'),
                        ('URGENT', 'Urgent'),
                    ],
                    default='MEDIUM',
                    db_index=True,
                )),
                ('issue_date_time', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True,
                    help_text='Instante de abertura (base do SLA)'
                )),
                ('assigned_by', models.CharField(
                    max_length=20,
                    choices=[
                        ('SUPERVISOR', 'Supervisor'),
                        ('SYSTEM', 'System'),
                    ],
                    null=True,
                    blank=True,
                )),
                ('created_by', models.CharField(
                    max_length=100,
                    null=True,
                    blank=True,
                    db_index=True,
                    help_text='Supervisor que criou o ticket'
                )),
                ('call_duration', models.PositiveIntegerField(null=True, blank=True)),
                ('started_at', models.DateTimeField(null=True, blank=True)),
                ('resolution_requested_at', models.DateTimeField(null=True, blank=True)),
                ('resolved_at', models.DateTimeField(null=True, blank=True)),
                ('rejected_at', models.DateTimeField(null=True, blank=True)),
                ('rejection_reason', models.TextField(null=True, blank=True)),
                ('resolution_notes', models.TextField(null=True, blank=True)),
                ('updated_at', models.DateTimeField(
                    default=django.utils.timezone.now,
                    help_text='Data/hora da última atualização'
                )),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'tickets',
                'ordering': ['-issue_date_time'],
                'indexes': [
                    models.Index(fields=['status', 'issue_date_time'], name='tickets_status_issued_idx'),
                    models.Index(fields=['agent_id', 'issue_date_time'], name='tickets_agent_issued_idx'),
                    models.Index(fields=['created_by', 'issue_date_time'], name='tickets_creator_issued_idx'),
                ],
            },
        ),
    ]
