#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Executa migrations
3. Cria agentes e tickets de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

from datetime import timedelta
import argparse
import os
import sys

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria agentes e tickets de exemplo (idempotente por ID)."""
    from src.adapters.django_app.jobs.models import AgentModel
    from src.config.container import get_container
    from src.core.shared.clock import utc_now
    from src.core.tickets.dtos import CreateTicketInputDTO

    agents = [
        ('agent-001', 'Ana Souza', 'ana.souza@example.com'),
        ('agent-002', 'Bruno Lima', 'bruno.lima@example.com'),
        ('agent-003', 'Carla Mendes', None),
    ]

    print("👤 Criando agentes...")
    for agent_id, name, email in agents:
        AgentModel.objects.update_or_create(agent_id=agent_id, defaults={'name': name, 'email': email})
        print(f"   ✓ {agent_id} ({name})")

    now = utc_now()
    sample_tickets = [
        {
            'ticketId': 'SAMPLE-1',
            'agentId': 'agent-001',
            'issueType': 'KIOSK',
            'description': 'Kiosk 3 não imprime recibos desde a abertura.',
            'issueDateTime': (now - timedelta(hours=30)).isoformat(),
        },
        {
            'ticketId': 'SAMPLE-2',
            'agentId': 'agent-001',
            'issueType': 'FOH',
            'description': 'Cliente relata cobrança duplicada no cartão.',
            'status': 'ASSIGNED',
            'assignedBy': 'SUPERVISOR',
            'createdBy': 'supervisor-001',
        },
        {
            'ticketId': 'SAMPLE-3',
            'agentId': 'agent-002',
            'issueType': 'BOH',
            'description': 'Impressora da cozinha offline.',
            'issueDateTime': (now - timedelta(hours=2)).isoformat(),
            'callDuration': 240,
        },
    ]

    print("📝 Criando tickets de exemplo...")
    service = get_container().create_ticket_service()
    for data in sample_tickets:
        ticket, created = service.execute(CreateTicketInputDTO.from_request(data))
        print(f"   {'✓' if created else '='} {ticket.ticket_id} [{ticket.status}] {ticket.description[:40]}")

    print(f"✅ {len(agents)} agentes e {len(sample_tickets)} tickets prontos!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except Exception as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Job queue: {settings.JOB_QUEUE_URL or '(não configurada)'}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python -m django runserver --settings=src.config.settings")
    print("   2. python -m django run_job_worker --settings=src.config.settings")
    print("   3. Acesse: http://localhost:8000/admin/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar dados de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Helpdesk - Quick Setup")
    print("=" * 60 + "\n")

    # Configurar Django
    setup_django()

    if args.check_only:
        check_connection()
        return

    # Verificar conexão
    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Para usar SQLite, remova DB_ENGINE do .env")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
