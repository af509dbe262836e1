#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

1. Configura Django (SQLite)
2. Executa migrations
3. Cria tickets e um relatório semanal de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SAMPLE_TICKETS = [
    {
        'title': 'Sistema fora do ar',
        'description': 'Erro 503 em todas as páginas para todos os usuários.',
        'ticketNumber': 4101,
        'priority': 'alta',
        'type': 'erro_temporario',
        'stage': 'desenvolvimento',
    },
    {
        'title': 'Ajuste no cálculo de férias',
        'description': 'Proporcional de 1/3 calculado sobre a base errada.',
        'ticketNumber': 4102,
        'priority': 'alta',
        'type': 'correcao_tecnica',
        'stage': 'homologacao',
    },
    {
        'title': 'Como exportar o relatório de ponto?',
        'ticketNumber': 4103,
        'priority': 'baixa',
        'type': 'orientacao',
    },
    {
        'title': 'Modo escuro no painel',
        'description': 'Sugestão da equipe de atendimento.',
        'priority': 'media',
        'type': 'melhorias',
    },
]

SAMPLE_WEEKLY_REPORT = {
    'period': '24/11 a 30/11/2025',
    'summary': {'opened': 42, 'closed': 38, 'backlog': 17, 'tma': 5.2, 'tmaGoal': 6, 'slaRisk': 3},
    'dailyVolume': [
        {'day': 'Seg', 'opened': 10, 'closed': 8},
        {'day': 'Ter', 'opened': 9, 'closed': 9},
    ],
    'backlogByUrgency': [{'name': 'Alta', 'value': 4}, {'name': 'Média', 'value': 13}],
}


def setup_django():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'painel_suporte.config.settings')
    os.environ.setdefault('DATABASE_URL', 'sqlite:///db.sqlite3')

    import django
    django.setup()


def run_migrations():
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    from painel_suporte.config.container import get_container
    from painel_suporte.core.reports.dtos import SalvarRelatorioInputDTO
    from painel_suporte.core.tickets.dtos import CriarTicketInputDTO

    container = get_container()
    criar = container.criar_ticket_service()

    print("📝 Criando tickets de exemplo...")
    for payload in SAMPLE_TICKETS:
        ticket = criar.execute(CriarTicketInputDTO.from_payload(payload))
        print(f"   ✓ [{ticket.stage}] {ticket.title}")

    container.salvar_relatorio_service().execute(
        SalvarRelatorioInputDTO(kind='weekly', key='2025-W48', data=SAMPLE_WEEKLY_REPORT)
    )
    print("   ✓ Relatório semanal 2025-W48")

    print(f"✅ {len(SAMPLE_TICKETS)} tickets criados!")


def check_connection():
    from django.db import connection

    print("🔍 Verificando conexão com o banco...")
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except Exception as e:
        print(f"❌ Erro de conexão: {e}")
        return False
    print("✅ Conexão OK!")
    return True


def show_info():
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Event Publisher: {settings.EVENT_PUBLISHER_MODE}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. Acesse: http://localhost:8000/tickets/board")
    print("   3. Sincronize relatórios: python manage.py sincronizar_relatorios")
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
    print("🔧 Painel de Suporte - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Para usar SQLite, defina: DATABASE_URL=sqlite:///db.sqlite3")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
