"""
Configuração do Django App para Tickets.
"""

from django.apps import AppConfig


class TicketsConfig(AppConfig):
    """Tickets, colunas do kanban e Event Store."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'painel_suporte.adapters.django_app.tickets'
    label = 'tickets'
    verbose_name = 'Tickets de Suporte'
