"""
Painel de Suporte - tickets, kanban e relatórios periódicos.

Camadas:
- core: domínio puro (entidades, use cases, ports)
- adapters: Django (ORM, API JSON, Celery) e gateways de sincronização
- config: settings, container de DI, Celery
"""

__version__ = "0.1.0"
