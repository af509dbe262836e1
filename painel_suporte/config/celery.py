"""
Configuração do Celery.

Usado para:
- Processar Domain Events (modo EVENT_PUBLISHER_MODE=celery)
- Tarefas agendadas: limites WIP, estatísticas, limpeza do Event Store

Uso:
    celery -A painel_suporte.config.celery worker -l INFO
    celery -A painel_suporte.config.celery beat -l INFO
"""

import os

from celery import Celery
from celery.schedules import crontab
from kombu import Queue, Exchange

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'painel_suporte.config.settings')

app = Celery('painel_suporte')

# Broker, backend e serialização vêm do settings (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    timezone='America/Sao_Paulo',
    enable_utc=True,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    worker_send_task_events=True,
    task_send_sent_event=True,
)

app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
    Queue('scheduled', Exchange('scheduled'), routing_key='scheduled.#'),
)
app.conf.task_default_queue = 'default'

_HANDLERS = 'painel_suporte.adapters.django_app.events.handlers'

app.conf.task_routes = {
    f'{_HANDLERS}.check_wip_limits': {'queue': 'scheduled'},
    f'{_HANDLERS}.snapshot_estatisticas': {'queue': 'scheduled'},
    f'{_HANDLERS}.cleanup_old_events': {'queue': 'scheduled'},
    f'{_HANDLERS}.*': {'queue': 'events'},
}

app.autodiscover_tasks(['painel_suporte.adapters.django_app.events'], related_name='handlers')

app.conf.beat_schedule = {
    'check-wip-limits': {
        'task': f'{_HANDLERS}.check_wip_limits',
        'schedule': 900.0,
    },
    'snapshot-estatisticas': {
        'task': f'{_HANDLERS}.snapshot_estatisticas',
        'schedule': crontab(hour=8, minute=0),
    },
    'cleanup-old-events': {
        'task': f'{_HANDLERS}.cleanup_old_events',
        'schedule': crontab(hour=3, minute=0, day_of_week='sunday'),
        'kwargs': {'days': 90},
    },
}
