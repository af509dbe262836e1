"""
Event Handlers - Processadores de Eventos de Domínio.

Executados via Celery quando o publisher está em modo "celery".
`dispatch_domain_event` é o ponto de entrada e roteia pelo tipo.

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>(self, event_data: dict) -> None:
        ...
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from celery import shared_task

logger = logging.getLogger(__name__)


# =============================================================================
# Event Handlers - Tickets
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_ticket_criado(self, event_data: Dict[str, Any]) -> None:
    """
    Ações:
    - Avisar a equipe quando o ticket nasce com prioridade alta
    - Registrar métrica de criação
    """
    ticket_id = event_data.get('aggregate_id')
    dados = event_data.get('data', {})
    prioridade = dados.get('priority', 'media')

    logger.info("[HANDLER] TicketCriado: %s | %s", ticket_id, dados.get('title'))

    if prioridade == 'alta':
        notify_support_team.delay(
            ticket_id=ticket_id,
            message=f"Novo ticket de prioridade alta: {dados.get('title')}",
            priority='high',
        )

    record_metric.delay(
        metric_name='tickets_created',
        value=1,
        tags={'priority': prioridade, 'type': dados.get('type', 'outros')},
    )


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_ticket_atualizado(self, event_data: Dict[str, Any]) -> None:
    """Registra arquivamentos (status -> fechado)."""
    dados = event_data.get('data', {})
    if 'status' in dados.get('campos', []) and dados.get('status') == 'fechado':
        logger.info("[HANDLER] Ticket %s arquivado", event_data.get('aggregate_id'))
        record_metric.delay(metric_name='tickets_archived', value=1, tags={})


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_ticket_movido(self, event_data: Dict[str, Any]) -> None:
    """
    Ações:
    - Verificar limite WIP da coluna destino e avisar a equipe
    """
    dados = event_data.get('data', {})
    destino = dados.get('para')
    logger.info(
        "[HANDLER] TicketMovido: %s | %s -> %s",
        event_data.get('aggregate_id'),
        dados.get('de'),
        destino,
    )
    if destino:
        check_wip_limits.delay(stage=destino)


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_relatorio_salvo(self, event_data: Dict[str, Any]) -> None:
    dados = event_data.get('data', {})
    logger.info(
        "[HANDLER] RelatorioSalvo: %s %s (%s)",
        dados.get('kind'),
        dados.get('key'),
        'novo' if dados.get('criado') else 'substituído',
    )
    record_metric.delay(
        metric_name='reports_saved',
        value=1,
        tags={'kind': dados.get('kind', '')},
    )


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

EVENT_HANDLERS = {
    'TicketCriadoEvent': handle_ticket_criado,
    'TicketAtualizadoEvent': handle_ticket_atualizado,
    'TicketMovidoEvent': handle_ticket_movido,
    'RelatorioSalvoEvent': handle_relatorio_salvo,
}


@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Args:
        event_type: Tipo do evento (ex: 'TicketCriadoEvent')
        event_data: Evento serializado (`DomainEvent.to_dict()`)
    """
    handler = EVENT_HANDLERS.get(event_type)

    if handler:
        logger.info("[DISPATCHER] Roteando %s para handler", event_type)
        handler.delay(event_data)
    else:
        logger.debug("[DISPATCHER] Sem handler para %s", event_type)


# =============================================================================
# Notification / Metric Tasks
# =============================================================================

@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_support_team(self, ticket_id: str, message: str, priority: str = 'normal') -> None:
    logger.info(
        "[NOTIFICATION] Equipe de suporte [%s]: Ticket %s - %s",
        priority,
        ticket_id,
        message,
    )


@shared_task(bind=True, ignore_result=True)
def record_metric(self, metric_name: str, value: float, tags: Dict[str, str] = None) -> None:
    logger.info("[METRIC] %s=%s | tags=%s", metric_name, value, tags or {})


# =============================================================================
# Scheduled Tasks (Beat)
# =============================================================================

@shared_task(bind=True)
def check_wip_limits(self, stage: str = None) -> Dict[str, dict]:
    """
    Verifica colunas acima do limite WIP e avisa a equipe.

    Args:
        stage: coluna específica; None verifica todas

    Returns:
        Estado WIP das colunas verificadas
    """
    from painel_suporte.config.container import get_container

    container = get_container()
    quadro = container.quadro_kanban_service().execute()

    resultado = {}
    for coluna, info in quadro.items():
        if stage and coluna != stage:
            continue
        resultado[coluna] = {
            'count': info['count'],
            'limit': info['limit'],
            'overLimit': info['overLimit'],
        }
        if info['overLimit']:
            logger.warning(
                "[SCHEDULED] Coluna %s acima do WIP (%s/%s)",
                coluna,
                info['count'],
                info['limit'],
            )
            notify_support_team.delay(
                ticket_id=coluna,
                message=f"Coluna {coluna} acima do limite WIP ({info['count']}/{info['limit']})",
                priority='high',
            )
    return resultado


@shared_task(bind=True)
def snapshot_estatisticas(self) -> Dict[str, Any]:
    """Loga as estatísticas do dia (Celery Beat, diário)."""
    from painel_suporte.config.container import get_container

    estatisticas = get_container().estatisticas_tickets_service().execute().to_dict()
    logger.info("[SCHEDULED] Estatísticas: %s", estatisticas)
    return estatisticas


@shared_task(bind=True)
def cleanup_old_events(self, days: int = 90) -> int:
    """
    Remove eventos antigos do Event Store (Celery Beat, semanal).

    Returns:
        Número de eventos removidos
    """
    from painel_suporte.adapters.django_app.tickets.models import DomainEventModel

    cutoff_date = datetime.now(timezone.utc) - timedelta(days=days)
    deleted, _ = DomainEventModel.objects.filter(occurred_at__lt=cutoff_date).delete()
    logger.info("[SCHEDULED] %s eventos removidos", deleted)
    return deleted
