"""
Event Publishers - Publicadores de Eventos de Domínio.

Implementações:
- LoggingEventPublisher: loga e chama handlers locais (modo "sync")
- CeleryEventPublisher: envia para tasks Celery (modo "celery")
- InMemoryEventPublisher: guarda eventos (testes)
- CompositeEventPublisher: delega para vários

Todas notificam os assinantes registrados via `subscribe` (quadro
kanban, contadores ao vivo).
"""

from typing import List, Callable, Dict
import logging
import json

from painel_suporte.core.shared.events import DomainEvent
from painel_suporte.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)


class _HandlersPorTipo:
    """Registro de handlers síncronos por tipo de evento."""

    def __init__(self):
        self._handlers: Dict[str, List[Callable[[DomainEvent], None]]] = {}

    def register_handler(self, event_type: str, handler: Callable[[DomainEvent], None]) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def _dispatch_to_handlers(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception:
                logger.exception("Erro em handler para %s", event.event_type)


class LoggingEventPublisher(_HandlersPorTipo, EventPublisher):
    """
    Publisher que loga eventos e despacha para handlers locais.

    Usado em desenvolvimento e no modo "sync".
    """

    def __init__(self, log_level: int = logging.INFO):
        _HandlersPorTipo.__init__(self)
        EventPublisher.__init__(self)
        self._log_level = log_level

    def publish(self, event: DomainEvent) -> None:
        logger.log(
            self._log_level,
            "[EVENT] %s | aggregate=%s | data=%s",
            event.event_type,
            event.aggregate_id,
            json.dumps(event.to_dict()["data"], default=str),
        )
        self._dispatch_to_handlers(event)
        self._notify_subscribers(event)


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para Celery (processamento assíncrono).
    """

    def __init__(self, also_log: bool = True):
        super().__init__()
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        if self._also_log:
            logger.info("[EVENT->CELERY] %s | aggregate=%s", event.event_type, event.aggregate_id)

        from painel_suporte.adapters.django_app.events.handlers import dispatch_domain_event

        try:
            dispatch_domain_event.delay(event.event_type, event.to_dict())
        except Exception:
            logger.exception("Falha ao publicar evento %s no Celery", event.event_type)
        self._notify_subscribers(event)


class InMemoryEventPublisher(_HandlersPorTipo, EventPublisher):
    """
    Publisher em memória para testes.
    """

    def __init__(self):
        _HandlersPorTipo.__init__(self)
        EventPublisher.__init__(self)
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)
        self._dispatch_to_handlers(event)
        self._notify_subscribers(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def clear(self) -> None:
        self._published_events.clear()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]


class CompositeEventPublisher(EventPublisher):
    """
    Delega para múltiplos publishers; falha em um não impede os demais.
    """

    def __init__(self, publishers: List[EventPublisher] = None):
        super().__init__()
        self._publishers = publishers or []

    def add_publisher(self, publisher: EventPublisher) -> None:
        self._publishers.append(publisher)

    def publish(self, event: DomainEvent) -> None:
        for publisher in self._publishers:
            try:
                publisher.publish(event)
            except Exception:
                logger.exception("Erro ao publicar em %s", publisher.__class__.__name__)
        self._notify_subscribers(event)


def get_event_publisher(mode: str = "sync") -> EventPublisher:
    """
    Factory do publisher conforme `EVENT_PUBLISHER_MODE`.

    Args:
        mode: "sync" (log + handlers locais), "celery" ou "memory"
    """
    if mode == "celery":
        return CeleryEventPublisher()
    if mode == "memory":
        return InMemoryEventPublisher()
    return LoggingEventPublisher()
