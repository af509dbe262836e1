"""
Unit of Work - Implementação Django.

Responsabilidades:
- Abrir/fechar bloco transacional (`transaction.atomic`)
- Persistir eventos no Event Store dentro da mesma transação
- Publicar eventos somente após commit bem-sucedido

Dentro de outra transação (ex: testes com pytest-django) o bloco
`atomic` do UoW vira um savepoint.
"""

from typing import List, Optional
import logging

from django.db import transaction

from painel_suporte.core.shared.interfaces import EventPublisher, EventStore, UnitOfWork
from painel_suporte.core.shared.events import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Example:
        with DjangoUnitOfWork(event_publisher, event_store) as uow:
            repo.save(ticket)
            uow.publish_event(TicketCriadoEvent(...))
        # commit + eventos publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            repo.save(ticket)
            raise ValidationError("...")
        # rollback, eventos descartados
    """

    def __init__(
        self,
        event_publisher: Optional[EventPublisher] = None,
        event_store: Optional[EventStore] = None,
        using: Optional[str] = None,
    ):
        super().__init__()
        self._event_publisher = event_publisher
        self._event_store = event_store
        self._using = using
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        1. Persiste eventos no Event Store (mesma transação)
        2. Fecha o bloco atômico (commit)
        3. Publica eventos
        """
        if self._atomic is None:
            logger.warning("Commit sem transação ativa")
            return

        try:
            if self._event_store and self._events:
                for event in self._events:
                    self._event_store.append(event)
        except Exception:
            logger.exception("Falha ao persistir eventos; desfazendo transação")
            self.rollback()
            raise

        atomic, self._atomic = self._atomic, None
        atomic.__exit__(None, None, None)
        self._committed = True
        logger.debug("Transaction committed")

        if self._events:
            self._publish_events()

    def rollback(self) -> None:
        if self._atomic is None:
            self.clear_events()
            return

        atomic, self._atomic = self._atomic, None
        erro = RuntimeError("rollback")
        atomic.__exit__(RuntimeError, erro, None)
        self._rolled_back = True
        self.clear_events()
        logger.debug("Transaction rolled back")

    def _publish_events(self) -> None:
        """
        Publica eventos após commit.

        Falha de publicação é registrada e não desfaz a operação já
        persistida.
        """
        eventos = self.collect_events()
        self.clear_events()
        for event in eventos:
            logger.debug(
                "Publishing event: %s for aggregate %s",
                event.event_type,
                event.aggregate_id,
            )
            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception:
                    logger.exception("Failed to publish event %s", event.event_type)

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Não há transação real; simula a ordem commit -> Event Store ->
    publisher.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)
        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(
        self,
        event_publisher: Optional[EventPublisher] = None,
        event_store: Optional[EventStore] = None,
    ):
        super().__init__()
        self._event_publisher = event_publisher
        self._event_store = event_store
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        pass

    def commit(self) -> None:
        self._committed = True
        eventos = self.collect_events()
        self.clear_events()
        for event in eventos:
            if self._event_store:
                self._event_store.append(event)
            self._published_events.append(event)
            if self._event_publisher:
                self._event_publisher.publish(event)

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events

    def reset(self) -> None:
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self.clear_events()
