"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Driven ports compartilhados por todos os domínios: UnitOfWork,
EventPublisher e EventStore. Os repositórios específicos ficam em
`<dominio>/ports.py`.
"""

from abc import ABC, abstractmethod
from typing import Callable, List

from .events import DomainEvent

EventHandler = Callable[[DomainEvent], None]


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Pattern: Context Manager
        with uow:
            repo.save(ticket)
            uow.publish_event(TicketCriadoEvent(...))
        # commit ao sair sem erro, rollback se exceção

    Eventos enfileirados só são publicados após commit bem-sucedido;
    em rollback são descartados.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    @abstractmethod
    def _begin_transaction(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Persiste mudanças e então publica eventos enfileirados.

        Note:
            Se o commit falhar, os eventos são descartados.
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """Enfileira evento para publicação após commit."""
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        return list(self._events)

    def clear_events(self) -> None:
        self._events.clear()


class EventPublisher(ABC):
    """
    Publicação de eventos para consumidores.

    `subscribe` é a interface de notificação de mudanças: assinantes
    in-process (quadro kanban, contadores) são chamados a cada evento
    publicado, substituindo polling periódico.
    """

    def __init__(self):
        self._subscribers: List[EventHandler] = []

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """
        Registra callback para todos os eventos publicados.

        Returns:
            Função que cancela a assinatura
        """
        self._subscribers.append(handler)

        def unsubscribe() -> None:
            if handler in self._subscribers:
                self._subscribers.remove(handler)

        return unsubscribe

    def _notify_subscribers(self, event: DomainEvent) -> None:
        for handler in list(self._subscribers):
            handler(event)


class EventStore(ABC):
    """
    Persistência de eventos; alimenta o histórico de atividades.
    """

    @abstractmethod
    def append(self, event: DomainEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_events_for_aggregate(
        self,
        aggregate_type: str,
        aggregate_id: str,
    ) -> List[dict]:
        """
        Recupera eventos serializados de um agregado.

        Returns:
            Lista de `DomainEvent.to_dict()` em ordem cronológica
        """
        raise NotImplementedError


class InMemoryEventStore(EventStore):
    """Event Store em memória (testes e modo sem banco)."""

    def __init__(self):
        self._eventos: List[dict] = []

    def append(self, event: DomainEvent) -> None:
        self._eventos.append(event.to_dict())

    def get_events_for_aggregate(self, aggregate_type: str, aggregate_id: str) -> List[dict]:
        return [
            evento for evento in self._eventos
            if evento["aggregate_type"] == aggregate_type
            and evento["aggregate_id"] == str(aggregate_id)
        ]
