"""
Ports (Interfaces) do Domínio de Tickets.

Contratos que os adapters de persistência implementam.

Example:
    class DjangoTicketRepository:
        def save(self, ticket: TicketEntity) -> TicketEntity:
            model = TicketMapper.to_model(ticket)
            model.save()
            return TicketMapper.to_entity(model)
"""

import copy
from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import TicketEntity, TicketStage


def ordenar_por_criacao(tickets: List[TicketEntity]) -> List[TicketEntity]:
    """Mais recentes primeiro; empates pelo id maior."""
    return sorted(
        tickets,
        key=lambda t: (t.created_at, t.id or 0),
        reverse=True,
    )


@runtime_checkable
class TicketRepository(Protocol):
    """
    Interface para persistência de Tickets.

    Implementações:
    - DjangoTicketRepository (ORM)
    - InMemoryTicketRepository (testes)
    """

    def save(self, ticket: TicketEntity) -> TicketEntity:
        """
        Persiste ticket (create se `id` é None, senão update).

        Returns:
            Entidade persistida, com `id` atribuído
        """
        ...

    def get_by_id(self, ticket_id: int) -> Optional[TicketEntity]:
        ...

    def delete(self, ticket_id: int) -> None:
        ...

    def list_all(self) -> List[TicketEntity]:
        """
        Lista todos os tickets ordenados por criação (mais recente
        primeiro).
        """
        ...

    def list_by_stage(self, stage: TicketStage) -> List[TicketEntity]:
        ...

    def max_position(self, stage: TicketStage) -> Optional[int]:
        """Maior `position` da coluna, ou None se vazia."""
        ...

    def exists(self, ticket_id: int) -> bool:
        ...


class InMemoryTicketRepository:
    """
    Implementação em memória do TicketRepository.

    Guarda cópias das entidades, como um banco faria: alterar o objeto
    retornado não altera o armazenado sem novo `save`.
    """

    def __init__(self):
        self._tickets: Dict[int, TicketEntity] = {}
        self._proximo_id = 1

    def save(self, ticket: TicketEntity) -> TicketEntity:
        if ticket.id is None:
            ticket.id = self._proximo_id
            self._proximo_id += 1
        else:
            self._proximo_id = max(self._proximo_id, ticket.id + 1)
        self._tickets[ticket.id] = copy.deepcopy(ticket)
        return copy.deepcopy(ticket)

    def get_by_id(self, ticket_id: int) -> Optional[TicketEntity]:
        ticket = self._tickets.get(ticket_id)
        return copy.deepcopy(ticket) if ticket else None

    def delete(self, ticket_id: int) -> None:
        self._tickets.pop(ticket_id, None)

    def list_all(self) -> List[TicketEntity]:
        return ordenar_por_criacao(copy.deepcopy(list(self._tickets.values())))

    def list_by_stage(self, stage: TicketStage) -> List[TicketEntity]:
        return [t for t in self.list_all() if t.stage == stage]

    def max_position(self, stage: TicketStage) -> Optional[int]:
        posicoes = [
            t.position for t in self._tickets.values()
            if t.stage == stage and t.position is not None
        ]
        return max(posicoes) if posicoes else None

    def exists(self, ticket_id: int) -> bool:
        return ticket_id in self._tickets

    def count(self) -> int:
        return len(self._tickets)

    def clear(self) -> None:
        self._tickets.clear()
        self._proximo_id = 1
