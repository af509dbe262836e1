"""
Domain Events do Domínio de Tickets.

Eventos:
- TicketCriadoEvent
- TicketAtualizadoEvent (campos alterados)
- TicketMovidoEvent (mudança de coluna)
- TicketsReordenadosEvent (ordem manual de uma coluna)
- TicketExcluidoEvent

Persistidos no Event Store formam o histórico de atividades do ticket.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from painel_suporte.core.shared.events import DomainEvent


@dataclass
class TicketCriadoEvent(DomainEvent):
    title: str = ""
    priority: str = ""
    type: str = ""
    stage: str = ""
    ticket_number: Optional[int] = None

    @property
    def aggregate_type(self) -> str:
        return "Ticket"


@dataclass
class TicketAtualizadoEvent(DomainEvent):
    """
    Evento: campos de um ticket foram alterados.

    Attributes:
        campos: nomes dos campos alterados
        status: status após a alteração (handlers usam para detectar
            arquivamento)
    """

    campos: List[str] = field(default_factory=list)
    status: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"


@dataclass
class TicketMovidoEvent(DomainEvent):
    de: str = ""
    para: str = ""
    position: Optional[int] = None

    @property
    def aggregate_type(self) -> str:
        return "Ticket"


@dataclass
class TicketsReordenadosEvent(DomainEvent):
    """Evento de coluna: aggregate_id é o nome da coluna."""

    ordem: List[int] = field(default_factory=list)

    @property
    def aggregate_type(self) -> str:
        return "Coluna"


@dataclass
class TicketExcluidoEvent(DomainEvent):
    title: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"

    def _get_event_data(self) -> Dict[str, Any]:
        return {"title": self.title}
