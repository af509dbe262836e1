"""
Domínio de Tickets - registros de chamados de suporte.

- Entidades (TicketEntity e vocabulários de status/prioridade/tipo/coluna)
- Use Cases (CRUD, mover, reordenar, estatísticas, atividades)
- Domain Events (TicketCriado, TicketAtualizado, TicketMovido, ...)
- DTOs e Ports
"""

from .entities import (
    TicketEntity,
    TicketStatus,
    TicketPriority,
    TicketType,
    TicketStage,
    UsuarioRef,
)
from .events import (
    TicketCriadoEvent,
    TicketAtualizadoEvent,
    TicketMovidoEvent,
    TicketsReordenadosEvent,
    TicketExcluidoEvent,
)
from .dtos import (
    CriarTicketInputDTO,
    AtualizarTicketInputDTO,
    MoverTicketInputDTO,
    ReordenarTicketsInputDTO,
    TicketOutputDTO,
)
from .ports import TicketRepository, InMemoryTicketRepository
from .use_cases import (
    CriarTicketService,
    AtualizarTicketService,
    ExcluirTicketService,
    ListarTicketsService,
    ObterTicketService,
    MoverTicketService,
    ReordenarTicketsService,
    EstatisticasTicketsService,
    ListarAtividadesService,
)

__all__ = [
    # Entities
    "TicketEntity",
    "TicketStatus",
    "TicketPriority",
    "TicketType",
    "TicketStage",
    "UsuarioRef",
    # Events
    "TicketCriadoEvent",
    "TicketAtualizadoEvent",
    "TicketMovidoEvent",
    "TicketsReordenadosEvent",
    "TicketExcluidoEvent",
    # DTOs
    "CriarTicketInputDTO",
    "AtualizarTicketInputDTO",
    "MoverTicketInputDTO",
    "ReordenarTicketsInputDTO",
    "TicketOutputDTO",
    # Ports
    "TicketRepository",
    "InMemoryTicketRepository",
    # Use Cases
    "CriarTicketService",
    "AtualizarTicketService",
    "ExcluirTicketService",
    "ListarTicketsService",
    "ObterTicketService",
    "MoverTicketService",
    "ReordenarTicketsService",
    "EstatisticasTicketsService",
    "ListarAtividadesService",
]
