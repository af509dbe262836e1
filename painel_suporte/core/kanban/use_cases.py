"""
Use Cases de leitura do quadro kanban.
"""

from typing import Dict, List, Optional

from painel_suporte.core.tickets.dtos import TicketOutputDTO
from painel_suporte.core.tickets.ports import TicketRepository

from .engine import CriteriosKanban, WIP_LIMITS, excede_wip, montar_quadro, montar_visao


class VisaoKanbanService:
    """
    Use Case: Lista de tickets filtrada e ordenada.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, criterios: Optional[CriteriosKanban] = None) -> List[TicketOutputDTO]:
        tickets = montar_visao(self.ticket_repo.list_all(), criterios or CriteriosKanban())
        return [TicketOutputDTO.from_entity(t) for t in tickets]


class QuadroKanbanService:
    """
    Use Case: Quadro agrupado por coluna com indicador de WIP.

    Returns (via execute):
        {"backlog": {"tickets": [...], "count": n, "limit": l, "overLimit": bool}, ...}
    """

    def __init__(self, ticket_repo: TicketRepository, wip_limits: Optional[Dict[str, int]] = None):
        self.ticket_repo = ticket_repo
        self.wip_limits = dict(wip_limits or WIP_LIMITS)

    def execute(self, criterios: Optional[CriteriosKanban] = None) -> Dict[str, dict]:
        colunas = montar_quadro(self.ticket_repo.list_all(), criterios or CriteriosKanban())
        return {
            stage: {
                "tickets": [TicketOutputDTO.from_entity(t).to_dict() for t in tickets],
                "count": len(tickets),
                "limit": self.wip_limits[stage],
                "overLimit": excede_wip(stage, len(tickets), self.wip_limits),
            }
            for stage, tickets in colunas.items()
        }
