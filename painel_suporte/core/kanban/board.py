"""
Estado em memória do quadro kanban.

O quadro mantém a lista de tickets carregada do repositório. Ela só
muda por respostas bem-sucedidas do store, com uma exceção: arrastar
um card aplica a nova ordem localmente na hora e, se a persistência
falhar, a ordem anterior é restaurada.

Recarregamentos usam número de sequência: uma resposta mais antiga que
a última aplicada é descartada.
"""

import copy
import logging
from typing import Callable, Dict, List, Optional

from painel_suporte.core.shared.events import DomainEvent
from painel_suporte.core.shared.exceptions import EntityNotFoundError, ValidationError
from painel_suporte.core.shared.interfaces import EventPublisher
from painel_suporte.core.tickets.dtos import ReordenarTicketsInputDTO
from painel_suporte.core.tickets.entities import TicketEntity, TicketStage
from painel_suporte.core.tickets.ports import TicketRepository
from painel_suporte.core.tickets.use_cases import ReordenarTicketsService

from .engine import CriteriosKanban, WIP_LIMITS, excede_wip, montar_quadro, montar_visao


logger = logging.getLogger(__name__)


class QuadroKanban:
    """
    Quadro kanban com reordenação otimista.

    Example:
        quadro = QuadroKanban(ticket_repo, reordenar_service)
        quadro.recarregar()
        quadro.mover(ticket_id=7, stage="homologacao", indice=0)
        quadro.visao(CriteriosKanban(sort_key="manual"))
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        reordenar_service: ReordenarTicketsService,
        wip_limits: Optional[Dict[str, int]] = None,
    ):
        self.ticket_repo = ticket_repo
        self.reordenar_service = reordenar_service
        self.wip_limits = dict(wip_limits or WIP_LIMITS)
        self.tickets: List[TicketEntity] = []
        self._sequencia = 0
        self._aplicada = 0

    # =========================================================================
    # Recarregamento
    # =========================================================================

    def iniciar_recarga(self) -> int:
        """Reserva um número de sequência para uma nova leitura."""
        self._sequencia += 1
        return self._sequencia

    def concluir_recarga(self, sequencia: int, tickets: List[TicketEntity]) -> bool:
        """
        Aplica o resultado de uma leitura.

        Returns:
            False se a resposta é mais antiga que a última aplicada
        """
        if sequencia < self._aplicada:
            logger.debug("Resposta de recarga %s descartada (atual %s)", sequencia, self._aplicada)
            return False
        self._aplicada = sequencia
        self.tickets = list(tickets)
        return True

    def recarregar(self) -> List[TicketEntity]:
        sequencia = self.iniciar_recarga()
        self.concluir_recarga(sequencia, self.ticket_repo.list_all())
        return self.tickets

    def conectar(self, publisher: EventPublisher) -> Callable[[], None]:
        """
        Assina eventos de ticket para recarregar automaticamente.

        Returns:
            Função que cancela a assinatura
        """
        return publisher.subscribe(self._ao_receber_evento)

    def _ao_receber_evento(self, event: DomainEvent) -> None:
        if event.aggregate_type in ("Ticket", "Coluna"):
            self.recarregar()

    # =========================================================================
    # Visões
    # =========================================================================

    def visao(self, criterios: Optional[CriteriosKanban] = None) -> List[TicketEntity]:
        return montar_visao(self.tickets, criterios or CriteriosKanban())

    def colunas(self, criterios: Optional[CriteriosKanban] = None):
        return montar_quadro(self.tickets, criterios or CriteriosKanban())

    def status_wip(self) -> Dict[str, dict]:
        """Contagem de tickets ativos por coluna contra o limite WIP."""
        resultado = {}
        for stage, tickets in self.colunas().items():
            resultado[stage] = {
                "count": len(tickets),
                "limit": self.wip_limits[stage],
                "overLimit": excede_wip(stage, len(tickets), self.wip_limits),
            }
        return resultado

    # =========================================================================
    # Reordenação otimista
    # =========================================================================

    def mover(self, ticket_id: int, stage, indice: int) -> List[int]:
        """
        Move o card para `stage` na posição `indice` da ordem manual.

        A ordem local muda imediatamente; em seguida a nova ordem da
        coluna é persistida. Se a persistência falhar, o estado local
        anterior é restaurado e o erro é propagado.

        Returns:
            Ids da coluna destino na nova ordem

        Raises:
            EntityNotFoundError: ticket não está no quadro
            ValidationError: coluna inválida
        """
        destino = TicketEntity.parse_enum(TicketStage, stage, "stage", None)
        if destino is None:
            raise ValidationError("Coluna é obrigatória", field="stage")

        ticket = next((t for t in self.tickets if t.id == ticket_id), None)
        if ticket is None:
            raise EntityNotFoundError(
                f"Ticket {ticket_id} não está no quadro",
                entity_type="Ticket",
                entity_id=ticket_id,
            )

        anterior = copy.deepcopy(self.tickets)

        coluna = [
            t for t in montar_visao(self.tickets, CriteriosKanban(stage=destino.value))
            if t.id != ticket_id
        ]
        indice = max(0, min(indice, len(coluna)))
        coluna.insert(indice, ticket)
        for posicao, item in enumerate(coluna):
            item.stage = destino
            item.position = posicao
        ordem = [t.id for t in coluna]

        try:
            self.reordenar_service.execute(
                ReordenarTicketsInputDTO(stage=destino.value, ordem=tuple(ordem))
            )
        except Exception:
            logger.warning(
                "Falha ao persistir ordem da coluna %s; restaurando ordem local",
                destino.value,
            )
            self.tickets = anterior
            raise

        return ordem
