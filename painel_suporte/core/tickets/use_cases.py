"""
Use Cases (Application Services) do Domínio de Tickets.

Use Cases implementados:
- CriarTicketService: cria ticket com defaults e posição no fim do backlog
- AtualizarTicketService: atualização parcial
- ExcluirTicketService: exclusão explícita
- ListarTicketsService: lista por criação (mais recente primeiro)
- ObterTicketService: obtém ticket específico
- MoverTicketService: muda a coluna (vai para o fim da coluna destino)
- ReordenarTicketsService: persiste a ordem manual de uma coluna
- EstatisticasTicketsService: contagens para o dashboard
- ListarAtividadesService: histórico a partir do Event Store

Escritas rodam dentro do Unit of Work; eventos só saem após commit.
"""

import logging
from collections import Counter
from typing import List

from painel_suporte.core.shared.interfaces import EventStore, UnitOfWork
from painel_suporte.core.shared.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)

from .ports import TicketRepository
from .entities import TicketEntity, TicketStage, TicketStatus, TicketPriority, TicketType
from .dtos import (
    AtividadeOutputDTO,
    AtualizarTicketInputDTO,
    CriarTicketInputDTO,
    EstatisticasTicketsDTO,
    MoverTicketInputDTO,
    ReordenarTicketsInputDTO,
    TicketOutputDTO,
)
from .events import (
    TicketAtualizadoEvent,
    TicketCriadoEvent,
    TicketExcluidoEvent,
    TicketMovidoEvent,
    TicketsReordenadosEvent,
)


logger = logging.getLogger(__name__)


def _obter_ou_falhar(ticket_repo: TicketRepository, ticket_id) -> TicketEntity:
    ticket = ticket_repo.get_by_id(ticket_id)
    if not ticket:
        raise EntityNotFoundError(
            f"Ticket {ticket_id} não encontrado",
            entity_type="Ticket",
            entity_id=ticket_id,
        )
    return ticket


def _proxima_posicao(ticket_repo: TicketRepository, stage: TicketStage) -> int:
    maior = ticket_repo.max_position(stage)
    return 0 if maior is None else maior + 1


class CriarTicketService:
    """
    Use Case: Criar um novo ticket.

    Fluxo:
    1. Criar entidade (validação de título e vocabulários, defaults)
    2. Posicionar no fim da coluna, se `position` não informado
    3. Persistir via repositório
    4. Disparar TicketCriadoEvent

    Nada é persistido se a validação falhar.

    Example:
        service = CriarTicketService(ticket_repo, uow)
        output = service.execute(CriarTicketInputDTO(title="Erro no login"))
        output.status  # "aberto"
    """

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def execute(self, input_dto: CriarTicketInputDTO) -> TicketOutputDTO:
        """
        Raises:
            ValidationError: título ausente ou campo inválido
        """
        with self.uow:
            ticket = TicketEntity.criar(**input_dto.to_dict())
            if ticket.position is None:
                ticket.position = _proxima_posicao(self.ticket_repo, ticket.stage)

            ticket = self.ticket_repo.save(ticket)

            self.uow.publish_event(
                TicketCriadoEvent(
                    aggregate_id=ticket.id,
                    title=ticket.title,
                    priority=ticket.priority.value,
                    type=ticket.type.value,
                    stage=ticket.stage.value,
                    ticket_number=ticket.ticket_number,
                )
            )

        logger.info("Ticket %s criado em %s", ticket.id, ticket.stage.value)
        return TicketOutputDTO.from_entity(ticket)


class AtualizarTicketService:
    """
    Use Case: Atualização parcial de ticket.

    Somente os campos presentes no DTO mudam. Mudança de coluna por aqui
    preserva a `position` informada (drag-and-drop envia ambas).
    """

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarTicketInputDTO) -> TicketOutputDTO:
        """
        Raises:
            EntityNotFoundError: ticket inexistente
            ValidationError: valor inválido
        """
        with self.uow:
            ticket = _obter_ou_falhar(self.ticket_repo, input_dto.ticket_id)
            stage_anterior = ticket.stage

            alterados = ticket.atualizar(input_dto.campos)
            if not alterados:
                return TicketOutputDTO.from_entity(ticket)

            ticket = self.ticket_repo.save(ticket)

            self.uow.publish_event(
                TicketAtualizadoEvent(
                    aggregate_id=ticket.id,
                    campos=alterados,
                    status=ticket.status.value,
                )
            )
            if "stage" in alterados:
                self.uow.publish_event(
                    TicketMovidoEvent(
                        aggregate_id=ticket.id,
                        de=stage_anterior.value,
                        para=ticket.stage.value,
                        position=ticket.position,
                    )
                )

        return TicketOutputDTO.from_entity(ticket)


class ExcluirTicketService:
    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def execute(self, ticket_id: int) -> None:
        """
        Raises:
            EntityNotFoundError: ticket inexistente
        """
        with self.uow:
            ticket = _obter_ou_falhar(self.ticket_repo, ticket_id)
            self.ticket_repo.delete(ticket_id)
            self.uow.publish_event(
                TicketExcluidoEvent(aggregate_id=ticket.id, title=ticket.title)
            )

        logger.info("Ticket %s excluído", ticket_id)


class ListarTicketsService:
    """
    Use Case: Listar tickets (mais recente primeiro).

    Filtros e ordenações do quadro ficam no motor kanban
    (`painel_suporte.core.kanban`).
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self) -> List[TicketOutputDTO]:
        return [TicketOutputDTO.from_entity(t) for t in self.ticket_repo.list_all()]


class ObterTicketService:
    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, ticket_id: int) -> TicketOutputDTO:
        """
        Raises:
            EntityNotFoundError: ticket inexistente
        """
        return TicketOutputDTO.from_entity(_obter_ou_falhar(self.ticket_repo, ticket_id))


class MoverTicketService:
    """
    Use Case: Mover ticket para outra coluna.

    O ticket entra no fim da coluna destino (maior posição + 1).
    Mover para a mesma coluna não altera nada.
    """

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def execute(self, input_dto: MoverTicketInputDTO) -> TicketOutputDTO:
        """
        Raises:
            EntityNotFoundError: ticket inexistente
            ValidationError: coluna inválida
        """
        destino = TicketEntity.parse_enum(TicketStage, input_dto.stage, "stage", None)
        if destino is None:
            raise ValidationError("Coluna é obrigatória", field="stage")

        with self.uow:
            ticket = _obter_ou_falhar(self.ticket_repo, input_dto.ticket_id)
            if ticket.stage == destino:
                return TicketOutputDTO.from_entity(ticket)

            origem = ticket.stage
            ticket.mover_para(destino, _proxima_posicao(self.ticket_repo, destino))
            ticket = self.ticket_repo.save(ticket)

            self.uow.publish_event(
                TicketMovidoEvent(
                    aggregate_id=ticket.id,
                    de=origem.value,
                    para=destino.value,
                    position=ticket.position,
                )
            )

        logger.info("Ticket %s movido de %s para %s", ticket.id, origem.value, destino.value)
        return TicketOutputDTO.from_entity(ticket)


class ReordenarTicketsService:
    """
    Use Case: Persistir a ordem manual de uma coluna.

    Cada id recebe `position = índice` e passa a pertencer à coluna.
    A operação é atômica: um id inexistente desfaz todas as mudanças.
    """

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def execute(self, input_dto: ReordenarTicketsInputDTO) -> List[TicketOutputDTO]:
        """
        Raises:
            ValidationError: coluna inválida ou ids não inteiros
            BusinessRuleViolationError: ids repetidos
            EntityNotFoundError: algum id inexistente
        """
        stage = TicketEntity.parse_enum(TicketStage, input_dto.stage, "stage", None)
        if stage is None:
            raise ValidationError("Coluna é obrigatória", field="stage")

        try:
            ordem = [int(ticket_id) for ticket_id in input_dto.ordem]
        except (TypeError, ValueError):
            raise ValidationError("order deve conter ids inteiros", field="order")
        if len(set(ordem)) != len(ordem):
            raise BusinessRuleViolationError(
                "order contém ids repetidos", rule="reorder_ids_unicos"
            )

        resultado = []
        with self.uow:
            # Todos os ids são resolvidos antes da primeira gravação
            tickets = [_obter_ou_falhar(self.ticket_repo, ticket_id) for ticket_id in ordem]
            for indice, ticket in enumerate(tickets):
                if ticket.stage != stage or ticket.position != indice:
                    ticket.mover_para(stage, indice)
                    ticket = self.ticket_repo.save(ticket)
                resultado.append(TicketOutputDTO.from_entity(ticket))

            self.uow.publish_event(
                TicketsReordenadosEvent(aggregate_id=stage.value, ordem=ordem)
            )

        return resultado


class EstatisticasTicketsService:
    """
    Use Case: Visão geral de contagens para o dashboard.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self) -> EstatisticasTicketsDTO:
        tickets = self.ticket_repo.list_all()
        total = len(tickets)

        por_status = Counter(t.status.value for t in tickets)
        por_tipo = Counter(t.type.value for t in tickets)
        por_prioridade = Counter(t.priority.value for t in tickets)
        por_coluna = Counter(t.stage.value for t in tickets)

        fechados = por_status[TicketStatus.FECHADO.value]
        taxa = round(fechados / total * 100, 1) if total else 0.0

        return EstatisticasTicketsDTO(
            total=total,
            abertos=por_status[TicketStatus.ABERTO.value],
            pendentes=por_status[TicketStatus.PENDENTE.value],
            em_andamento=por_status[TicketStatus.EM_ANDAMENTO.value],
            fechados=fechados,
            taxa_resolucao=taxa,
            por_status={s.value: por_status[s.value] for s in TicketStatus},
            por_tipo={t.value: por_tipo[t.value] for t in TicketType},
            por_prioridade={p.value: por_prioridade[p.value] for p in TicketPriority},
            por_coluna={c.value: por_coluna[c.value] for c in TicketStage},
        )


class ListarAtividadesService:
    """
    Use Case: Histórico de atividades de um ticket.

    Lê os eventos persistidos no Event Store (mais recente primeiro).
    """

    def __init__(self, ticket_repo: TicketRepository, event_store: EventStore):
        self.ticket_repo = ticket_repo
        self.event_store = event_store

    def execute(self, ticket_id: int) -> List[AtividadeOutputDTO]:
        _obter_ou_falhar(self.ticket_repo, ticket_id)
        eventos = self.event_store.get_events_for_aggregate("Ticket", str(ticket_id))
        return [
            AtividadeOutputDTO.from_event_dict(evento)
            for evento in reversed(eventos)
        ]
