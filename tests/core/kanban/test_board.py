"""
Testes Unitários para o estado do quadro kanban (reordenação otimista,
recarga por sequência e assinatura de eventos).
"""

import pytest

from painel_suporte.adapters.django_app.events.publishers import InMemoryEventPublisher
from painel_suporte.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from painel_suporte.core.kanban.board import QuadroKanban
from painel_suporte.core.kanban.engine import CriteriosKanban
from painel_suporte.core.shared.exceptions import EntityNotFoundError, ValidationError
from painel_suporte.core.tickets.dtos import CriarTicketInputDTO
from painel_suporte.core.tickets.entities import TicketEntity, TicketStage
from painel_suporte.core.tickets.ports import InMemoryTicketRepository
from painel_suporte.core.tickets.use_cases import CriarTicketService, ReordenarTicketsService


class ReordenarComFalha:
    """Serviço de reordenação que sempre falha."""

    def execute(self, input_dto):
        raise EntityNotFoundError("Ticket removido por outro usuário", entity_type="Ticket")


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def ticket_repo():
    return InMemoryTicketRepository()


@pytest.fixture
def uow(publisher):
    return InMemoryUnitOfWork(publisher)


@pytest.fixture
def criar(ticket_repo, uow):
    service = CriarTicketService(ticket_repo, uow)

    def _criar(title, **payload):
        return service.execute(CriarTicketInputDTO.from_payload(dict(payload, title=title)))

    return _criar


@pytest.fixture
def quadro(ticket_repo, uow):
    return QuadroKanban(ticket_repo, ReordenarTicketsService(ticket_repo, uow))


def ids_da_coluna(quadro, stage):
    return [t.id for t in quadro.visao(CriteriosKanban(stage=stage))]


class TestMover:

    def test_mover_entre_colunas(self, criar, quadro, ticket_repo):
        a = criar("A")
        b = criar("B", stage="homologacao")
        c = criar("C", stage="homologacao")
        quadro.recarregar()

        ordem = quadro.mover(a.id, "homologacao", 1)

        assert ordem == [b.id, a.id, c.id]
        assert ids_da_coluna(quadro, "homologacao") == [b.id, a.id, c.id]
        persistido = ticket_repo.get_by_id(a.id)
        assert persistido.stage == TicketStage.HOMOLOGACAO
        assert persistido.position == 1

    def test_indice_fora_do_intervalo_vai_para_o_fim(self, criar, quadro):
        a = criar("A")
        b = criar("B", stage="producao")
        quadro.recarregar()

        assert quadro.mover(a.id, "producao", 99) == [b.id, a.id]

    def test_reordenar_dentro_da_coluna(self, criar, quadro):
        a = criar("A")
        b = criar("B")
        c = criar("C")
        quadro.recarregar()

        assert quadro.mover(c.id, "backlog", 0) == [c.id, a.id, b.id]

    def test_falha_restaura_ordem_anterior(self, criar, ticket_repo):
        a = criar("A")
        b = criar("B")
        quadro = QuadroKanban(ticket_repo, ReordenarComFalha())
        quadro.recarregar()

        with pytest.raises(EntityNotFoundError):
            quadro.mover(b.id, "producao", 0)

        assert ids_da_coluna(quadro, "backlog") == [a.id, b.id]
        assert ids_da_coluna(quadro, "producao") == []

    def test_ticket_fora_do_quadro(self, quadro):
        with pytest.raises(EntityNotFoundError):
            quadro.mover(42, "backlog", 0)

    def test_coluna_invalida(self, criar, quadro):
        a = criar("A")
        quadro.recarregar()
        with pytest.raises(ValidationError):
            quadro.mover(a.id, "deploy", 0)


class TestRecarga:

    def test_resposta_antiga_e_descartada(self, quadro):
        antiga = quadro.iniciar_recarga()
        nova = quadro.iniciar_recarga()
        ticket_novo = TicketEntity(id=2, title="Novo")

        assert quadro.concluir_recarga(nova, [ticket_novo])
        assert not quadro.concluir_recarga(antiga, [TicketEntity(id=1, title="Velho")])
        assert quadro.tickets == [ticket_novo]

    def test_conectar_recarrega_a_cada_evento(self, criar, quadro, publisher):
        cancelar = quadro.conectar(publisher)

        a = criar("A")
        assert [t.id for t in quadro.tickets] == [a.id]

        cancelar()
        criar("B")
        assert [t.id for t in quadro.tickets] == [a.id]


class TestStatusWip:

    def test_coluna_acima_do_limite(self, criar, ticket_repo, uow):
        quadro = QuadroKanban(
            ticket_repo,
            ReordenarTicketsService(ticket_repo, uow),
            wip_limits={"backlog": 10, "desenvolvimento": 1, "homologacao": 6, "producao": 4},
        )
        criar("A", stage="desenvolvimento")
        criar("B", stage="desenvolvimento")
        criar("C", stage="desenvolvimento", status="fechado")
        quadro.recarregar()

        status = quadro.status_wip()

        assert status["desenvolvimento"] == {"count": 2, "limit": 1, "overLimit": True}
        assert status["producao"]["overLimit"] is False
