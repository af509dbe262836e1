"""
Testes de Integração para Repositórios e Mappers Django.

Banco SQLite em memória (pytest-django).
"""

import pytest
from datetime import datetime, timezone

from painel_suporte.adapters.django_app.reports.models import ReportModel
from painel_suporte.adapters.django_app.reports.repositories import DjangoReportRepository
from painel_suporte.adapters.django_app.tickets.mappers import DomainEventMapper, TicketMapper
from painel_suporte.adapters.django_app.tickets.models import DomainEventModel, TicketModel
from painel_suporte.adapters.django_app.tickets.repositories import (
    DjangoEventStore,
    DjangoTicketRepository,
)
from painel_suporte.core.reports.entities import RelatorioEntity, ReportKind
from painel_suporte.core.tickets.entities import (
    TicketEntity,
    TicketPriority,
    TicketStage,
    TicketStatus,
    UsuarioRef,
)
from painel_suporte.core.tickets.events import TicketCriadoEvent, TicketMovidoEvent


# =============================================================================
# Mapper
# =============================================================================

class TestTicketMapper:

    def test_to_model_e_volta(self):
        entity = TicketEntity.criar(
            title="Erro no login",
            ticket_number=77,
            priority="alta",
            stage="homologacao",
            creator={"id": 5, "name": "Bia"},
        )

        model = TicketMapper.to_model(entity)
        assert model.priority == "alta"
        assert model.stage == "homologacao"
        assert model.creator == {"id": 5, "name": "Bia", "email": None, "avatar": None}

        volta = TicketMapper.to_entity(model)
        assert volta.priority == TicketPriority.ALTA
        assert volta.stage == TicketStage.HOMOLOGACAO
        assert volta.creator == UsuarioRef(id=5, name="Bia")
        assert volta.ticket_number == 77

    def test_evento_para_dict(self):
        evento = TicketCriadoEvent(aggregate_id=1, title="Erro", priority="alta")

        model = DomainEventMapper.to_model(evento)
        dados = DomainEventMapper.to_dict(model)

        assert dados["event_type"] == "TicketCriadoEvent"
        assert dados["aggregate_id"] == "1"
        assert dados["data"]["title"] == "Erro"
        assert dados["data"] == evento.to_dict()["data"]


# =============================================================================
# DjangoTicketRepository
# =============================================================================

@pytest.mark.django_db
class TestDjangoTicketRepository:

    @pytest.fixture
    def repo(self):
        return DjangoTicketRepository()

    def test_save_atribui_id(self, repo):
        ticket = repo.save(TicketEntity.criar(title="Novo"))

        assert ticket.id is not None
        assert TicketModel.objects.filter(id=ticket.id).exists()

    def test_save_atualiza_existente(self, repo):
        ticket = repo.save(TicketEntity.criar(title="Original"))
        ticket.atualizar({"title": "Editado", "status": "pendente"})

        repo.save(ticket)

        recuperado = repo.get_by_id(ticket.id)
        assert recuperado.title == "Editado"
        assert recuperado.status == TicketStatus.PENDENTE
        assert repo.count() == 1

    def test_get_by_id_inexistente(self, repo):
        assert repo.get_by_id(999) is None
        assert repo.get_by_id("abc") is None

    def test_list_all_mais_recentes_primeiro(self, repo, ticket_model_factory):
        antigo = ticket_model_factory(title="Antigo", created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        novo = ticket_model_factory(title="Novo", created_at=datetime(2025, 6, 1, tzinfo=timezone.utc))

        assert [t.id for t in repo.list_all()] == [novo.id, antigo.id]

    def test_list_by_stage_e_max_position(self, repo, ticket_model_factory):
        ticket_model_factory(stage="producao", position=2)
        ticket_model_factory(stage="producao", position=7)
        ticket_model_factory(stage="backlog", position=30)

        assert len(repo.list_by_stage(TicketStage.PRODUCAO)) == 2
        assert repo.max_position(TicketStage.PRODUCAO) == 7
        assert repo.max_position(TicketStage.HOMOLOGACAO) is None

    def test_delete(self, repo):
        ticket = repo.save(TicketEntity.criar(title="Apagar"))

        repo.delete(ticket.id)

        assert not repo.exists(ticket.id)
        repo.delete(ticket.id)


# =============================================================================
# DjangoEventStore
# =============================================================================

@pytest.mark.django_db
class TestDjangoEventStore:

    def test_append_e_consulta_por_agregado(self):
        store = DjangoEventStore()
        store.append(TicketCriadoEvent(aggregate_id=1, title="A"))
        store.append(TicketMovidoEvent(aggregate_id=1, de="backlog", para="producao"))
        store.append(TicketCriadoEvent(aggregate_id=2, title="B"))

        eventos = store.get_events_for_aggregate("Ticket", "1")

        assert [e["event_type"] for e in eventos] == ["TicketCriadoEvent", "TicketMovidoEvent"]
        assert eventos[1]["data"]["para"] == "producao"
        assert DomainEventModel.objects.count() == 3


# =============================================================================
# DjangoReportRepository
# =============================================================================

@pytest.mark.django_db
class TestDjangoReportRepository:

    @pytest.fixture
    def repo(self):
        return DjangoReportRepository()

    def test_upsert_mantem_um_registro(self, repo, weekly_payload):
        primeiro = repo.save(RelatorioEntity.criar("weekly", "2025-W48", weekly_payload))

        substituto = RelatorioEntity.criar(
            "weekly", "2025-W48", dict(weekly_payload, period="Semana revisada")
        )
        segundo = repo.save(substituto)

        assert ReportModel.objects.count() == 1
        assert segundo.id == primeiro.id
        assert segundo.period == "Semana revisada"
        assert segundo.created_at == primeiro.created_at

    def test_get_e_delete(self, repo, monthly_payload):
        repo.save(RelatorioEntity.criar("monthly", "2025-11", monthly_payload))

        relatorio = repo.get(ReportKind.MONTHLY, "2025-11")
        assert relatorio.data["summary"]["fcr"] == 71

        repo.delete(ReportKind.MONTHLY, "2025-11")
        assert repo.get(ReportKind.MONTHLY, "2025-11") is None

    def test_mesma_chave_em_tipos_diferentes(self, repo, weekly_payload, monthly_payload):
        repo.save(RelatorioEntity.criar("weekly", "2025-W48", weekly_payload))
        repo.save(RelatorioEntity.criar("monthly", "2025-11", monthly_payload))

        assert [r.key for r in repo.list_by_kind(ReportKind.WEEKLY)] == ["2025-W48"]
        assert repo.count() == 2

    def test_list_by_kind_chave_decrescente(self, repo, quarterly_payload):
        for key in ("2025-Q2", "2025-Q4", "2024-Q4"):
            repo.save(RelatorioEntity.criar("quarterly", key, quarterly_payload))

        chaves = [r.key for r in repo.list_by_kind(ReportKind.QUARTERLY)]

        assert chaves == ["2025-Q4", "2025-Q2", "2024-Q4"]
