"""
Testes Unitários para Use Cases de Relatórios.

Usam os adapters em memória (repositório, Unit of Work e publisher).
"""

import pytest

from painel_suporte.adapters.django_app.events.publishers import InMemoryEventPublisher
from painel_suporte.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from painel_suporte.core.reports.dtos import SalvarRelatorioInputDTO
from painel_suporte.core.reports.events import RelatorioExcluidoEvent, RelatorioSalvoEvent
from painel_suporte.core.reports.ports import InMemoryReportRepository
from painel_suporte.core.reports.use_cases import (
    ExcluirRelatorioService,
    ListarRelatoriosService,
    ObterRelatorioService,
    SalvarRelatorioService,
)
from painel_suporte.core.shared.exceptions import EntityNotFoundError, ValidationError
from painel_suporte.core.shared.interfaces import InMemoryEventStore


@pytest.fixture
def report_repo():
    return InMemoryReportRepository()


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def uow(publisher):
    return InMemoryUnitOfWork(publisher, InMemoryEventStore())


@pytest.fixture
def salvar(report_repo, uow):
    return SalvarRelatorioService(report_repo, uow)


class TestSalvarRelatorioService:

    def test_cria_relatorio(self, salvar, report_repo, publisher, weekly_payload):
        output = salvar.execute(
            SalvarRelatorioInputDTO(kind="weekly", key="2025-W48", data=weekly_payload)
        )

        assert output.id == 1
        assert output.key == "2025-W48"
        assert output.period == "24/11 a 30/11/2025"
        assert report_repo.count() == 1

        evento = publisher.published_events[0]
        assert isinstance(evento, RelatorioSalvoEvent)
        assert evento.aggregate_id == "weekly:2025-W48"
        assert evento.criado is True

    def test_mesma_chave_substitui(self, salvar, report_repo, publisher, monthly_payload):
        primeiro = salvar.execute(
            SalvarRelatorioInputDTO(kind="monthly", key="2025-11", data=monthly_payload)
        )
        novo_payload = dict(monthly_payload, byType=[])
        segundo = salvar.execute(
            SalvarRelatorioInputDTO(kind="monthly", key="2025-11", data=novo_payload)
        )

        assert report_repo.count() == 1
        assert segundo.id == primeiro.id
        assert segundo.data["byType"] == []
        assert segundo.created_at == primeiro.created_at
        assert publisher.published_events[-1].criado is False

    def test_chave_invalida_nao_persiste(self, salvar, report_repo, weekly_payload):
        with pytest.raises(ValidationError) as exc:
            salvar.execute(
                SalvarRelatorioInputDTO(kind="weekly", key="2025-49", data=weekly_payload)
            )
        assert exc.value.to_dict()["error"] == "Formato inválido. Use YYYY-Www (ex: 2025-W49)"
        assert report_repo.count() == 0

    def test_payload_fora_do_schema(self, salvar, report_repo):
        with pytest.raises(ValidationError):
            salvar.execute(
                SalvarRelatorioInputDTO(
                    kind="quarterly", key="2025-Q4", data={"period": "Q4"}
                )
            )
        assert report_repo.count() == 0

    def test_from_payload_com_chave_especifica(self, quarterly_payload):
        dto = SalvarRelatorioInputDTO.from_payload(
            "quarterly", {"quarterKey": "2025-Q4", "data": quarterly_payload}
        )
        assert dto.key == "2025-Q4"
        assert dto.kind == "quarterly"


class TestListarEObterRelatorios:

    def test_lista_chave_decrescente(self, salvar, report_repo, weekly_payload):
        for key in ("2025-W47", "2025-W49", "2025-W48"):
            salvar.execute(SalvarRelatorioInputDTO(kind="weekly", key=key, data=weekly_payload))

        chaves = [r.key for r in ListarRelatoriosService(report_repo).execute("weekly")]

        assert chaves == ["2025-W49", "2025-W48", "2025-W47"]

    def test_lista_separada_por_tipo(self, salvar, report_repo, weekly_payload):
        salvar.execute(SalvarRelatorioInputDTO(kind="weekly", key="2025-W48", data=weekly_payload))
        assert ListarRelatoriosService(report_repo).execute("monthly") == []

    def test_obter(self, salvar, report_repo, weekly_payload):
        salvar.execute(SalvarRelatorioInputDTO(kind="weekly", key="2025-W48", data=weekly_payload))

        output = ObterRelatorioService(report_repo).execute("weekly", "2025-W48")

        assert output.to_dict()["weekKey"] == "2025-W48"
        assert output.data["summary"]["opened"] == 42

    def test_obter_inexistente(self, report_repo):
        with pytest.raises(EntityNotFoundError) as exc:
            ObterRelatorioService(report_repo).execute("weekly", "2025-W01")
        assert exc.value.message == "Relatório não encontrado"


class TestExcluirRelatorioService:

    def test_exclui(self, salvar, report_repo, uow, publisher, weekly_payload):
        salvar.execute(SalvarRelatorioInputDTO(kind="weekly", key="2025-W48", data=weekly_payload))

        ExcluirRelatorioService(report_repo, uow).execute("weekly", "2025-W48")

        assert report_repo.count() == 0
        assert isinstance(publisher.published_events[-1], RelatorioExcluidoEvent)

    def test_excluir_inexistente(self, report_repo, uow):
        with pytest.raises(EntityNotFoundError):
            ExcluirRelatorioService(report_repo, uow).execute("monthly", "2025-11")
