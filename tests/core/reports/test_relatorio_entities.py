"""
Testes Unitários para Entidades e Schemas de Relatórios.
"""

import pytest

from painel_suporte.core.reports.entities import RelatorioEntity, ReportKind, validar_chave
from painel_suporte.core.reports.schemas import validar_payload
from painel_suporte.core.shared.exceptions import ValidationError


class TestValidarChave:

    @pytest.mark.parametrize("kind,key", [
        (ReportKind.WEEKLY, "2025-W49"),
        (ReportKind.WEEKLY, "2026-W01"),
        (ReportKind.MONTHLY, "2025-11"),
        (ReportKind.QUARTERLY, "2025-Q4"),
    ])
    def test_chaves_validas(self, kind, key):
        assert validar_chave(kind, key) == key

    def test_remove_espacos(self):
        assert validar_chave(ReportKind.MONTHLY, " 2025-01 ") == "2025-01"

    @pytest.mark.parametrize("kind,key", [
        (ReportKind.WEEKLY, "2025-49"),
        (ReportKind.WEEKLY, "2025-W54"),
        (ReportKind.WEEKLY, "2025-W00"),
        (ReportKind.MONTHLY, "2025-13"),
        (ReportKind.MONTHLY, "2025-1"),
        (ReportKind.QUARTERLY, "2025-Q5"),
        (ReportKind.QUARTERLY, "2025-4"),
        (ReportKind.WEEKLY, "２０２５-W01"),
        (ReportKind.MONTHLY, "2025-١٢"),
    ])
    def test_formato_invalido(self, kind, key):
        with pytest.raises(ValidationError) as exc:
            validar_chave(kind, key)
        assert exc.value.message == f"Formato inválido. Use {kind.formato}"
        assert exc.value.field == kind.chave_api

    @pytest.mark.parametrize("key", [None, "", "  "])
    def test_chave_ausente(self, key):
        with pytest.raises(ValidationError) as exc:
            validar_chave(ReportKind.WEEKLY, key)
        assert exc.value.field == "weekKey"


class TestReportKind:

    def test_from_string(self):
        assert ReportKind.from_string("Monthly") == ReportKind.MONTHLY

    def test_tipo_desconhecido(self):
        with pytest.raises(ValidationError) as exc:
            ReportKind.from_string("yearly")
        assert exc.value.field == "kind"

    def test_nome_da_chave_na_api(self):
        assert [k.chave_api for k in ReportKind] == ["weekKey", "monthKey", "quarterKey"]


class TestValidarPayload:

    def test_payload_semanal_valido(self, weekly_payload):
        assert validar_payload("weekly", weekly_payload) == weekly_payload

    def test_chaves_extras_preservadas(self, monthly_payload):
        monthly_payload["observacoes"] = "Black Friday"
        assert validar_payload("monthly", monthly_payload)["observacoes"] == "Black Friday"

    def test_indicador_ausente(self, weekly_payload):
        del weekly_payload["summary"]["tma"]
        with pytest.raises(ValidationError) as exc:
            validar_payload("weekly", weekly_payload)
        assert exc.value.field == "data.summary.tma"

    def test_indicador_nao_numerico(self, quarterly_payload):
        quarterly_payload["jiraIntegration"]["bugsFixed"] = "34"
        with pytest.raises(ValidationError):
            validar_payload("quarterly", quarterly_payload)

    def test_booleano_nao_e_numero(self, monthly_payload):
        monthly_payload["summary"]["fcr"] = True
        with pytest.raises(ValidationError):
            validar_payload("monthly", monthly_payload)

    def test_grupo_ausente(self, quarterly_payload):
        del quarterly_payload["jiraIntegration"]
        with pytest.raises(ValidationError) as exc:
            validar_payload("quarterly", quarterly_payload)
        assert exc.value.field == "data.jiraIntegration"

    def test_serie_malformada(self, weekly_payload):
        weekly_payload["dailyVolume"] = {"Seg": 10}
        with pytest.raises(ValidationError) as exc:
            validar_payload("weekly", weekly_payload)
        assert exc.value.field == "data.dailyVolume"

    @pytest.mark.parametrize("data", [None, {}, [], "texto"])
    def test_payload_ausente(self, data):
        with pytest.raises(ValidationError) as exc:
            validar_payload("weekly", data)
        assert exc.value.field == "data"


class TestRelatorioEntity:

    def test_criar_usa_period_do_payload(self, weekly_payload):
        relatorio = RelatorioEntity.criar("weekly", "2025-W48", weekly_payload)

        assert relatorio.kind == ReportKind.WEEKLY
        assert relatorio.period == "24/11 a 30/11/2025"
        assert relatorio.id is None

    def test_period_explicito_tem_precedencia(self, weekly_payload):
        relatorio = RelatorioEntity.criar(
            "weekly", "2025-W48", weekly_payload, period="Semana 48"
        )
        assert relatorio.period == "Semana 48"

    def test_sem_period(self, monthly_payload):
        del monthly_payload["period"]
        with pytest.raises(ValidationError) as exc:
            RelatorioEntity.criar("monthly", "2025-11", monthly_payload)
        assert exc.value.field == "period"

    def test_substituir_troca_payload_inteiro(self, weekly_payload):
        relatorio = RelatorioEntity.criar("weekly", "2025-W48", weekly_payload)
        criado_em = relatorio.created_at

        novo = {
            "period": "Semana revisada",
            "summary": {"opened": 1, "closed": 1, "backlog": 0, "tma": 1, "tmaGoal": 6, "slaRisk": 0},
        }
        relatorio.substituir(novo)

        assert relatorio.data == novo
        assert "dailyVolume" not in relatorio.data
        assert relatorio.period == "Semana revisada"
        assert relatorio.created_at == criado_em
        assert relatorio.updated_at >= criado_em
