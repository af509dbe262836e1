"""
Testes para a API JSON de relatórios periódicos.
"""

import pytest

from painel_suporte.adapters.django_app.reports.models import ReportModel


pytestmark = pytest.mark.django_db


class TestSalvarRelatorio:

    def test_cria_relatorio_semanal(self, api_client, weekly_payload):
        response = api_client.post_json(
            '/reports/weekly', {'weekKey': '2025-W48', 'data': weekly_payload}
        )

        assert response.status_code == 200
        body = response.json()
        assert body['weekKey'] == '2025-W48'
        assert body['period'] == '24/11 a 30/11/2025'
        assert body['data']['summary']['opened'] == 42
        assert ReportModel.objects.count() == 1

    def test_mesma_chave_substitui(self, api_client, monthly_payload):
        api_client.post_json('/reports/monthly', {'monthKey': '2025-11', 'data': monthly_payload})
        novo = dict(monthly_payload, summary=dict(monthly_payload['summary'], fcr=80))

        response = api_client.post_json(
            '/reports/monthly', {'monthKey': '2025-11', 'period': 'Nov/25', 'data': novo}
        )

        assert response.status_code == 200
        assert response.json()['period'] == 'Nov/25'
        registros = api_client.get('/reports/monthly').json()
        assert len(registros) == 1
        assert registros[0]['data']['summary']['fcr'] == 80

    def test_chave_generica(self, api_client, quarterly_payload):
        response = api_client.post_json('/reports/quarterly', {'key': '2025-Q4', 'data': quarterly_payload})
        assert response.json()['quarterKey'] == '2025-Q4'

    def test_chave_fora_do_formato(self, api_client, weekly_payload):
        response = api_client.post_json(
            '/reports/weekly', {'weekKey': '2025-48', 'data': weekly_payload}
        )

        assert response.status_code == 400
        body = response.json()
        assert body['error'] == 'Formato inválido. Use YYYY-Www (ex: 2025-W49)'
        assert body['field'] == 'weekKey'
        assert ReportModel.objects.count() == 0

    def test_sem_period(self, api_client, weekly_payload):
        del weekly_payload['period']

        response = api_client.post_json(
            '/reports/weekly', {'weekKey': '2025-W48', 'data': weekly_payload}
        )

        assert response.status_code == 400
        assert response.json()['field'] == 'period'

    def test_payload_fora_do_schema(self, api_client):
        response = api_client.post_json(
            '/reports/monthly', {'monthKey': '2025-11', 'data': {'period': 'Nov', 'summary': {}}}
        )

        assert response.status_code == 400
        assert response.json()['field'].startswith('data.summary')

    def test_tipo_desconhecido(self, api_client):
        response = api_client.get('/reports/yearly')

        assert response.status_code == 400
        assert response.json()['field'] == 'kind'


class TestConsultarRelatorios:

    def test_lista_chave_decrescente(self, api_client, weekly_payload):
        for key in ('2025-W46', '2025-W48', '2025-W47'):
            api_client.post_json('/reports/weekly', {'weekKey': key, 'data': weekly_payload})

        chaves = [r['weekKey'] for r in api_client.get('/reports/weekly').json()]

        assert chaves == ['2025-W48', '2025-W47', '2025-W46']

    def test_lista_vazia(self, api_client):
        assert api_client.get('/reports/quarterly').json() == []

    def test_obter(self, api_client, quarterly_payload):
        api_client.post_json('/reports/quarterly', {'quarterKey': '2025-Q4', 'data': quarterly_payload})

        response = api_client.get('/reports/quarterly/2025-Q4')

        assert response.status_code == 200
        assert response.json()['data']['jiraIntegration']['bugsFixed'] == 34

    def test_obter_inexistente(self, api_client):
        response = api_client.get('/reports/monthly/2025-01')

        assert response.status_code == 404
        assert response.json()['error'] == 'Relatório não encontrado'

    def test_excluir(self, api_client, weekly_payload):
        api_client.post_json('/reports/weekly', {'weekKey': '2025-W48', 'data': weekly_payload})

        response = api_client.delete('/reports/weekly/2025-W48')

        assert response.status_code == 204
        assert api_client.get('/reports/weekly/2025-W48').status_code == 404
