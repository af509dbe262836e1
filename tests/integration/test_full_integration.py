"""
Testes de Integração ponta a ponta com o TestingContainer.

Fluxo: criar tickets -> quadro kanban assinado em eventos -> mover e
reordenar -> histórico -> relatórios -> sincronização.
"""

import pytest

from painel_suporte.config.container import TestingContainer
from painel_suporte.core.kanban.engine import CriteriosKanban
from painel_suporte.core.reports.dtos import SalvarRelatorioInputDTO
from painel_suporte.core.reports.ports import InMemoryReportCache
from painel_suporte.core.reports.sync import SincronizarRelatoriosService
from painel_suporte.core.shared.exceptions import EntityNotFoundError
from painel_suporte.core.tickets.dtos import (
    AtualizarTicketInputDTO,
    CriarTicketInputDTO,
    MoverTicketInputDTO,
)
from painel_suporte.adapters.sync import ServiceReportGateway


pytestmark = pytest.mark.integration


@pytest.fixture
def container():
    return TestingContainer(wip_limits={
        'backlog': 1000, 'desenvolvimento': 2, 'homologacao': 6, 'producao': 4,
    })


def criar(container, **payload):
    return container.criar_ticket_service().execute(CriarTicketInputDTO.from_payload(payload))


class TestFluxoDoQuadro:

    def test_quadro_acompanha_eventos(self, container):
        quadro = container.quadro_kanban()
        quadro.conectar(container.event_publisher())

        a = criar(container, title='Erro no login', priority='alta')
        b = criar(container, title='Ajuste de férias', stage='desenvolvimento')

        assert {t.id for t in quadro.tickets} == {a.id, b.id}

        container.mover_ticket_service().execute(
            MoverTicketInputDTO(ticket_id=a.id, stage='desenvolvimento')
        )
        assert [t.id for t in quadro.visao(CriteriosKanban(stage='desenvolvimento'))] == [b.id, a.id]

        quadro.mover(a.id, 'desenvolvimento', 0)
        assert [t.id for t in quadro.visao(CriteriosKanban(stage='desenvolvimento'))] == [a.id, b.id]

        criar(container, title='Terceiro', stage='desenvolvimento')
        assert quadro.status_wip()['desenvolvimento']['overLimit'] is True

    def test_arquivar_remove_do_quadro(self, container):
        quadro = container.quadro_kanban()
        quadro.conectar(container.event_publisher())
        ticket = criar(container, title='Resolvido')

        container.atualizar_ticket_service().execute(
            AtualizarTicketInputDTO.from_payload(ticket.id, {'status': 'fechado'})
        )

        assert quadro.visao() == []
        assert [t.id for t in quadro.visao(CriteriosKanban(show_archived=True))] == [ticket.id]

    def test_historico_de_atividades(self, container):
        ticket = criar(container, title='Com histórico')
        container.mover_ticket_service().execute(
            MoverTicketInputDTO(ticket_id=ticket.id, stage='producao')
        )
        container.excluir_ticket_service().execute(ticket.id)

        with pytest.raises(EntityNotFoundError):
            container.listar_atividades_service().execute(ticket.id)

        eventos = container.event_store().get_events_for_aggregate('Ticket', str(ticket.id))
        assert [e['event_type'] for e in eventos] == [
            'TicketCriadoEvent', 'TicketMovidoEvent', 'TicketExcluidoEvent',
        ]

    def test_quadro_kanban_service_usa_limites_do_container(self, container):
        for titulo in ('A', 'B', 'C'):
            criar(container, title=titulo, stage='desenvolvimento')

        quadro = container.quadro_kanban_service().execute()

        assert quadro['desenvolvimento']['limit'] == 2
        assert quadro['desenvolvimento']['overLimit'] is True


class TestFluxoDeRelatorios:

    def test_sincronizacao_com_store_local(self, container, weekly_payload):
        container.salvar_relatorio_service().execute(
            SalvarRelatorioInputDTO(kind='weekly', key='2025-W48', data=weekly_payload)
        )
        cache = InMemoryReportCache({'weekly': {
            '2025-W48': {'period': 'versão antiga'},
            '2025-W47': dict(weekly_payload, period='só local'),
        }})
        gateway = ServiceReportGateway(
            container.listar_relatorios_service(),
            container.salvar_relatorio_service(),
        )

        resultado = SincronizarRelatoriosService(gateway, cache).execute('weekly')

        assert resultado.completo
        assert resultado.dados['2025-W48']['period'] == '24/11 a 30/11/2025'
        assert resultado.enviados == ['2025-W47']
        chaves = [r.key for r in container.listar_relatorios_service().execute('weekly')]
        assert chaves == ['2025-W48', '2025-W47']

    def test_eventos_de_relatorio_publicados(self, container, monthly_payload):
        container.salvar_relatorio_service().execute(
            SalvarRelatorioInputDTO(kind='monthly', key='2025-11', data=monthly_payload)
        )
        container.excluir_relatorio_service().execute('monthly', '2025-11')

        tipos = [e.event_type for e in container.event_publisher().published_events]
        assert tipos == ['RelatorioSalvoEvent', 'RelatorioExcluidoEvent']
