"""
Testes para handlers Celery e publishers de eventos.

As tasks são chamadas diretamente; chamadas `.delay` encadeadas são
substituídas por mocks.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from painel_suporte.adapters.django_app.events import handlers
from painel_suporte.adapters.django_app.events.publishers import (
    CeleryEventPublisher,
    CompositeEventPublisher,
    InMemoryEventPublisher,
    LoggingEventPublisher,
    get_event_publisher,
)
from painel_suporte.adapters.django_app.tickets.models import DomainEventModel
from painel_suporte.core.tickets.events import TicketCriadoEvent, TicketMovidoEvent


def evento_criado(priority='media'):
    return TicketCriadoEvent(
        aggregate_id=1, title='Sistema fora do ar', priority=priority, type='erro_temporario'
    ).to_dict()


class TestHandlersDeTicket:

    def test_criado_com_prioridade_alta_notifica(self):
        with patch.object(handlers.notify_support_team, 'delay') as notify, \
                patch.object(handlers.record_metric, 'delay') as metric:
            handlers.handle_ticket_criado(evento_criado('alta'))

        notify.assert_called_once()
        assert notify.call_args.kwargs['priority'] == 'high'
        metric.assert_called_once_with(
            metric_name='tickets_created',
            value=1,
            tags={'priority': 'alta', 'type': 'erro_temporario'},
        )

    def test_criado_sem_prioridade_alta_nao_notifica(self):
        with patch.object(handlers.notify_support_team, 'delay') as notify, \
                patch.object(handlers.record_metric, 'delay'):
            handlers.handle_ticket_criado(evento_criado('baixa'))

        notify.assert_not_called()

    def test_movido_verifica_wip_do_destino(self):
        evento = TicketMovidoEvent(aggregate_id=1, de='backlog', para='producao').to_dict()

        with patch.object(handlers.check_wip_limits, 'delay') as check:
            handlers.handle_ticket_movido(evento)

        check.assert_called_once_with(stage='producao')

    def test_arquivamento_registra_metrica(self):
        evento = {'aggregate_id': '1', 'data': {'campos': ['status'], 'status': 'fechado'}}

        with patch.object(handlers.record_metric, 'delay') as metric:
            handlers.handle_ticket_atualizado(evento)

        metric.assert_called_once_with(metric_name='tickets_archived', value=1, tags={})


class TestDispatcher:

    def test_roteia_pelo_tipo(self):
        dados = evento_criado()
        with patch.object(handlers.handle_ticket_criado, 'delay') as handler:
            handlers.dispatch_domain_event('TicketCriadoEvent', dados)

        handler.assert_called_once_with(dados)

    def test_tipo_sem_handler_e_ignorado(self):
        handlers.dispatch_domain_event('TicketsReordenadosEvent', {})


@pytest.mark.django_db
class TestTarefasAgendadas:

    def test_check_wip_limits(self, ticket_model_factory):
        for posicao in range(9):
            ticket_model_factory(stage='desenvolvimento', position=posicao)

        with patch.object(handlers.notify_support_team, 'delay') as notify:
            resultado = handlers.check_wip_limits()

        assert resultado['desenvolvimento'] == {'count': 9, 'limit': 8, 'overLimit': True}
        assert resultado['backlog']['overLimit'] is False
        notify.assert_called_once()

    def test_check_wip_limits_de_uma_coluna(self, ticket_model_factory):
        with patch.object(handlers.notify_support_team, 'delay'):
            resultado = handlers.check_wip_limits(stage='producao')

        assert list(resultado) == ['producao']

    def test_snapshot_estatisticas(self, ticket_model_factory):
        ticket_model_factory(status='fechado')
        assert handlers.snapshot_estatisticas()['total'] == 1

    def test_cleanup_old_events(self):
        agora = datetime.now(timezone.utc)
        DomainEventModel.objects.create(
            event_id='antigo', event_type='TicketCriadoEvent', aggregate_type='Ticket',
            aggregate_id='1', occurred_at=agora - timedelta(days=120),
        )
        DomainEventModel.objects.create(
            event_id='recente', event_type='TicketCriadoEvent', aggregate_type='Ticket',
            aggregate_id='2', occurred_at=agora - timedelta(days=3),
        )

        assert handlers.cleanup_old_events(days=90) == 1
        assert list(DomainEventModel.objects.values_list('event_id', flat=True)) == ['recente']


class TestPublishers:

    def test_factory_por_modo(self):
        assert isinstance(get_event_publisher('celery'), CeleryEventPublisher)
        assert isinstance(get_event_publisher('memory'), InMemoryEventPublisher)
        assert isinstance(get_event_publisher('sync'), LoggingEventPublisher)

    def test_celery_envia_para_dispatcher_e_notifica_assinantes(self):
        publisher = CeleryEventPublisher(also_log=False)
        recebidos = []
        publisher.subscribe(recebidos.append)
        evento = TicketCriadoEvent(aggregate_id=3, title='X')

        with patch.object(handlers.dispatch_domain_event, 'delay') as delay:
            publisher.publish(evento)

        delay.assert_called_once_with('TicketCriadoEvent', evento.to_dict())
        assert recebidos == [evento]

    def test_logging_chama_handlers_registrados(self):
        publisher = LoggingEventPublisher()
        recebidos = []
        publisher.register_handler('TicketCriadoEvent', recebidos.append)

        publisher.publish(TicketCriadoEvent(aggregate_id=3, title='X'))
        publisher.publish(TicketMovidoEvent(aggregate_id=3, para='producao'))

        assert len(recebidos) == 1

    def test_composite_isola_falhas(self):
        class Quebrado(InMemoryEventPublisher):
            def publish(self, event):
                raise RuntimeError('fora')

        memoria = InMemoryEventPublisher()
        composite = CompositeEventPublisher([Quebrado(), memoria])

        composite.publish(TicketCriadoEvent(aggregate_id=3, title='X'))

        assert len(memoria.published_events) == 1

    def test_cancelar_assinatura(self):
        publisher = InMemoryEventPublisher()
        recebidos = []
        cancelar = publisher.subscribe(recebidos.append)

        cancelar()
        publisher.publish(TicketCriadoEvent(aggregate_id=3, title='X'))

        assert recebidos == []
