"""
Dependency Injection Container.

Usa dependency-injector:
- Singleton: uma instância por processo (repositories, publisher)
- Factory: nova instância por chamada (services, UoW)
- Configuration: valores vindos do settings Django

Adapters que dependem do ORM são importados sob demanda para que o
container possa ser criado antes do registry de apps estar pronto.
"""

import importlib
from typing import Optional

from dependency_injector import containers, providers

from painel_suporte.adapters.django_app.events.publishers import (
    InMemoryEventPublisher,
    get_event_publisher,
)
from painel_suporte.adapters.django_app.shared.unit_of_work import (
    DjangoUnitOfWork,
    InMemoryUnitOfWork,
)
from painel_suporte.core.kanban.board import QuadroKanban
from painel_suporte.core.kanban.use_cases import QuadroKanbanService, VisaoKanbanService
from painel_suporte.core.reports.ports import InMemoryReportRepository
from painel_suporte.core.reports.use_cases import (
    ExcluirRelatorioService,
    ListarRelatoriosService,
    ObterRelatorioService,
    SalvarRelatorioService,
)
from painel_suporte.core.shared.interfaces import InMemoryEventStore
from painel_suporte.core.tickets.ports import InMemoryTicketRepository
from painel_suporte.core.tickets.use_cases import (
    AtualizarTicketService,
    CriarTicketService,
    EstatisticasTicketsService,
    ExcluirTicketService,
    ListarAtividadesService,
    ListarTicketsService,
    MoverTicketService,
    ObterTicketService,
    ReordenarTicketsService,
)


def _lazy(caminho: str):
    """Callable que importa a classe só na primeira construção."""
    modulo, nome = caminho.rsplit('.', 1)

    def construir(*args, **kwargs):
        return getattr(importlib.import_module(modulo), nome)(*args, **kwargs)

    construir.__name__ = nome
    return construir


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Example:
        container = get_container()
        service = container.criar_ticket_service()
        output = service.execute(CriarTicketInputDTO(title="Erro no login"))
    """

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        get_event_publisher,
        mode=config.event_publisher_mode,
    )

    event_store = providers.Singleton(
        _lazy('painel_suporte.adapters.django_app.tickets.repositories.DjangoEventStore')
    )

    # =========================================================================
    # Repositories
    # =========================================================================

    ticket_repository = providers.Singleton(
        _lazy('painel_suporte.adapters.django_app.tickets.repositories.DjangoTicketRepository')
    )

    report_repository = providers.Singleton(
        _lazy('painel_suporte.adapters.django_app.reports.repositories.DjangoReportRepository')
    )

    # =========================================================================
    # Unit of Work
    # =========================================================================

    unit_of_work = providers.Factory(
        DjangoUnitOfWork,
        event_publisher=event_publisher,
        event_store=event_store,
    )

    # =========================================================================
    # Services - Tickets
    # =========================================================================

    criar_ticket_service = providers.Factory(
        CriarTicketService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    atualizar_ticket_service = providers.Factory(
        AtualizarTicketService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    excluir_ticket_service = providers.Factory(
        ExcluirTicketService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    mover_ticket_service = providers.Factory(
        MoverTicketService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    reordenar_tickets_service = providers.Factory(
        ReordenarTicketsService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    listar_tickets_service = providers.Factory(
        ListarTicketsService,
        ticket_repo=ticket_repository,
    )

    obter_ticket_service = providers.Factory(
        ObterTicketService,
        ticket_repo=ticket_repository,
    )

    estatisticas_tickets_service = providers.Factory(
        EstatisticasTicketsService,
        ticket_repo=ticket_repository,
    )

    listar_atividades_service = providers.Factory(
        ListarAtividadesService,
        ticket_repo=ticket_repository,
        event_store=event_store,
    )

    # =========================================================================
    # Services - Kanban
    # =========================================================================

    visao_kanban_service = providers.Factory(
        VisaoKanbanService,
        ticket_repo=ticket_repository,
    )

    quadro_kanban_service = providers.Factory(
        QuadroKanbanService,
        ticket_repo=ticket_repository,
        wip_limits=config.wip_limits,
    )

    quadro_kanban = providers.Factory(
        QuadroKanban,
        ticket_repo=ticket_repository,
        reordenar_service=reordenar_tickets_service,
        wip_limits=config.wip_limits,
    )

    # =========================================================================
    # Services - Relatórios
    # =========================================================================

    salvar_relatorio_service = providers.Factory(
        SalvarRelatorioService,
        report_repo=report_repository,
        uow=unit_of_work,
    )

    excluir_relatorio_service = providers.Factory(
        ExcluirRelatorioService,
        report_repo=report_repository,
        uow=unit_of_work,
    )

    listar_relatorios_service = providers.Factory(
        ListarRelatoriosService,
        report_repo=report_repository,
    )

    obter_relatorio_service = providers.Factory(
        ObterRelatorioService,
        report_repo=report_repository,
    )


# =============================================================================
# Container Global
# =============================================================================

_container: Optional[Container] = None


def _config_do_settings() -> dict:
    from django.conf import settings

    if not settings.configured:
        return {}
    return {
        'event_publisher_mode': getattr(settings, 'EVENT_PUBLISHER_MODE', 'sync'),
        'wip_limits': getattr(settings, 'KANBAN_WIP_LIMITS', None),
    }


def get_container() -> Container:
    """
    Retorna instância global do container (criada sob demanda).
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(_config_do_settings())

    return _container


def reset_container() -> None:
    """Descarta o container global (testes)."""
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

def TestingContainer(wip_limits: Optional[dict] = None) -> Container:
    """
    Container com implementações em memória (sem banco, sem broker).

    Example:
        container = TestingContainer()
        container.criar_ticket_service().execute(dto)
        container.event_publisher().published_events
    """
    container = Container()
    container.config.from_dict({'wip_limits': wip_limits})

    container.event_publisher.override(providers.Singleton(InMemoryEventPublisher))
    container.event_store.override(providers.Singleton(InMemoryEventStore))
    container.ticket_repository.override(providers.Singleton(InMemoryTicketRepository))
    container.report_repository.override(providers.Singleton(InMemoryReportRepository))
    container.unit_of_work.override(
        providers.Factory(
            InMemoryUnitOfWork,
            event_publisher=container.event_publisher,
            event_store=container.event_store,
        )
    )
    return container
