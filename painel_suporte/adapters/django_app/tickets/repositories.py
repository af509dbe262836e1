"""
Repositórios Django para persistência de Tickets.

DRIVEN ADAPTERS: implementam os Ports do Core com o Django ORM.
Não contêm lógica de negócio; conversões ficam no Mapper.
"""

from typing import List, Optional
import logging

from django.db.models import Max

from painel_suporte.core.shared.events import DomainEvent
from painel_suporte.core.shared.interfaces import EventStore
from painel_suporte.core.tickets.entities import TicketEntity, TicketStage

from .models import TicketModel, DomainEventModel
from .mappers import TicketMapper, DomainEventMapper

logger = logging.getLogger(__name__)


class DjangoTicketRepository:
    """
    Implementação Django do TicketRepository.

    Example:
        repo = DjangoTicketRepository()
        ticket = repo.save(TicketEntity.criar(title="Erro no login"))
        repo.get_by_id(ticket.id)
    """

    def __init__(self):
        self._mapper = TicketMapper()

    def save(self, ticket: TicketEntity) -> TicketEntity:
        """
        Persiste ticket (create se sem id, senão update).

        Returns:
            Entidade com o id atribuído pelo banco
        """
        if ticket.id is None:
            model = self._mapper.to_model(ticket)
        else:
            model = (
                TicketModel.objects.filter(id=ticket.id).first()
                or TicketModel(id=ticket.id)
            )
            self._mapper.update_model(model, ticket)
        model.save()
        ticket.id = model.id

        logger.debug("Ticket saved: %s", ticket.id)
        return self._mapper.to_entity(model)

    def get_by_id(self, ticket_id) -> Optional[TicketEntity]:
        try:
            model = TicketModel.objects.get(id=ticket_id)
        except (TicketModel.DoesNotExist, ValueError, TypeError):
            logger.debug("Ticket not found: %s", ticket_id)
            return None
        return self._mapper.to_entity(model)

    def delete(self, ticket_id) -> None:
        deleted_count, _ = TicketModel.objects.filter(id=ticket_id).delete()
        if deleted_count:
            logger.debug("Ticket deleted: %s", ticket_id)

    def list_all(self) -> List[TicketEntity]:
        """Mais recentes primeiro (`Meta.ordering`)."""
        return self._mapper.to_entity_list(TicketModel.objects.all())

    def list_by_stage(self, stage: TicketStage) -> List[TicketEntity]:
        return self._mapper.to_entity_list(TicketModel.objects.filter(stage=stage.value))

    def max_position(self, stage: TicketStage) -> Optional[int]:
        return (
            TicketModel.objects
            .filter(stage=stage.value)
            .aggregate(maior=Max('position'))['maior']
        )

    def exists(self, ticket_id) -> bool:
        return TicketModel.objects.filter(id=ticket_id).exists()

    def count(self) -> int:
        return TicketModel.objects.count()


class DjangoEventStore(EventStore):
    """
    Event Store usando Django ORM.

    Persiste Domain Events para auditoria e histórico de atividades.
    """

    def append(self, event: DomainEvent) -> None:
        DomainEventMapper.to_model(event).save()
        logger.debug("Event stored: %s for %s", event.event_type, event.aggregate_id)

    def get_events_for_aggregate(self, aggregate_type: str, aggregate_id: str) -> List[dict]:
        eventos = DomainEventModel.objects.filter(
            aggregate_type=aggregate_type,
            aggregate_id=str(aggregate_id),
        ).order_by('occurred_at', 'recorded_at')
        return [DomainEventMapper.to_dict(e) for e in eventos]
