"""
Mappers para conversão entre Entities (Core) e Models (Django).

- TicketEntity <-> TicketModel
- DomainEvent -> DomainEventModel (Event Store)

Mappers são stateless e não contêm lógica de negócio.
"""

from typing import List

from painel_suporte.core.tickets.entities import (
    TicketEntity,
    TicketPriority,
    TicketStage,
    TicketStatus,
    TicketType,
    UsuarioRef,
)
from painel_suporte.core.shared.events import DomainEvent

from .models import TicketModel, DomainEventModel


class TicketMapper:
    """
    - to_model(): Entity → Model
    - to_entity(): Model → Entity
    - update_model(): copia a Entity sobre um Model existente
    """

    @staticmethod
    def to_model(entity: TicketEntity) -> TicketModel:
        """
        Note:
            Não chama .save(); isso é do Repository.
        """
        return TicketMapper.update_model(TicketModel(id=entity.id), entity)

    @staticmethod
    def to_entity(model: TicketModel) -> TicketEntity:
        """
        Note:
            Não passa pelo factory `criar`: dados do banco já foram
            validados na gravação.
        """
        return TicketEntity(
            id=model.id,
            ticket_number=model.ticket_number,
            title=model.title,
            description=model.description,
            status=TicketStatus(model.status),
            priority=TicketPriority(model.priority),
            type=TicketType(model.type),
            stage=TicketStage(model.stage),
            position=model.position,
            url=model.url,
            registration_date=model.registration_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
            creator=UsuarioRef.from_value(model.creator),
            assignee=UsuarioRef.from_value(model.assignee),
        )

    @staticmethod
    def to_entity_list(models) -> List[TicketEntity]:
        return [TicketMapper.to_entity(model) for model in models]

    @staticmethod
    def update_model(model: TicketModel, entity: TicketEntity) -> TicketModel:
        model.ticket_number = entity.ticket_number
        model.title = entity.title
        model.description = entity.description
        model.status = entity.status.value
        model.priority = entity.priority.value
        model.type = entity.type.value
        model.stage = entity.stage.value
        model.position = entity.position
        model.url = entity.url
        model.registration_date = entity.registration_date
        model.created_at = entity.created_at
        model.updated_at = entity.updated_at
        model.creator = entity.creator.to_dict() if entity.creator else None
        model.assignee = entity.assignee.to_dict() if entity.assignee else None
        return model


class DomainEventMapper:
    """
    Conversão entre DomainEvent e DomainEventModel.
    """

    @staticmethod
    def to_model(event: DomainEvent) -> DomainEventModel:
        dados = event.to_dict()
        return DomainEventModel(
            event_id=event.event_id,
            event_type=event.event_type,
            aggregate_type=event.aggregate_type,
            aggregate_id=event.aggregate_id,
            event_data=dados["data"],
            version=event.version,
            occurred_at=event.occurred_at,
        )

    @staticmethod
    def to_dict(model: DomainEventModel) -> dict:
        """Mesmo formato de `DomainEvent.to_dict()`."""
        return {
            "event_id": model.event_id,
            "event_type": model.event_type,
            "aggregate_id": model.aggregate_id,
            "aggregate_type": model.aggregate_type,
            "occurred_at": model.occurred_at.isoformat(),
            "version": model.version,
            "data": model.event_data,
        }
