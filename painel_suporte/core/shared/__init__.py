"""
Shared Domain Components.

Exceções de domínio, ports compartilhados e base de Domain Events.
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    TransientNetworkError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher, EventStore

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "TransientNetworkError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "EventStore",
]
