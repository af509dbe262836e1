"""
Quadro Kanban - filtro, ordenação e estado do quadro.
"""

from .engine import (
    CriteriosKanban,
    SORT_KEYS,
    WIP_LIMITS,
    excede_wip,
    filtrar,
    montar_quadro,
    montar_visao,
    ordenar,
)
from .board import QuadroKanban
from .use_cases import QuadroKanbanService, VisaoKanbanService

__all__ = [
    "CriteriosKanban",
    "SORT_KEYS",
    "WIP_LIMITS",
    "excede_wip",
    "filtrar",
    "montar_quadro",
    "montar_visao",
    "ordenar",
    "QuadroKanban",
    "QuadroKanbanService",
    "VisaoKanbanService",
]
