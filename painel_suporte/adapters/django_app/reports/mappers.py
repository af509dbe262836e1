"""
Mapper RelatorioEntity <-> ReportModel.
"""

from typing import List

from painel_suporte.core.reports.entities import RelatorioEntity, ReportKind

from .models import ReportModel


class RelatorioMapper:

    @staticmethod
    def to_entity(model: ReportModel) -> RelatorioEntity:
        return RelatorioEntity(
            id=model.id,
            kind=ReportKind(model.kind),
            key=model.key,
            period=model.period,
            data=model.data,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_entity_list(models) -> List[RelatorioEntity]:
        return [RelatorioMapper.to_entity(model) for model in models]

    @staticmethod
    def update_model(model: ReportModel, entity: RelatorioEntity) -> ReportModel:
        """Não altera `created_at` de um registro existente."""
        model.kind = entity.kind.value
        model.key = entity.key
        model.period = entity.period
        model.data = entity.data
        model.updated_at = entity.updated_at
        if model.pk is None:
            model.created_at = entity.created_at
        return model
