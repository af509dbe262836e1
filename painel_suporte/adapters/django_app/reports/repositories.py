"""
Repositório Django de relatórios (upsert por kind + key).
"""

from typing import List, Optional
import logging

from painel_suporte.core.reports.entities import RelatorioEntity, ReportKind

from .models import ReportModel
from .mappers import RelatorioMapper

logger = logging.getLogger(__name__)


class DjangoReportRepository:
    """
    Implementação Django do ReportRepository.

    `save` substitui o registro existente para o mesmo (kind, key)
    preservando id e created_at.
    """

    def save(self, relatorio: RelatorioEntity) -> RelatorioEntity:
        model = (
            ReportModel.objects.filter(kind=relatorio.kind.value, key=relatorio.key).first()
            or ReportModel()
        )
        RelatorioMapper.update_model(model, relatorio)
        model.save()

        logger.debug("Report saved: %s %s", relatorio.kind.value, relatorio.key)
        return RelatorioMapper.to_entity(model)

    def get(self, kind: ReportKind, key: str) -> Optional[RelatorioEntity]:
        model = ReportModel.objects.filter(kind=kind.value, key=key).first()
        return RelatorioMapper.to_entity(model) if model else None

    def delete(self, kind: ReportKind, key: str) -> None:
        deleted_count, _ = ReportModel.objects.filter(kind=kind.value, key=key).delete()
        if deleted_count:
            logger.debug("Report deleted: %s %s", kind.value, key)

    def list_by_kind(self, kind: ReportKind) -> List[RelatorioEntity]:
        """Chave decrescente (período mais recente primeiro)."""
        return RelatorioMapper.to_entity_list(
            ReportModel.objects.filter(kind=kind.value).order_by('-key')
        )

    def count(self) -> int:
        return ReportModel.objects.count()
