"""
Gateway que usa o banco local (via use cases) como armazenamento remoto.

Usado pelo comando de sincronização quando nenhuma URL remota está
configurada: o cache em arquivo é reconciliado com o banco do próprio
servidor.
"""

from typing import Any, Dict

from painel_suporte.core.reports.dtos import SalvarRelatorioInputDTO
from painel_suporte.core.reports.entities import ReportKind
from painel_suporte.core.reports.use_cases import ListarRelatoriosService, SalvarRelatorioService


class ServiceReportGateway:

    def __init__(self, listar_service: ListarRelatoriosService, salvar_service: SalvarRelatorioService):
        self.listar_service = listar_service
        self.salvar_service = salvar_service

    def fetch_all(self, kind) -> Dict[str, Dict[str, Any]]:
        return {dto.key: dto.data for dto in self.listar_service.execute(kind)}

    def save(self, kind, key: str, payload: Dict[str, Any]) -> None:
        kind = ReportKind.from_string(kind)
        self.salvar_service.execute(
            SalvarRelatorioInputDTO(kind=kind.value, key=key, data=payload)
        )
