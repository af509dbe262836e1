"""
Domínio de Relatórios - documentos por período (semanal, mensal,
trimestral) e sincronização híbrida com cache local.
"""

from .entities import RelatorioEntity, ReportKind, validar_chave
from .schemas import SCHEMAS, validar_payload
from .events import RelatorioSalvoEvent, RelatorioExcluidoEvent
from .dtos import SalvarRelatorioInputDTO, RelatorioOutputDTO, SincronizacaoOutputDTO
from .ports import (
    ReportRepository,
    RemoteReportGateway,
    LocalReportCache,
    InMemoryReportRepository,
    InMemoryReportCache,
)
from .use_cases import (
    SalvarRelatorioService,
    ListarRelatoriosService,
    ObterRelatorioService,
    ExcluirRelatorioService,
)
from .sync import SincronizarRelatoriosService

__all__ = [
    "RelatorioEntity",
    "ReportKind",
    "validar_chave",
    "SCHEMAS",
    "validar_payload",
    "RelatorioSalvoEvent",
    "RelatorioExcluidoEvent",
    "SalvarRelatorioInputDTO",
    "RelatorioOutputDTO",
    "SincronizacaoOutputDTO",
    "ReportRepository",
    "RemoteReportGateway",
    "LocalReportCache",
    "InMemoryReportRepository",
    "InMemoryReportCache",
    "SalvarRelatorioService",
    "ListarRelatoriosService",
    "ObterRelatorioService",
    "ExcluirRelatorioService",
    "SincronizarRelatoriosService",
]
