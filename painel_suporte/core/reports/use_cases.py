"""
Use Cases do Domínio de Relatórios.

- SalvarRelatorioService: upsert por (kind, key)
- ListarRelatoriosService: chave decrescente
- ObterRelatorioService
- ExcluirRelatorioService
"""

import logging
from typing import List

from painel_suporte.core.shared.interfaces import UnitOfWork
from painel_suporte.core.shared.exceptions import EntityNotFoundError

from .dtos import RelatorioOutputDTO, SalvarRelatorioInputDTO
from .entities import RelatorioEntity, ReportKind, validar_chave
from .events import RelatorioExcluidoEvent, RelatorioSalvoEvent, aggregate_id_relatorio
from .ports import ReportRepository


logger = logging.getLogger(__name__)


def _obter_ou_falhar(report_repo: ReportRepository, kind: ReportKind, key: str) -> RelatorioEntity:
    relatorio = report_repo.get(kind, key)
    if not relatorio:
        raise EntityNotFoundError(
            "Relatório não encontrado",
            entity_type="Relatorio",
            entity_id=aggregate_id_relatorio(kind.value, key),
        )
    return relatorio


class SalvarRelatorioService:
    """
    Use Case: Criar ou substituir relatório de um período.

    Chamado duas vezes com a mesma chave, mantém um único registro com
    o payload da segunda chamada; `created_at` da primeira é preservado.

    Example:
        service = SalvarRelatorioService(report_repo, uow)
        service.execute(SalvarRelatorioInputDTO(
            kind="weekly", key="2025-W49", data={...}, period="01/12 a 07/12"
        ))
    """

    def __init__(self, report_repo: ReportRepository, uow: UnitOfWork):
        self.report_repo = report_repo
        self.uow = uow

    def execute(self, input_dto: SalvarRelatorioInputDTO) -> RelatorioOutputDTO:
        """
        Raises:
            ValidationError: chave fora do formato ou payload fora do schema
        """
        novo = RelatorioEntity.criar(
            kind=input_dto.kind,
            key=input_dto.key,
            data=input_dto.data,
            period=input_dto.period,
        )

        with self.uow:
            existente = self.report_repo.get(novo.kind, novo.key)
            if existente:
                existente.substituir(novo.data, novo.period)
                relatorio = self.report_repo.save(existente)
            else:
                relatorio = self.report_repo.save(novo)

            self.uow.publish_event(
                RelatorioSalvoEvent(
                    aggregate_id=aggregate_id_relatorio(relatorio.kind.value, relatorio.key),
                    kind=relatorio.kind.value,
                    key=relatorio.key,
                    period=relatorio.period,
                    criado=existente is None,
                )
            )

        logger.info(
            "Relatório %s %s %s",
            relatorio.kind.value,
            relatorio.key,
            "criado" if existente is None else "substituído",
        )
        return RelatorioOutputDTO.from_entity(relatorio)


class ListarRelatoriosService:
    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    def execute(self, kind) -> List[RelatorioOutputDTO]:
        kind = ReportKind.from_string(kind)
        return [
            RelatorioOutputDTO.from_entity(r)
            for r in self.report_repo.list_by_kind(kind)
        ]


class ObterRelatorioService:
    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    def execute(self, kind, key: str) -> RelatorioOutputDTO:
        """
        Raises:
            ValidationError: chave fora do formato
            EntityNotFoundError: relatório inexistente
        """
        kind = ReportKind.from_string(kind)
        chave = validar_chave(kind, key)
        return RelatorioOutputDTO.from_entity(_obter_ou_falhar(self.report_repo, kind, chave))


class ExcluirRelatorioService:
    def __init__(self, report_repo: ReportRepository, uow: UnitOfWork):
        self.report_repo = report_repo
        self.uow = uow

    def execute(self, kind, key: str) -> None:
        """
        Raises:
            EntityNotFoundError: relatório inexistente
        """
        kind = ReportKind.from_string(kind)
        chave = validar_chave(kind, key)
        with self.uow:
            _obter_ou_falhar(self.report_repo, kind, chave)
            self.report_repo.delete(kind, chave)
            self.uow.publish_event(
                RelatorioExcluidoEvent(
                    aggregate_id=aggregate_id_relatorio(kind.value, chave),
                    kind=kind.value,
                    key=chave,
                )
            )
