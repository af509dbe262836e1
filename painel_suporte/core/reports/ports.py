"""
Ports (Interfaces) do Domínio de Relatórios.

- ReportRepository: store autoritativo (upsert por chave)
- RemoteReportGateway: store remoto visto pelo sincronizador
- LocalReportCache: cache local chave -> payload
"""

import copy
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from .entities import RelatorioEntity, ReportKind


@runtime_checkable
class ReportRepository(Protocol):
    """
    Interface para persistência de relatórios.

    Implementações:
    - DjangoReportRepository (ORM)
    - InMemoryReportRepository (testes)
    """

    def save(self, relatorio: RelatorioEntity) -> RelatorioEntity:
        """Cria ou atualiza o registro de (kind, key)."""
        ...

    def get(self, kind: ReportKind, key: str) -> Optional[RelatorioEntity]:
        ...

    def delete(self, kind: ReportKind, key: str) -> None:
        ...

    def list_by_kind(self, kind: ReportKind) -> List[RelatorioEntity]:
        """Relatórios do tipo, chave decrescente (mais recente primeiro)."""
        ...


@runtime_checkable
class RemoteReportGateway(Protocol):
    """
    Store remoto de relatórios.

    Falhas de transporte devem surgir como TransientNetworkError.
    """

    def fetch_all(self, kind: ReportKind) -> Dict[str, Dict[str, Any]]:
        """Mapa completo chave -> payload do tipo."""
        ...

    def save(self, kind: ReportKind, key: str, payload: Dict[str, Any]) -> None:
        ...


@runtime_checkable
class LocalReportCache(Protocol):
    def load(self, kind: ReportKind) -> Dict[str, Dict[str, Any]]:
        ...

    def store(self, kind: ReportKind, dados: Dict[str, Dict[str, Any]]) -> None:
        ...


class InMemoryReportRepository:
    """
    Implementação em memória do ReportRepository (testes).
    """

    def __init__(self):
        self._relatorios: Dict[Tuple[ReportKind, str], RelatorioEntity] = {}
        self._proximo_id = 1

    def save(self, relatorio: RelatorioEntity) -> RelatorioEntity:
        existente = self._relatorios.get((relatorio.kind, relatorio.key))
        if existente is not None:
            relatorio.id = existente.id
        elif relatorio.id is None:
            relatorio.id = self._proximo_id
            self._proximo_id += 1
        self._relatorios[(relatorio.kind, relatorio.key)] = copy.deepcopy(relatorio)
        return copy.deepcopy(relatorio)

    def get(self, kind: ReportKind, key: str) -> Optional[RelatorioEntity]:
        relatorio = self._relatorios.get((kind, key))
        return copy.deepcopy(relatorio) if relatorio else None

    def delete(self, kind: ReportKind, key: str) -> None:
        self._relatorios.pop((kind, key), None)

    def list_by_kind(self, kind: ReportKind) -> List[RelatorioEntity]:
        relatorios = [r for (k, _), r in self._relatorios.items() if k == kind]
        return copy.deepcopy(sorted(relatorios, key=lambda r: r.key, reverse=True))

    def count(self) -> int:
        return len(self._relatorios)


class InMemoryReportCache:
    """Cache local em memória, um mapa por tipo."""

    def __init__(self, inicial: Optional[Dict[str, Dict[str, Any]]] = None):
        self._dados: Dict[str, Dict[str, Any]] = copy.deepcopy(inicial or {})

    def load(self, kind: ReportKind) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._dados.get(kind.value, {}))

    def store(self, kind: ReportKind, dados: Dict[str, Dict[str, Any]]) -> None:
        self._dados[kind.value] = copy.deepcopy(dados)
