"""
DTOs do Domínio de Relatórios.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .entities import RelatorioEntity, ReportKind


@dataclass(frozen=True)
class SalvarRelatorioInputDTO:
    """
    DTO de entrada para upsert de relatório.

    Attributes:
        kind: "weekly" | "monthly" | "quarterly"
        key: chave do período
        data: payload completo (substitui o anterior)
        period: rótulo; se omitido, usa `data["period"]`
    """

    kind: str
    key: Optional[str]
    data: Any
    period: Optional[str] = None

    @classmethod
    def from_payload(cls, kind, body: Dict[str, Any]) -> "SalvarRelatorioInputDTO":
        """
        Monta o DTO a partir do corpo da API: aceita `weekKey` /
        `monthKey` / `quarterKey` ou o genérico `key`.
        """
        kind = ReportKind.from_string(kind)
        return cls(
            kind=kind.value,
            key=body.get(kind.chave_api, body.get("key")),
            data=body.get("data"),
            period=body.get("period"),
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "key": self.key,
            "period": self.period,
            "data": self.data,
        }


@dataclass
class RelatorioOutputDTO:
    id: Optional[int]
    kind: str
    key: str
    period: str
    data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: RelatorioEntity) -> "RelatorioOutputDTO":
        return cls(
            id=entity.id,
            kind=entity.kind.value,
            key=entity.key,
            period=entity.period,
            data=dict(entity.data),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def to_dict(self) -> dict:
        """Formato da API; inclui a chave com o nome específico do tipo."""
        return {
            "id": self.id,
            "kind": self.kind,
            ReportKind(self.kind).chave_api: self.key,
            "key": self.key,
            "period": self.period,
            "data": self.data,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass
class SincronizacaoOutputDTO:
    """
    Resultado da reconciliação local/remoto.

    Attributes:
        dados: mapa mesclado chave -> payload (remoto vence conflitos)
        enviados: chaves locais gravadas no remoto com sucesso
        falhas: chaves locais cujo envio falhou (continuam só locais)
        remoto_disponivel: False quando a leitura remota falhou e
            `dados` é o cache local inalterado
    """

    kind: str
    dados: Dict[str, Any]
    enviados: List[str] = field(default_factory=list)
    falhas: List[str] = field(default_factory=list)
    remoto_disponivel: bool = True

    @property
    def completo(self) -> bool:
        return self.remoto_disponivel and not self.falhas

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "data": self.dados,
            "pushed": list(self.enviados),
            "failed": list(self.falhas),
            "remoteAvailable": self.remoto_disponivel,
        }
