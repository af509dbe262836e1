"""
Entidades do Domínio de Relatórios.

Um relatório é um documento JSON associado a um período:

    kind        chave         exemplo
    weekly      YYYY-Www      2025-W49
    monthly     YYYY-MM       2025-11
    quarterly   YYYY-Qn       2025-Q4

Invariante: no máximo um relatório por (kind, key). Salvar de novo a
mesma chave substitui o payload inteiro (sem merge por campo).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from painel_suporte.core.shared.exceptions import ValidationError

from .schemas import validar_payload


def agora() -> datetime:
    return datetime.now(timezone.utc)


class ReportKind(Enum):
    """
    Tipos de relatório e o formato de chave de período de cada um.
    """

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def chave_api(self) -> str:
        """Nome do campo de chave no corpo da API (`weekKey`, ...)."""
        return {
            ReportKind.WEEKLY: "weekKey",
            ReportKind.MONTHLY: "monthKey",
            ReportKind.QUARTERLY: "quarterKey",
        }[self]

    @property
    def formato(self) -> str:
        return {
            ReportKind.WEEKLY: "YYYY-Www (ex: 2025-W49)",
            ReportKind.MONTHLY: "YYYY-MM (ex: 2025-11)",
            ReportKind.QUARTERLY: "YYYY-QX (ex: 2025-Q4)",
        }[self]

    @classmethod
    def from_string(cls, value) -> "ReportKind":
        if isinstance(value, cls):
            return value
        texto = str(value).strip().lower()
        for kind in cls:
            if kind.value == texto or kind.name.lower() == texto:
                return kind
        raise ValidationError(
            f"Tipo de relatório inválido: {value!r} "
            f"(use weekly, monthly ou quarterly)",
            field="kind",
        )


_PADROES = {
    ReportKind.WEEKLY: re.compile(r"^([0-9]{4})-W([0-9]{2})$"),
    ReportKind.MONTHLY: re.compile(r"^([0-9]{4})-([0-9]{2})$"),
    ReportKind.QUARTERLY: re.compile(r"^([0-9]{4})-Q([1-4])$"),
}

_LIMITES = {
    ReportKind.WEEKLY: (1, 53),
    ReportKind.MONTHLY: (1, 12),
    ReportKind.QUARTERLY: (1, 4),
}


def validar_chave(kind: ReportKind, key) -> str:
    """
    Valida a chave de período do tipo informado.

    Returns:
        Chave normalizada (sem espaços nas pontas)

    Raises:
        ValidationError: chave ausente ou fora do formato
    """
    if not isinstance(key, str) or not key.strip():
        raise ValidationError(f"{kind.chave_api} é obrigatório", field=kind.chave_api)

    chave = key.strip()
    match = _PADROES[kind].match(chave)
    minimo, maximo = _LIMITES[kind]
    if not match or not minimo <= int(match.group(2)) <= maximo:
        raise ValidationError(
            f"Formato inválido. Use {kind.formato}", field=kind.chave_api
        )
    return chave


@dataclass
class RelatorioEntity:
    """
    Entidade de Domínio: Relatório de período.

    Attributes:
        kind: tipo (semanal, mensal, trimestral)
        key: chave do período, única por tipo
        period: rótulo legível ("01/12 a 07/12/2025")
        data: payload validado contra o schema do tipo
    """

    kind: ReportKind
    key: str
    period: str
    data: Dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None
    created_at: datetime = field(default_factory=agora)
    updated_at: datetime = field(default_factory=agora)

    @classmethod
    def criar(
        cls,
        kind,
        key,
        data,
        period: Optional[str] = None,
    ) -> "RelatorioEntity":
        """
        Raises:
            ValidationError: tipo, chave, período ou payload inválidos
        """
        kind = ReportKind.from_string(kind)
        chave = validar_chave(kind, key)
        payload = validar_payload(kind, data)
        momento = agora()
        return cls(
            kind=kind,
            key=chave,
            period=cls._resolver_periodo(period, payload),
            data=payload,
            created_at=momento,
            updated_at=momento,
        )

    @staticmethod
    def _resolver_periodo(period, payload: Dict[str, Any]) -> str:
        rotulo = period if period not in (None, "") else payload.get("period")
        if not isinstance(rotulo, str) or not rotulo.strip():
            raise ValidationError("period é obrigatório", field="period")
        return rotulo.strip()

    def substituir(self, data, period: Optional[str] = None) -> None:
        """
        Troca o payload inteiro; `created_at` é preservado.
        """
        payload = validar_payload(self.kind, data)
        self.period = self._resolver_periodo(period, payload)
        self.data = payload
        self.updated_at = agora()

    def __repr__(self) -> str:
        return f"RelatorioEntity(kind={self.kind.value}, key={self.key})"
