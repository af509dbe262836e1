"""
Domain Events do Domínio de Relatórios.

aggregate_id segue o formato "kind:key" (ex: "weekly:2025-W49").
"""

from dataclasses import dataclass

from painel_suporte.core.shared.events import DomainEvent


def aggregate_id_relatorio(kind: str, key: str) -> str:
    return f"{kind}:{key}"


@dataclass
class RelatorioSalvoEvent(DomainEvent):
    """
    Evento: relatório criado ou substituído.

    Attributes:
        criado: True na primeira gravação da chave
    """

    kind: str = ""
    key: str = ""
    period: str = ""
    criado: bool = True

    @property
    def aggregate_type(self) -> str:
        return "Relatorio"


@dataclass
class RelatorioExcluidoEvent(DomainEvent):
    kind: str = ""
    key: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Relatorio"
