"""
Schemas de payload por tipo de relatório.

Cada tipo declara os grupos numéricos obrigatórios e as séries
(listas de objetos) opcionais. A validação acontece na fronteira do
store, antes de persistir; chaves extras são preservadas.
"""

from dataclasses import dataclass
from numbers import Number
from typing import Any, Dict, Tuple

from painel_suporte.core.shared.exceptions import ValidationError


@dataclass(frozen=True)
class SchemaRelatorio:
    """
    Attributes:
        grupo: nome do objeto de indicadores ("summary", ...)
        indicadores: campos numéricos obrigatórios do grupo
        series: listas opcionais de objetos (dados de gráfico)
    """

    grupo: str
    indicadores: Tuple[str, ...]
    series: Tuple[str, ...] = ()


SCHEMAS = {
    "weekly": SchemaRelatorio(
        grupo="summary",
        indicadores=("opened", "closed", "backlog", "tma", "tmaGoal", "slaRisk"),
        series=("dailyVolume", "backlogByUrgency"),
    ),
    "monthly": SchemaRelatorio(
        grupo="summary",
        indicadores=("totalTickets", "slaCompliance", "fcr", "satisfaction"),
        series=("volumeTrend", "byType", "byChannel"),
    ),
    "quarterly": SchemaRelatorio(
        grupo="jiraIntegration",
        indicadores=("bugsFixed", "improvements", "ticketsReduced"),
        series=("rootCause", "jiraStatus"),
    ),
}


def _eh_numero(valor) -> bool:
    return isinstance(valor, Number) and not isinstance(valor, bool)


def validar_payload(kind, data) -> Dict[str, Any]:
    """
    Valida `data` contra o schema do tipo.

    Args:
        kind: ReportKind ou seu valor textual

    Returns:
        Cópia rasa do payload

    Raises:
        ValidationError: payload ausente ou fora do schema
    """
    nome = getattr(kind, "value", kind)
    schema = SCHEMAS[nome]

    if not isinstance(data, dict) or not data:
        raise ValidationError("data é obrigatório e deve ser um objeto", field="data")

    periodo = data.get("period")
    if periodo is not None and not isinstance(periodo, str):
        raise ValidationError("data.period deve ser texto", field="data.period")

    grupo = data.get(schema.grupo)
    if not isinstance(grupo, dict):
        raise ValidationError(
            f"data.{schema.grupo} é obrigatório", field=f"data.{schema.grupo}"
        )
    for indicador in schema.indicadores:
        if not _eh_numero(grupo.get(indicador)):
            raise ValidationError(
                f"data.{schema.grupo}.{indicador} deve ser numérico",
                field=f"data.{schema.grupo}.{indicador}",
            )

    for serie in schema.series:
        if serie not in data:
            continue
        valores = data[serie]
        if not isinstance(valores, list) or not all(isinstance(v, dict) for v in valores):
            raise ValidationError(
                f"data.{serie} deve ser uma lista de objetos", field=f"data.{serie}"
            )

    return dict(data)
