"""
Motor de filtro e ordenação do quadro kanban.

Funções puras: recebem a lista de tickets e critérios e devolvem uma
nova lista; a entrada nunca é alterada.

Ordem de aplicação: coluna -> arquivados -> prioridade -> tipo ->
busca -> ordenação.
"""

import unicodedata
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from painel_suporte.core.shared.exceptions import ValidationError
from painel_suporte.core.tickets.entities import (
    TicketEntity,
    TicketPriority,
    TicketStage,
    TicketType,
)


SORT_KEYS = ("manual", "priority", "ticketNumber", "createdAt", "registrationDate", "title")
SORT_DIRS = ("asc", "desc")

# Valores de filtro que significam "sem filtro"
TODOS = ("", "all", "todas", "todos")

# Chave de ordenação -> atributo da entidade
_ATRIBUTOS = {
    "ticketNumber": "ticket_number",
    "createdAt": "created_at",
    "registrationDate": "registration_date",
    "title": "title",
}

WIP_LIMITS = {
    TicketStage.BACKLOG.value: 1000,
    TicketStage.DESENVOLVIMENTO.value: 8,
    TicketStage.HOMOLOGACAO.value: 6,
    TicketStage.PRODUCAO.value: 4,
}


def _texto_busca(valor: str) -> str:
    """casefold + remoção de acentos ("Relatório" -> "relatorio")."""
    decomposto = unicodedata.normalize("NFKD", valor.casefold())
    return "".join(c for c in decomposto if not unicodedata.combining(c))


def _verdadeiro(valor) -> bool:
    if isinstance(valor, str):
        return valor.strip().lower() in ("1", "true", "sim", "yes", "on")
    return bool(valor)


@dataclass(frozen=True)
class CriteriosKanban:
    """
    Critérios de visualização do quadro.

    Attributes:
        search: substring buscada em título, descrição e número do ticket
        priority: prioridade exata ou "all"
        type: tipo exato ou "all"
        sort_key: manual | priority | ticketNumber | createdAt |
            registrationDate | title
        sort_dir: asc | desc (ignorado em `manual`)
        show_archived: False oculta fechados; True mostra só fechados
        stage: restringe a uma coluna (None = todas)
    """

    search: str = ""
    priority: str = "all"
    type: str = "all"
    sort_key: str = "manual"
    sort_dir: str = "asc"
    show_archived: bool = False
    stage: Optional[str] = None

    def __post_init__(self):
        definir = object.__setattr__
        definir(self, "search", (self.search or "").strip())
        definir(self, "priority", self._normalizar(self.priority, TicketPriority, "priority"))
        definir(self, "type", self._normalizar(self.type, TicketType, "type"))
        definir(self, "stage", self._normalizar_stage(self.stage))

        if self.sort_key not in SORT_KEYS:
            raise ValidationError(
                f"sortKey inválido: {self.sort_key!r} (use {', '.join(SORT_KEYS)})",
                field="sortKey",
            )
        sort_dir = (self.sort_dir or "asc").lower()
        if sort_dir not in SORT_DIRS:
            raise ValidationError(f"sortDir inválido: {self.sort_dir!r}", field="sortDir")
        definir(self, "sort_dir", sort_dir)

    @staticmethod
    def _normalizar(valor, enum_cls, campo: str) -> str:
        texto = (valor or "").strip().lower()
        if texto in TODOS:
            return "all"
        try:
            return enum_cls.from_string(texto).value
        except ValueError:
            raise ValidationError(f"Filtro {campo} inválido: {valor!r}", field=campo)

    @staticmethod
    def _normalizar_stage(valor) -> Optional[str]:
        if valor is None or str(valor).strip().lower() in TODOS:
            return None
        try:
            return TicketStage.from_string(valor).value
        except ValueError:
            raise ValidationError(f"Coluna inválida: {valor!r}", field="stage")

    PARAMETROS_QUERY = ("search", "priority", "type", "sortKey", "sortDir", "archived", "stage")

    @classmethod
    def presente_em(cls, params: Mapping[str, str]) -> bool:
        """Indica se a query string traz algum critério do quadro."""
        return any(nome in params for nome in cls.PARAMETROS_QUERY)

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "CriteriosKanban":
        """
        Monta critérios a partir da query string
        (`search`, `priority`, `type`, `sortKey`, `sortDir`, `archived`, `stage`).
        """
        return cls(
            search=params.get("search", ""),
            priority=params.get("priority", "all"),
            type=params.get("type", "all"),
            sort_key=params.get("sortKey", "manual"),
            sort_dir=params.get("sortDir", "asc"),
            show_archived=_verdadeiro(params.get("archived", False)),
            stage=params.get("stage"),
        )


def filtrar(tickets: Iterable[TicketEntity], criterios: CriteriosKanban) -> List[TicketEntity]:
    busca = _texto_busca(criterios.search)
    resultado = []
    for ticket in tickets:
        if criterios.stage and ticket.stage.value != criterios.stage:
            continue
        if ticket.esta_arquivado != criterios.show_archived:
            continue
        if criterios.priority != "all" and ticket.priority.value != criterios.priority:
            continue
        if criterios.type != "all" and ticket.type.value != criterios.type:
            continue
        if busca and not _corresponde(ticket, busca):
            continue
        resultado.append(ticket)
    return resultado


def _corresponde(ticket: TicketEntity, busca: str) -> bool:
    campos = (
        ticket.title,
        ticket.description or "",
        str(ticket.ticket_number) if ticket.ticket_number is not None else "",
    )
    return any(busca in _texto_busca(campo) for campo in campos)


def ordenar(tickets: List[TicketEntity], sort_key: str, sort_dir: str = "asc") -> List[TicketEntity]:
    """
    Ordena sem alterar a lista recebida.

    - manual: coluna, position (nulos por último), id
    - priority: desc = alta, media, baixa; empates por criação desc
    - demais: valor do campo; nulos sempre por último
    """
    if sort_key == "manual":
        return sorted(tickets, key=_chave_manual)

    descendente = sort_dir == "desc"
    if sort_key == "priority":
        return sorted(
            tickets,
            key=lambda t: (
                -t.priority.peso if descendente else t.priority.peso,
                -t.created_at.timestamp(),
            ),
        )

    atributo = _ATRIBUTOS[sort_key]
    base = sorted(tickets, key=lambda t: t.id or 0)
    com_valor = [t for t in base if getattr(t, atributo) is not None]
    nulos = [t for t in base if getattr(t, atributo) is None]

    if sort_key == "title":
        chave = lambda t: _texto_busca(t.title)
    else:
        chave = lambda t: getattr(t, atributo)
    return sorted(com_valor, key=chave, reverse=descendente) + nulos


def _chave_manual(ticket: TicketEntity):
    return (
        ticket.stage.ordem,
        ticket.position is None,
        ticket.position if ticket.position is not None else 0,
        ticket.id or 0,
    )


def montar_visao(tickets: Iterable[TicketEntity], criterios: CriteriosKanban) -> List[TicketEntity]:
    """
    Visão derivada: filtra e depois ordena.

    Lista vazia após filtro é resultado válido.
    """
    return ordenar(filtrar(tickets, criterios), criterios.sort_key, criterios.sort_dir)


def montar_quadro(
    tickets: Iterable[TicketEntity], criterios: CriteriosKanban
) -> "OrderedDict[str, List[TicketEntity]]":
    """Visão agrupada pelas quatro colunas, na ordem do quadro."""
    colunas: "OrderedDict[str, List[TicketEntity]]" = OrderedDict(
        (stage.value, []) for stage in TicketStage
    )
    for ticket in montar_visao(tickets, criterios):
        colunas[ticket.stage.value].append(ticket)
    return colunas


def excede_wip(stage, quantidade: int, limites: Optional[Dict[str, int]] = None) -> bool:
    """True quando a coluna tem mais tickets que o limite WIP."""
    limites = limites or WIP_LIMITS
    valor = getattr(stage, "value", stage)
    return quantidade > limites.get(valor, WIP_LIMITS[valor])
