"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

- Input DTOs: dados de entrada já convertidos para nomes de atributo
- Output DTOs: formato de resposta da API (camelCase, datas ISO)

O mapeamento entre nomes da API (camelCase) e atributos da entidade
(snake_case) fica centralizado em `CAMPOS_API`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .entities import TicketEntity


# Nome na API -> atributo da entidade
CAMPOS_API = {
    "title": "title",
    "description": "description",
    "ticketNumber": "ticket_number",
    "status": "status",
    "priority": "priority",
    "type": "type",
    "stage": "stage",
    "position": "position",
    "url": "url",
    "registrationDate": "registration_date",
    "creator": "creator",
    "assignee": "assignee",
}


def campos_de_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Converte corpo JSON da API em campos da entidade.

    Aceita tanto camelCase quanto snake_case; chaves desconhecidas
    (id, createdAt, ...) são descartadas.
    """
    atributos = set(CAMPOS_API.values())
    campos = {}
    for chave, valor in payload.items():
        if chave in CAMPOS_API:
            campos[CAMPOS_API[chave]] = valor
        elif chave in atributos:
            campos[chave] = valor
    return campos


def _iso(valor: Optional[datetime]) -> Optional[str]:
    return valor.isoformat() if valor else None


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarTicketInputDTO:
    """
    DTO de entrada para criar ticket.

    Valores de vocabulário chegam como texto e são validados pela
    entidade; ausentes recebem os defaults de criação.
    """

    title: str
    description: Optional[str] = None
    ticket_number: Any = None
    status: Optional[str] = None
    priority: Optional[str] = None
    type: Optional[str] = None
    stage: Optional[str] = None
    position: Optional[int] = None
    url: Optional[str] = None
    registration_date: Any = None
    creator: Any = None
    assignee: Any = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CriarTicketInputDTO":
        campos = campos_de_payload(payload)
        return cls(title=campos.pop("title", None), **campos)

    def to_dict(self) -> dict:
        return {nome: getattr(self, nome) for nome in CAMPOS_API.values()}


@dataclass(frozen=True)
class AtualizarTicketInputDTO:
    """
    Atualização parcial: só as chaves presentes em `campos` mudam.
    """

    ticket_id: int
    campos: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, ticket_id: int, payload: Dict[str, Any]) -> "AtualizarTicketInputDTO":
        return cls(ticket_id=ticket_id, campos=campos_de_payload(payload))

    def to_dict(self) -> dict:
        return {"ticket_id": self.ticket_id, "campos": dict(self.campos)}


@dataclass(frozen=True)
class MoverTicketInputDTO:
    ticket_id: int
    stage: str

    def to_dict(self) -> dict:
        return {"ticket_id": self.ticket_id, "stage": self.stage}


@dataclass(frozen=True)
class ReordenarTicketsInputDTO:
    """
    Nova ordem manual de uma coluna.

    Attributes:
        stage: coluna de destino
        ordem: ids na ordem desejada; position = índice na tupla
    """

    stage: str
    ordem: Tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {"stage": self.stage, "order": list(self.ordem)}


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TicketOutputDTO:
    """
    DTO de saída com todos os dados do ticket.

    `to_dict` produz o formato da API (camelCase).
    """

    id: int
    ticket_number: Optional[int]
    title: str
    description: Optional[str]
    status: str
    priority: str
    type: str
    stage: str
    position: Optional[int]
    url: Optional[str]
    registration_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    creator: Optional[dict] = None
    assignee: Optional[dict] = None

    @classmethod
    def from_entity(cls, entity: TicketEntity) -> "TicketOutputDTO":
        return cls(
            id=entity.id,
            ticket_number=entity.ticket_number,
            title=entity.title,
            description=entity.description,
            status=entity.status.value,
            priority=entity.priority.value,
            type=entity.type.value,
            stage=entity.stage.value,
            position=entity.position,
            url=entity.url,
            registration_date=entity.registration_date,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            creator=entity.creator.to_dict() if entity.creator else None,
            assignee=entity.assignee.to_dict() if entity.assignee else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticketNumber": self.ticket_number,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "type": self.type,
            "stage": self.stage,
            "position": self.position,
            "url": self.url,
            "registrationDate": _iso(self.registration_date),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
            "creator": self.creator,
            "assignee": self.assignee,
        }


@dataclass
class EstatisticasTicketsDTO:
    """
    Visão geral para o dashboard.

    Attributes:
        taxa_resolucao: percentual de fechados sobre o total (1 casa)
    """

    total: int
    abertos: int
    pendentes: int
    em_andamento: int
    fechados: int
    taxa_resolucao: float
    por_status: Dict[str, int] = field(default_factory=dict)
    por_tipo: Dict[str, int] = field(default_factory=dict)
    por_prioridade: Dict[str, int] = field(default_factory=dict)
    por_coluna: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "abertos": self.abertos,
            "pendentes": self.pendentes,
            "emAndamento": self.em_andamento,
            "fechados": self.fechados,
            "taxaResolucao": self.taxa_resolucao,
            "byStatus": dict(self.por_status),
            "byType": dict(self.por_tipo),
            "byPriority": dict(self.por_prioridade),
            "byStage": dict(self.por_coluna),
        }


@dataclass
class AtividadeOutputDTO:
    """Entrada do histórico de atividades de um ticket."""

    event_id: str
    acao: str
    occurred_at: str
    detalhes: Dict[str, Any] = field(default_factory=dict)

    # Tipo do evento -> ação exibida no histórico
    ACOES = {
        "TicketCriadoEvent": "create",
        "TicketAtualizadoEvent": "update",
        "TicketMovidoEvent": "move",
        "TicketExcluidoEvent": "delete",
    }

    @classmethod
    def from_event_dict(cls, evento: dict) -> "AtividadeOutputDTO":
        return cls(
            event_id=evento["event_id"],
            acao=cls.ACOES.get(evento["event_type"], evento["event_type"]),
            occurred_at=evento["occurred_at"],
            detalhes=evento.get("data", {}),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "action": self.acao,
            "occurredAt": self.occurred_at,
            "details": self.detalhes,
        }


def to_dict_list(dtos: List[Any]) -> List[dict]:
    return [dto.to_dict() for dto in dtos]
