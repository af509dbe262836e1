"""
Entidades do Domínio de Tickets.

Entidades:
- TicketEntity: Agregado principal (registro de chamado + posição no kanban)
- TicketStatus / TicketPriority / TicketType / TicketStage: vocabulários
- UsuarioRef: referência leve a criador/responsável

Regras de Negócio Encapsuladas:
- Título obrigatório (não vazio)
- Defaults na criação: status aberto, prioridade media, tipo outros,
  coluna backlog, data de registro = agora
- ticketNumber, quando presente, é inteiro positivo; texto não numérico
  é rejeitado com ValidationError (nunca convertido silenciosamente)
- Arquivar é mudança de status para "fechado", nunca exclusão
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from painel_suporte.core.shared.exceptions import ValidationError


_INTEIRO = re.compile(r"[+-]?[0-9]+")


def agora() -> datetime:
    """Timestamp atual com fuso (UTC)."""
    return datetime.now(timezone.utc)


class _Vocabulario(Enum):
    """Enum base com conversão tolerante a partir de texto."""

    @classmethod
    def from_string(cls, value):
        if isinstance(value, cls):
            return value
        texto = str(value).strip().lower()
        for membro in cls:
            if membro.value == texto or membro.name.lower() == texto:
                return membro
        raise ValueError(f"{cls.__name__} inválido: {value}")

    @classmethod
    def valores(cls) -> List[str]:
        return [membro.value for membro in cls]


class TicketStatus(_Vocabulario):
    """Estados de um ticket. FECHADO equivale a arquivado."""

    ABERTO = "aberto"
    FECHADO = "fechado"
    PENDENTE = "pendente"
    EM_ANDAMENTO = "em_andamento"


class TicketPriority(_Vocabulario):
    """Prioridades; `peso` define a ordem total alta > media > baixa."""

    BAIXA = "baixa"
    MEDIA = "media"
    ALTA = "alta"

    @property
    def peso(self) -> int:
        return {
            TicketPriority.BAIXA: 1,
            TicketPriority.MEDIA: 2,
            TicketPriority.ALTA: 3,
        }[self]


class TicketType(_Vocabulario):
    ORIENTACAO = "orientacao"
    CORRECAO_TECNICA = "correcao_tecnica"
    ERRO_TEMPORARIO = "erro_temporario"
    DUVIDA_NEGOCIAL = "duvida_negocial"
    MELHORIAS = "melhorias"
    OUTROS = "outros"


class TicketStage(_Vocabulario):
    """
    Colunas do kanban, na ordem em que aparecem no quadro.
    """

    BACKLOG = "backlog"
    DESENVOLVIMENTO = "desenvolvimento"
    HOMOLOGACAO = "homologacao"
    PRODUCAO = "producao"

    @property
    def ordem(self) -> int:
        return list(TicketStage).index(self)


@dataclass
class UsuarioRef:
    """Referência a usuário (criador ou responsável)."""

    id: Any
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_value(cls, value) -> Optional["UsuarioRef"]:
        """Aceita dict `{id, name, ...}`, id puro ou None."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            if value.get("id") in (None, ""):
                raise ValidationError("Usuário sem id", field="user")
            return cls(
                id=value["id"],
                name=value.get("name"),
                email=value.get("email"),
                avatar=value.get("avatar"),
            )
        return cls(id=value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
        }


def parse_ticket_number(value) -> Optional[int]:
    """
    Converte ticketNumber vindo de formulário/JSON.

    - None ou texto vazio -> None
    - inteiro positivo (ou texto com dígitos) -> int
    - qualquer outra coisa -> ValidationError
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError("ticketNumber deve ser numérico", field="ticketNumber")
    if isinstance(value, int):
        numero = value
    elif isinstance(value, float) and value.is_integer():
        numero = int(value)
    elif isinstance(value, str):
        texto = value.strip()
        if not texto:
            return None
        if not _INTEIRO.fullmatch(texto):
            raise ValidationError(
                f"ticketNumber deve ser numérico: {value!r}", field="ticketNumber"
            )
        numero = int(texto)
    else:
        raise ValidationError("ticketNumber deve ser numérico", field="ticketNumber")

    if numero <= 0:
        raise ValidationError("ticketNumber deve ser positivo", field="ticketNumber")
    return numero


def parse_datetime(value, field_name: str = "registrationDate") -> Optional[datetime]:
    """
    Converte data ISO (`2025-11-03` ou `2025-11-03T10:00:00Z`) em datetime
    com fuso. Valores sem fuso são tratados como UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        resultado = value
    elif isinstance(value, date):
        resultado = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        texto = value.strip()
        if texto.endswith("Z"):
            texto = texto[:-1] + "+00:00"
        try:
            resultado = datetime.fromisoformat(texto)
        except ValueError:
            raise ValidationError(f"Data inválida: {value!r}", field=field_name)
    else:
        raise ValidationError(f"Data inválida: {value!r}", field=field_name)

    if resultado.tzinfo is None:
        resultado = resultado.replace(tzinfo=timezone.utc)
    return resultado


@dataclass
class TicketEntity:
    """
    Entidade de Domínio: Ticket.

    Invariantes:
    - title nunca vazio
    - ticket_number None ou inteiro positivo
    - position é dica de ordenação dentro da coluna (empates por id)

    Attributes:
        id: Identificador atribuído pelo repositório (None antes de salvar)
        ticket_number: Número externo do chamado
        stage: Coluna do kanban
        position: Ordem manual dentro da coluna
        registration_date: Data de registro do chamado na origem

    Example:
        ticket = TicketEntity.criar(title="Erro no login", priority="alta")
        ticket.atualizar({"status": "em_andamento"})
    """

    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    ticket_number: Optional[int] = None

    status: TicketStatus = TicketStatus.ABERTO
    priority: TicketPriority = TicketPriority.MEDIA
    type: TicketType = TicketType.OUTROS
    stage: TicketStage = TicketStage.BACKLOG
    position: Optional[int] = None

    url: Optional[str] = None
    registration_date: Optional[datetime] = None
    created_at: datetime = field(default_factory=agora)
    updated_at: datetime = field(default_factory=agora)

    creator: Optional[UsuarioRef] = None
    assignee: Optional[UsuarioRef] = None

    TITLE_MAX_LENGTH = 255

    # Campos que `atualizar` aceita; demais são ignorados
    CAMPOS_EDITAVEIS = (
        "title",
        "description",
        "ticket_number",
        "status",
        "priority",
        "type",
        "stage",
        "position",
        "url",
        "registration_date",
        "creator",
        "assignee",
    )

    @classmethod
    def criar(
        cls,
        title: str,
        description: Optional[str] = None,
        ticket_number=None,
        status=None,
        priority=None,
        type=None,
        stage=None,
        position: Optional[int] = None,
        url: Optional[str] = None,
        registration_date=None,
        creator=None,
        assignee=None,
    ) -> "TicketEntity":
        """
        Factory method com validações e defaults de criação.

        Raises:
            ValidationError: título ausente ou valor fora do vocabulário
        """
        cls._validar_titulo(title)
        momento = agora()

        return cls(
            title=title.strip(),
            description=description,
            ticket_number=parse_ticket_number(ticket_number),
            status=cls.parse_enum(TicketStatus, status, "status", TicketStatus.ABERTO),
            priority=cls.parse_enum(TicketPriority, priority, "priority", TicketPriority.MEDIA),
            type=cls.parse_enum(TicketType, type, "type", TicketType.OUTROS),
            stage=cls.parse_enum(TicketStage, stage, "stage", TicketStage.BACKLOG),
            position=cls._validar_posicao(position),
            url=url or None,
            registration_date=parse_datetime(registration_date) or momento,
            created_at=momento,
            updated_at=momento,
            creator=UsuarioRef.from_value(creator),
            assignee=UsuarioRef.from_value(assignee),
        )

    @classmethod
    def _validar_titulo(cls, title) -> None:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Título é obrigatório", field="title")
        if len(title.strip()) > cls.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Título deve ter no máximo {cls.TITLE_MAX_LENGTH} caracteres",
                field="title",
            )

    @staticmethod
    def _validar_posicao(position) -> Optional[int]:
        if position is None or position == "":
            return None
        if isinstance(position, bool):
            raise ValidationError("position deve ser inteiro", field="position")
        if isinstance(position, float):
            if not position.is_integer():
                raise ValidationError("position deve ser inteiro", field="position")
            return int(position)
        if isinstance(position, str) and _INTEIRO.fullmatch(position.strip()):
            return int(position)
        if isinstance(position, int):
            return position
        raise ValidationError("position deve ser inteiro", field="position")

    @staticmethod
    def parse_enum(enum_cls, value, field_name: str, default):
        if value is None or value == "":
            return default
        try:
            return enum_cls.from_string(value)
        except ValueError:
            raise ValidationError(
                f"Valor inválido para {field_name}: {value!r} "
                f"(use um de {', '.join(enum_cls.valores())})",
                field=field_name,
            )

    def atualizar(self, campos: Dict[str, Any]) -> List[str]:
        """
        Aplica atualização parcial: somente campos fornecidos mudam.

        Args:
            campos: nomes de atributo (snake_case) -> novo valor

        Returns:
            Nomes dos campos efetivamente alterados

        Raises:
            ValidationError: valor inválido (nada é alterado)
        """
        novos: Dict[str, Any] = {}
        for nome, valor in campos.items():
            if nome not in self.CAMPOS_EDITAVEIS:
                continue
            if nome == "title":
                self._validar_titulo(valor)
                valor = valor.strip()
            elif nome == "ticket_number":
                valor = parse_ticket_number(valor)
            elif nome == "status":
                valor = self.parse_enum(TicketStatus, valor, "status", TicketStatus.ABERTO)
            elif nome == "priority":
                valor = self.parse_enum(TicketPriority, valor, "priority", TicketPriority.MEDIA)
            elif nome == "type":
                valor = self.parse_enum(TicketType, valor, "type", TicketType.OUTROS)
            elif nome == "stage":
                valor = self.parse_enum(TicketStage, valor, "stage", TicketStage.BACKLOG)
            elif nome == "position":
                valor = self._validar_posicao(valor)
            elif nome == "registration_date":
                valor = parse_datetime(valor)
            elif nome in ("creator", "assignee"):
                valor = UsuarioRef.from_value(valor)
            elif nome == "url":
                valor = valor or None
            novos[nome] = valor

        alterados = [nome for nome, valor in novos.items() if getattr(self, nome) != valor]
        for nome in alterados:
            setattr(self, nome, novos[nome])
        if alterados:
            self._atualizar_timestamp()
        return alterados

    def mover_para(self, stage: TicketStage, position: Optional[int]) -> None:
        """Muda a coluna e a posição manual do ticket."""
        self.stage = stage
        self.position = position
        self._atualizar_timestamp()

    def _atualizar_timestamp(self) -> None:
        self.updated_at = agora()

    @property
    def esta_arquivado(self) -> bool:
        return self.status == TicketStatus.FECHADO

    def __repr__(self) -> str:
        return (
            f"TicketEntity(id={self.id}, title='{self.title[:20]}', "
            f"status={self.status.value}, stage={self.stage.value})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TicketEntity):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)
