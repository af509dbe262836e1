"""
Exceções de Domínio do Painel de Suporte.

Hierarquia:
    DomainException (base)
    ├── ValidationError (campo ausente ou malformado)
    ├── EntityNotFoundError (id/chave inexistente)
    ├── BusinessRuleViolationError (regra de negócio violada)
    └── TransientNetworkError (armazenamento remoto inacessível)

As camadas de adapter traduzem cada tipo para um status HTTP
(400, 404, 422 e 503 respectivamente).
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Example:
        try:
            service.execute(dto)
        except DomainException as e:
            logger.warning("Falha de domínio: %s", e)
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa para o corpo de erro da API (`{"error": ...}`)."""
        return {
            "error": self.message,
            "code": self.code,
        }


class ValidationError(DomainException):
    """
    Dado de entrada ausente ou malformado.

    Example:
        if not titulo.strip():
            raise ValidationError("Título é obrigatório", field="title")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Operação direcionada a um id (ticket) ou chave (relatório) inexistente.
    """

    def __init__(self, message: str, entity_type: str = None, entity_id=None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id is not None:
            result["entity_id"] = str(self.entity_id)
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Example:
        if ticket_id not in ids_da_coluna:
            raise BusinessRuleViolationError(
                "Ticket não pertence à coluna", rule="reorder_same_stage"
            )
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class TransientNetworkError(DomainException):
    """
    Armazenamento remoto não pôde ser alcançado (timeout, conexão
    recusada, 5xx). Reportado ao chamador; não há retry automático.
    """

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message, "TRANSIENT_NETWORK_ERROR")
