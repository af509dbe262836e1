"""
Base das API Views JSON.

- Parsing de JSON
- Acesso ao container DI
- Mapeamento de exceções de domínio para status HTTP
"""

import json
import logging
from typing import Any, Dict

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from painel_suporte.core.shared.exceptions import (
    BusinessRuleViolationError,
    DomainException,
    EntityNotFoundError,
    TransientNetworkError,
    ValidationError,
)
from painel_suporte.config.container import get_container

logger = logging.getLogger(__name__)


# Ordem importa: subclasses antes de DomainException
STATUS_POR_EXCECAO = (
    (ValidationError, 400),
    (EntityNotFoundError, 404),
    (BusinessRuleViolationError, 422),
    (TransientNetworkError, 503),
)


def json_response(data: Any = None, status: int = 200) -> JsonResponse:
    """Listas e dicts são serializados como estão."""
    return JsonResponse(data, status=status, safe=False)


def error_response(message: str, status: int, **extra) -> JsonResponse:
    """
    Corpo de erro: {"error": mensagem, ...extras não nulos}.
    """
    body = {"error": message}
    body.update({chave: valor for chave, valor in extra.items() if valor is not None})
    return JsonResponse(body, status=status)


def no_content() -> HttpResponse:
    return HttpResponse(status=204)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Raises:
        ValidationError: corpo não é JSON ou não é um objeto
    """
    if not request.body:
        return {}

    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"JSON inválido: {e}")

    if not isinstance(body, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")
    return body


@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Subclasses implementam os métodos HTTP; exceções levantadas por eles
    são convertidas em resposta por `handle_exception`.
    """

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except Exception as e:
            return self.handle_exception(e)

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def handle_exception(self, e: Exception) -> JsonResponse:
        for tipo, status in STATUS_POR_EXCECAO:
            if isinstance(e, tipo):
                logger.info("API %s: %s", status, e)
                return JsonResponse(e.to_dict(), status=status)

        if isinstance(e, DomainException):
            return JsonResponse(e.to_dict(), status=400)

        logger.exception("Erro inesperado na API: %s", e)
        return error_response("Erro interno do servidor", 500)


class HealthView(BaseAPIView):
    """GET /health"""

    def get(self, request: HttpRequest) -> JsonResponse:
        return json_response({"status": "ok"})
