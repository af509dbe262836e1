"""
API Views JSON para relatórios periódicos.

Endpoints (kind = weekly | monthly | quarterly):
- GET /reports/<kind> - Lista (chave decrescente)
- POST /reports/<kind> - Upsert: {"weekKey"|"monthKey"|"quarterKey"|"key", "period"?, "data"}
- GET /reports/<kind>/<key> - Obter
- DELETE /reports/<kind>/<key> - Excluir
"""

import logging

from django.http import HttpRequest, JsonResponse

from painel_suporte.core.reports.dtos import SalvarRelatorioInputDTO
from painel_suporte.core.tickets.dtos import to_dict_list

from ..shared.api import BaseAPIView, json_response, no_content

logger = logging.getLogger(__name__)


class RelatorioAPIListView(BaseAPIView):

    def get(self, request: HttpRequest, kind: str) -> JsonResponse:
        relatorios = self.get_service('listar_relatorios_service').execute(kind)
        return json_response(to_dict_list(relatorios))

    def post(self, request: HttpRequest, kind: str) -> JsonResponse:
        """
        Substitui o relatório inteiro se a chave já existir.
        """
        data = self.parse_body(request)
        output = self.get_service('salvar_relatorio_service').execute(
            SalvarRelatorioInputDTO.from_payload(kind, data)
        )
        logger.info("API: Relatório %s %s salvo", output.kind, output.key)
        return json_response(output.to_dict())


class RelatorioAPIDetailView(BaseAPIView):

    def get(self, request: HttpRequest, kind: str, key: str) -> JsonResponse:
        relatorio = self.get_service('obter_relatorio_service').execute(kind, key)
        return json_response(relatorio.to_dict())

    def delete(self, request: HttpRequest, kind: str, key: str):
        self.get_service('excluir_relatorio_service').execute(kind, key)
        logger.info("API: Relatório %s %s excluído", kind, key)
        return no_content()
