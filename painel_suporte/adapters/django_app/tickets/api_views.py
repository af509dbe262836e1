"""
API Views JSON para o domínio de Tickets.

Endpoints:
- GET /tickets - Listar (filtros e ordenação do kanban via query string)
- POST /tickets - Criar ticket
- GET /tickets/board - Quadro agrupado por coluna com WIP
- GET /tickets/stats - Estatísticas
- POST /tickets/reorder - Persistir ordem manual de uma coluna
- GET/PUT/PATCH/DELETE /tickets/<id> - Obter, atualizar, excluir
- PATCH /tickets/<id>/stage - Mover para outra coluna
- GET /tickets/<id>/activities - Histórico de atividades

Formato:
- Entrada e saída JSON com nomes camelCase
- Erros: {"error": mensagem, "code": ..., "field"?: ...}
"""

import logging

from django.http import HttpRequest, JsonResponse

from painel_suporte.core.kanban.engine import CriteriosKanban
from painel_suporte.core.tickets.dtos import (
    AtualizarTicketInputDTO,
    CriarTicketInputDTO,
    MoverTicketInputDTO,
    ReordenarTicketsInputDTO,
    to_dict_list,
)
from painel_suporte.core.shared.exceptions import ValidationError

from ..shared.api import BaseAPIView, json_response, no_content

logger = logging.getLogger(__name__)


class TicketAPIListView(BaseAPIView):
    """
    GET /tickets - Lista tickets
    POST /tickets - Cria ticket
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        """
        Query params (todos opcionais):
        - search, priority, type, stage
        - sortKey: manual|priority|ticketNumber|createdAt|registrationDate|title
        - sortDir: asc|desc
        - archived: true mostra apenas fechados

        Sem nenhum desses parâmetros a lista vem completa, na ordem de
        criação (mais recentes primeiro).
        """
        if not CriteriosKanban.presente_em(request.GET):
            tickets = self.get_service('listar_tickets_service').execute()
        else:
            criterios = CriteriosKanban.from_query(request.GET)
            tickets = self.get_service('visao_kanban_service').execute(criterios)
        return json_response(to_dict_list(tickets))

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Body JSON:
        {
            "title": "string (obrigatório)",
            "description", "ticketNumber", "status", "priority", "type",
            "stage", "position", "url", "registrationDate",
            "creator", "assignee" (opcionais)
        }
        """
        data = self.parse_body(request)
        output = self.get_service('criar_ticket_service').execute(
            CriarTicketInputDTO.from_payload(data)
        )
        logger.info("API: Ticket criado: %s", output.id)
        return json_response(output.to_dict(), status=201)


class TicketAPIDetailView(BaseAPIView):
    """
    GET /tickets/<id>
    PUT|PATCH /tickets/<id> - atualização parcial
    DELETE /tickets/<id>
    """

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        ticket = self.get_service('obter_ticket_service').execute(pk)
        return json_response(ticket.to_dict())

    def patch(self, request: HttpRequest, pk: int) -> JsonResponse:
        data = self.parse_body(request)
        output = self.get_service('atualizar_ticket_service').execute(
            AtualizarTicketInputDTO.from_payload(pk, data)
        )
        return json_response(output.to_dict())

    put = patch

    def delete(self, request: HttpRequest, pk: int):
        self.get_service('excluir_ticket_service').execute(pk)
        logger.info("API: Ticket %s excluído", pk)
        return no_content()


class TicketAPIStageView(BaseAPIView):
    """
    PATCH /tickets/<id>/stage

    Body JSON: {"stage": "backlog|desenvolvimento|homologacao|producao"}
    """

    def patch(self, request: HttpRequest, pk: int) -> JsonResponse:
        data = self.parse_body(request)
        if not data.get('stage'):
            raise ValidationError("stage é obrigatório", field="stage")

        output = self.get_service('mover_ticket_service').execute(
            MoverTicketInputDTO(ticket_id=pk, stage=data['stage'])
        )
        return json_response(output.to_dict())


class TicketAPIReorderView(BaseAPIView):
    """
    POST /tickets/reorder

    Body JSON: {"stage": "...", "order": [id, id, ...]}
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        data = self.parse_body(request)
        ordem = data.get('order')
        if not isinstance(ordem, list):
            raise ValidationError("order deve ser uma lista de ids", field="order")

        tickets = self.get_service('reordenar_tickets_service').execute(
            ReordenarTicketsInputDTO(stage=data.get('stage'), ordem=tuple(ordem))
        )
        return json_response(to_dict_list(tickets))


class TicketAPIBoardView(BaseAPIView):
    """GET /tickets/board - mesmos query params da listagem."""

    def get(self, request: HttpRequest) -> JsonResponse:
        criterios = CriteriosKanban.from_query(request.GET)
        return json_response(self.get_service('quadro_kanban_service').execute(criterios))


class TicketAPIEstatisticasView(BaseAPIView):
    """GET /tickets/stats"""

    def get(self, request: HttpRequest) -> JsonResponse:
        estatisticas = self.get_service('estatisticas_tickets_service').execute()
        return json_response(estatisticas.to_dict())


class TicketAPIAtividadesView(BaseAPIView):
    """GET /tickets/<id>/activities - mais recentes primeiro."""

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        atividades = self.get_service('listar_atividades_service').execute(pk)
        return json_response(to_dict_list(atividades))
