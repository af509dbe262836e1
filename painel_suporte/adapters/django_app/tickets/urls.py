"""
URL patterns para o domínio de Tickets (API JSON).

Rotas fixas (board, stats, reorder) vêm antes de <pk>; o prefixo
`tickets` fica aqui porque a listagem não tem barra final.
"""

from django.urls import path

from . import api_views

app_name = 'tickets'

urlpatterns = [
    path('tickets', api_views.TicketAPIListView.as_view(), name='list'),
    path('tickets/board', api_views.TicketAPIBoardView.as_view(), name='board'),
    path('tickets/stats', api_views.TicketAPIEstatisticasView.as_view(), name='stats'),
    path('tickets/reorder', api_views.TicketAPIReorderView.as_view(), name='reorder'),
    path('tickets/<int:pk>', api_views.TicketAPIDetailView.as_view(), name='detail'),
    path('tickets/<int:pk>/stage', api_views.TicketAPIStageView.as_view(), name='stage'),
    path('tickets/<int:pk>/activities', api_views.TicketAPIAtividadesView.as_view(), name='activities'),
]
