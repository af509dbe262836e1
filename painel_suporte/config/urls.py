"""
URL Configuration do Painel de Suporte.

- /tickets - API de tickets e kanban
- /reports/<kind> - API de relatórios
- /health - health check
"""

from django.urls import path, include

from painel_suporte.adapters.django_app.shared.api import HealthView

urlpatterns = [
    path('', include('painel_suporte.adapters.django_app.tickets.urls')),
    path('', include('painel_suporte.adapters.django_app.reports.urls')),
    path('health', HealthView.as_view(), name='health'),
]
