"""
URL patterns para relatórios.
"""

from django.urls import path

from . import api_views

app_name = 'reports'

urlpatterns = [
    path('reports/<str:kind>', api_views.RelatorioAPIListView.as_view(), name='list'),
    path('reports/<str:kind>/<str:key>', api_views.RelatorioAPIDetailView.as_view(), name='detail'),
]
