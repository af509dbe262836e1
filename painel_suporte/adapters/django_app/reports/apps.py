from django.apps import AppConfig


class ReportsConfig(AppConfig):
    """Relatórios semanais, mensais e trimestrais."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'painel_suporte.adapters.django_app.reports'
    label = 'reports'
    verbose_name = 'Relatórios'
