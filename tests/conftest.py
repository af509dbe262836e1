"""
Configurações globais do Pytest para o Painel de Suporte.

- Django configurado via `settings.configure` (SQLite em memória)
- Container de DI descartado entre testes
- Fixtures de dados compartilhadas
"""

import pytest
from pathlib import Path


def pytest_configure(config):
    """Configura Django antes da coleta dos testes."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='test-secret-key',
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.contenttypes',
                'django.contrib.auth',
                'painel_suporte.adapters.django_app.tickets',
                'painel_suporte.adapters.django_app.reports',
            ],
            MIDDLEWARE=['django.middleware.common.CommonMiddleware'],
            ROOT_URLCONF='painel_suporte.config.urls',
            APPEND_SLASH=False,
            ALLOWED_HOSTS=['testserver', 'localhost'],
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            EVENT_PUBLISHER_MODE='sync',
            KANBAN_WIP_LIMITS={
                'backlog': 1000,
                'desenvolvimento': 8,
                'homologacao': 6,
                'producao': 4,
            },
            REPORTS_API_URL='',
            REPORTS_API_TIMEOUT=5.0,
            REPORTS_CACHE_PATH=str(Path(__file__).parent / '.relatorios_cache_test.json'),
            CELERY_TASK_ALWAYS_EAGER=True,
        )
        django.setup()


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_di_container():
    """Cada teste começa com um container limpo."""
    from painel_suporte.config.container import reset_container

    reset_container()
    yield
    reset_container()


@pytest.fixture
def weekly_payload():
    """Payload semanal válido."""
    return {
        'period': '24/11 a 30/11/2025',
        'summary': {
            'opened': 42,
            'closed': 38,
            'backlog': 17,
            'tma': 5.2,
            'tmaGoal': 6,
            'slaRisk': 3,
        },
        'dailyVolume': [
            {'day': 'Seg', 'opened': 10, 'closed': 8},
            {'day': 'Ter', 'opened': 9, 'closed': 9},
        ],
        'backlogByUrgency': [{'name': 'Alta', 'value': 4}],
    }


@pytest.fixture
def monthly_payload():
    return {
        'period': 'Novembro/2025',
        'summary': {
            'totalTickets': 180,
            'slaCompliance': 93.5,
            'fcr': 71,
            'satisfaction': 4.6,
        },
        'byType': [{'name': 'Orientação', 'value': 80}],
    }


@pytest.fixture
def quarterly_payload():
    return {
        'period': '4º trimestre de 2025',
        'jiraIntegration': {
            'bugsFixed': 34,
            'improvements': 12,
            'ticketsReduced': 18,
        },
        'rootCause': [{'name': 'Cadastro', 'value': 40}],
    }
