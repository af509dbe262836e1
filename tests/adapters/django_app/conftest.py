"""
Fixtures para testes dos adapters Django (ORM, API, Celery).
"""

import json

import pytest


@pytest.fixture
def api_client():
    """Django test client com helpers JSON."""
    from django.test import Client

    class JsonClient(Client):

        def post_json(self, path, data):
            return self.post(path, data=json.dumps(data), content_type='application/json')

        def patch_json(self, path, data):
            return self.patch(path, data=json.dumps(data), content_type='application/json')

    return JsonClient()


@pytest.fixture
def ticket_model_factory(db):
    """Factory para criar TicketModel direto no banco."""
    from django.utils import timezone

    from painel_suporte.adapters.django_app.tickets.models import TicketModel

    def create_ticket(**kwargs):
        defaults = {
            'title': 'Ticket de Teste',
            'status': 'aberto',
            'priority': 'media',
            'type': 'outros',
            'stage': 'backlog',
            'created_at': timezone.now(),
            'updated_at': timezone.now(),
        }
        defaults.update(kwargs)
        return TicketModel.objects.create(**defaults)

    return create_ticket
