"""Integração Django: apps, ORM, views JSON e tasks Celery."""
