"""
Django Models para relatórios periódicos.

Uma única tabela para os três tipos; (kind, key) é único.
"""

from django.db import models
from django.utils import timezone


class ReportKindChoices(models.TextChoices):
    WEEKLY = 'weekly', 'Semanal'
    MONTHLY = 'monthly', 'Mensal'
    QUARTERLY = 'quarterly', 'Trimestral'


class ReportModel(models.Model):
    """
    Fields:
        kind: tipo do relatório
        key: chave do período (2025-W48, 2025-11, 2025-Q4)
        period: rótulo legível
        data: payload completo (JSON)
    """

    kind = models.CharField(max_length=10, choices=ReportKindChoices.choices, db_index=True)
    key = models.CharField(max_length=10)
    period = models.CharField(max_length=100)
    data = models.JSONField(default=dict)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'reports'
        verbose_name = 'Relatório'
        verbose_name_plural = 'Relatórios'
        ordering = ['kind', '-key']
        constraints = [
            models.UniqueConstraint(fields=['kind', 'key'], name='reports_kind_key_uniq'),
        ]

    def __str__(self):
        return f"{self.kind} {self.key}"
