"""
Django Models para o domínio de Tickets.

Models são ADAPTERS: só estrutura de dados. A lógica fica nas
entidades do Core e a conversão nos Mappers.

- TicketModel: tabela de tickets (inclui coluna/posição do kanban)
- DomainEventModel: Event Store (histórico de atividades)
"""

from django.db import models
from django.utils import timezone


class TicketStatusChoices(models.TextChoices):
    """Espelha TicketStatus do Core."""
    ABERTO = 'aberto', 'Aberto'
    FECHADO = 'fechado', 'Fechado'
    PENDENTE = 'pendente', 'Pendente'
    EM_ANDAMENTO = 'em_andamento', 'Em andamento'


class TicketPriorityChoices(models.TextChoices):
    BAIXA = 'baixa', 'Baixa'
    MEDIA = 'media', 'Média'
    ALTA = 'alta', 'Alta'


class TicketTypeChoices(models.TextChoices):
    ORIENTACAO = 'orientacao', 'Orientação'
    CORRECAO_TECNICA = 'correcao_tecnica', 'Correção técnica'
    ERRO_TEMPORARIO = 'erro_temporario', 'Erro temporário'
    DUVIDA_NEGOCIAL = 'duvida_negocial', 'Dúvida negocial'
    MELHORIAS = 'melhorias', 'Melhorias'
    OUTROS = 'outros', 'Outros'


class TicketStageChoices(models.TextChoices):
    BACKLOG = 'backlog', 'Backlog'
    DESENVOLVIMENTO = 'desenvolvimento', 'Desenvolvimento'
    HOMOLOGACAO = 'homologacao', 'Homologação'
    PRODUCAO = 'producao', 'Produção'


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Fields:
        ticket_number: número externo do chamado (positivo)
        stage / position: coluna e ordem manual no kanban
        creator / assignee: referência de usuário em JSON
            ({id, name, email, avatar})
    """

    ticket_number = models.PositiveIntegerField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Número externo do chamado"
    )

    title = models.CharField(max_length=255, db_index=True)
    description = models.TextField(null=True, blank=True)

    status = models.CharField(
        max_length=20,
        choices=TicketStatusChoices.choices,
        default=TicketStatusChoices.ABERTO,
        db_index=True,
    )
    priority = models.CharField(
        max_length=10,
        choices=TicketPriorityChoices.choices,
        default=TicketPriorityChoices.MEDIA,
        db_index=True,
    )
    type = models.CharField(
        max_length=30,
        choices=TicketTypeChoices.choices,
        default=TicketTypeChoices.OUTROS,
        db_index=True,
    )

    # Kanban
    stage = models.CharField(
        max_length=20,
        choices=TicketStageChoices.choices,
        default=TicketStageChoices.BACKLOG,
        db_index=True,
    )
    position = models.IntegerField(null=True, blank=True)

    url = models.CharField(max_length=500, null=True, blank=True)

    # Timestamps (definidos pela entidade)
    registration_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    creator = models.JSONField(null=True, blank=True)
    assignee = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'tickets'
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['stage', 'position'], name='tickets_stage_pos_idx'),
            models.Index(fields=['status', 'created_at'], name='tickets_status_created_idx'),
        ]

    def __str__(self):
        return f"[{self.id}] {self.title}"

    def __repr__(self):
        return f"<TicketModel id={self.id} stage={self.stage} status={self.status}>"


class DomainEventModel(models.Model):
    """
    Event Store genérico para Domain Events.

    Alimenta o histórico de atividades dos tickets e a auditoria de
    relatórios.
    """

    event_id = models.CharField(
        max_length=36,
        primary_key=True,
        help_text="UUID único do evento"
    )
    event_type = models.CharField(max_length=100, db_index=True)
    aggregate_type = models.CharField(max_length=50, db_index=True)
    aggregate_id = models.CharField(
        max_length=100,
        db_index=True,
        help_text="ID do ticket, nome da coluna ou kind:key do relatório"
    )
    event_data = models.JSONField(default=dict)
    version = models.IntegerField(default=1)
    occurred_at = models.DateTimeField()
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'domain_events'
        verbose_name = 'Evento de Domínio'
        verbose_name_plural = 'Eventos de Domínio'
        ordering = ['occurred_at', 'recorded_at']
        indexes = [
            models.Index(fields=['aggregate_type', 'aggregate_id'], name='events_aggregate_idx'),
            models.Index(fields=['event_type', 'recorded_at'], name='events_type_recorded_idx'),
        ]

    def __str__(self):
        return f"{self.event_type} - {self.aggregate_id} @ {self.occurred_at}"
