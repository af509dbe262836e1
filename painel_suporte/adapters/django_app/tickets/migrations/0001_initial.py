"""
Migration inicial para o domínio de Tickets.

Cria as tabelas:
- tickets: tickets com coluna/posição do kanban
- domain_events: Event Store
"""

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='TicketModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ticket_number', models.PositiveIntegerField(
                    blank=True,
                    null=True,
                    db_index=True,
                    help_text='Número externo do chamado'
                )),
                ('title', models.CharField(max_length=255, db_index=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('aberto', 'Aberto'),
                        ('fechado', 'Fechado'),
                        ('pendente', 'Pendente'),
                        ('em_andamento', 'Em andamento'),
                    ],
                    default='aberto',
                    db_index=True,
                )),
                ('priority', models.CharField(
                    max_length=10,
                    choices=[('baixa', 'Baixa'), ('media', 'Média'), ('alta', 'Alta')],
                    default='media',
                    db_index=True,
                )),
                ('type', models.CharField(
                    max_length=30,
                    choices=[
                        ('orientacao', 'Orientação'),
                        ('correcao_tecnica', 'Correção técnica'),
                        ('erro_temporario', 'Erro temporário'),
                        ('duvida_negocial', 'Dúvida negocial'),
                        ('melhorias', 'Melhorias'),
                        ('outros', 'Outros'),
                    ],
                    default='outros',
                    db_index=True,
                )),
                ('stage', models.CharField(
                    max_length=20,
                    choices=[
                        ('backlog', 'Backlog'),
                        ('desenvolvimento', 'Desenvolvimento'),
                        ('homologacao', 'Homologação'),
                        ('producao', 'Produção'),
                    ],
                    default='backlog',
                    db_index=True,
                )),
                ('position', models.IntegerField(blank=True, null=True)),
                ('url', models.CharField(blank=True, max_length=500, null=True)),
                ('registration_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, db_index=True)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('creator', models.JSONField(blank=True, null=True)),
                ('assignee', models.JSONField(blank=True, null=True)),
            ],
            options={
                'db_table': 'tickets',
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='DomainEventModel',
            fields=[
                ('event_id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    help_text='UUID único do evento'
                )),
                ('event_type', models.CharField(max_length=100, db_index=True)),
                ('aggregate_type', models.CharField(max_length=50, db_index=True)),
                ('aggregate_id', models.CharField(
                    max_length=100,
                    db_index=True,
                    help_text='ID do ticket, nome da coluna ou kind:key do relatório'
                )),
                ('event_data', models.JSONField(default=dict)),
                ('version', models.IntegerField(default=1)),
                ('occurred_at', models.DateTimeField()),
                ('recorded_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'domain_events',
                'verbose_name': 'Evento de Domínio',
                'verbose_name_plural': 'Eventos de Domínio',
                'ordering': ['occurred_at', 'recorded_at'],
            },
        ),
        migrations.AddIndex(
            model_name='ticketmodel',
            index=models.Index(fields=['stage', 'position'], name='tickets_stage_pos_idx'),
        ),
        migrations.AddIndex(
            model_name='ticketmodel',
            index=models.Index(fields=['status', 'created_at'], name='tickets_status_created_idx'),
        ),
        migrations.AddIndex(
            model_name='domaineventmodel',
            index=models.Index(fields=['aggregate_type', 'aggregate_id'], name='events_aggregate_idx'),
        ),
        migrations.AddIndex(
            model_name='domaineventmodel',
            index=models.Index(fields=['event_type', 'recorded_at'], name='events_type_recorded_idx'),
        ),
    ]
