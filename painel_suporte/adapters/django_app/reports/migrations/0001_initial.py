"""
Migration inicial para relatórios: tabela `reports`.
"""

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ReportModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(
                    max_length=10,
                    choices=[('weekly', 'Semanal'), ('monthly', 'Mensal'), ('quarterly', 'Trimestral')],
                    db_index=True,
                )),
                ('key', models.CharField(max_length=10)),
                ('period', models.CharField(max_length=100)),
                ('data', models.JSONField(default=dict)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'reports',
                'verbose_name': 'Relatório',
                'verbose_name_plural': 'Relatórios',
                'ordering': ['kind', '-key'],
            },
        ),
        migrations.AddConstraint(
            model_name='reportmodel',
            constraint=models.UniqueConstraint(fields=['kind', 'key'], name='reports_kind_key_uniq'),
        ),
    ]
