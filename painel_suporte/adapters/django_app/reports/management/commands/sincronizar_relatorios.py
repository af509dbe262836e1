"""
Reconcilia o cache local de relatórios (arquivo JSON) com o armazenamento
remoto.

Uso:
    python manage.py sincronizar_relatorios
    python manage.py sincronizar_relatorios --kind weekly --cache /tmp/relatorios.json
    python manage.py sincronizar_relatorios --remote-url https://painel.exemplo/api
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from painel_suporte.adapters.sync import HttpReportGateway, JsonFileReportCache, ServiceReportGateway
from painel_suporte.core.reports.entities import ReportKind
from painel_suporte.core.reports.sync import SincronizarRelatoriosService
from painel_suporte.config.container import get_container


class Command(BaseCommand):
    help = 'Sincroniza o cache local de relatórios com o armazenamento remoto (remoto vence)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--kind',
            choices=[k.value for k in ReportKind],
            help='Tipo de relatório (padrão: todos)',
        )
        parser.add_argument(
            '--cache',
            default=settings.REPORTS_CACHE_PATH,
            help='Arquivo JSON do cache local',
        )
        parser.add_argument(
            '--remote-url',
            default=settings.REPORTS_API_URL,
            help='URL base da API remota; vazio usa o banco local',
        )
        parser.add_argument(
            '--timeout',
            type=float,
            default=settings.REPORTS_API_TIMEOUT,
        )

    def _gateway(self, options):
        if options['remote_url']:
            return HttpReportGateway(options['remote_url'], timeout=options['timeout'])
        container = get_container()
        return ServiceReportGateway(
            container.listar_relatorios_service(),
            container.salvar_relatorio_service(),
        )

    def handle(self, *args, **options):
        kinds = [ReportKind(options['kind'])] if options['kind'] else list(ReportKind)
        service = SincronizarRelatoriosService(
            remote=self._gateway(options),
            cache=JsonFileReportCache(options['cache']),
        )

        incompleto = False
        for kind in kinds:
            resultado = service.execute(kind)
            if not resultado.remoto_disponivel:
                incompleto = True
                self.stdout.write(self.style.WARNING(
                    f'{kind.value}: remoto indisponível, {len(resultado.dados)} relatórios locais mantidos'
                ))
                continue

            self.stdout.write(self.style.SUCCESS(
                f'{kind.value}: {len(resultado.dados)} relatórios, '
                f'{len(resultado.enviados)} enviados, {len(resultado.falhas)} falhas'
            ))
            for chave in resultado.falhas:
                incompleto = True
                self.stdout.write(self.style.WARNING(f'  → {chave} continua apenas local'))

        if incompleto:
            raise CommandError('Sincronização incompleta; execute novamente mais tarde')
