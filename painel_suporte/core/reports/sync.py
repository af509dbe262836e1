"""
Sincronização híbrida local/remoto de relatórios.

Algoritmo:
1. Lê o conjunto remoto completo (`remoto[key] = payload`)
2. Resultado começa como cópia do cache local
3. Toda chave remota sobrescreve a local (remoto vence, sem merge
   por campo e sem comparar timestamps)
4. Chaves só locais = local - remoto
5. Cada chave só local é enviada ao remoto; falha é registrada em log
   e não interrompe as demais
6. Retorna o mapa mesclado

Se a leitura remota falhar, o cache local volta inalterado e nada é
enviado. A sincronização nunca propaga erro ao chamador.
"""

import logging
from typing import Any, Dict, Optional

from .dtos import SincronizacaoOutputDTO
from .entities import ReportKind
from .ports import LocalReportCache, RemoteReportGateway


logger = logging.getLogger(__name__)


class SincronizarRelatoriosService:
    """
    Use Case: Reconciliar cache local com o store remoto.

    Attributes:
        remote: gateway do store autoritativo
        cache: cache local opcional; quando presente, `execute` lê dele
            se nenhum mapa local for informado e grava o resultado
            mesclado de volta

    Example:
        service = SincronizarRelatoriosService(remote)
        resultado = service.execute("weekly", {"2025-W48": {...}})
        resultado.dados    # mapa mesclado
        resultado.falhas   # chaves que continuam só locais
    """

    def __init__(
        self,
        remote: RemoteReportGateway,
        cache: Optional[LocalReportCache] = None,
    ):
        self.remote = remote
        self.cache = cache

    def execute(
        self,
        kind,
        local: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> SincronizacaoOutputDTO:
        kind = ReportKind.from_string(kind)
        if local is None:
            local = self.cache.load(kind) if self.cache is not None else {}

        try:
            remoto = self.remote.fetch_all(kind)
        except Exception:
            logger.exception(
                "Falha ao buscar relatórios %s remotos; usando cache local", kind.value
            )
            return SincronizacaoOutputDTO(
                kind=kind.value,
                dados=dict(local),
                remoto_disponivel=False,
            )

        mesclado = dict(local)
        mesclado.update(remoto)

        somente_locais = [key for key in local if key not in remoto]
        enviados, falhas = [], []
        for key in somente_locais:
            try:
                self.remote.save(kind, key, local[key])
            except Exception as exc:
                logger.warning(
                    "Relatório %s %s não enviado ao remoto: %s", kind.value, key, exc
                )
                falhas.append(key)
            else:
                enviados.append(key)

        if self.cache is not None:
            self.cache.store(kind, mesclado)

        logger.info(
            "Sincronização %s: %d remotos, %d enviados, %d falhas",
            kind.value,
            len(remoto),
            len(enviados),
            len(falhas),
        )
        return SincronizacaoOutputDTO(
            kind=kind.value,
            dados=mesclado,
            enviados=enviados,
            falhas=falhas,
        )
