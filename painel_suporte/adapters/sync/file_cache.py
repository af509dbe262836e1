"""
Cache local de relatórios em arquivo JSON.

Formato: {"weekly": {"2025-W48": {...}}, "monthly": {...}, "quarterly": {...}}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from painel_suporte.core.reports.entities import ReportKind

logger = logging.getLogger(__name__)


class JsonFileReportCache:
    """
    Implementação do LocalReportCache persistida em disco.

    Arquivo ausente equivale a cache vazio. Um arquivo corrompido é
    tratado como vazio (com aviso) para não bloquear a sincronização.
    """

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def _ler(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                conteudo = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Cache local ilegível (%s): %s", self.path, e)
            return {}
        return conteudo if isinstance(conteudo, dict) else {}

    def load(self, kind) -> Dict[str, Dict[str, Any]]:
        kind = ReportKind.from_string(kind)
        dados = self._ler().get(kind.value)
        return dict(dados) if isinstance(dados, dict) else {}

    def store(self, kind, dados: Dict[str, Dict[str, Any]]) -> None:
        """Regrava só a seção do tipo; as demais são preservadas."""
        kind = ReportKind.from_string(kind)
        conteudo = self._ler()
        conteudo[kind.value] = dados

        self.path.parent.mkdir(parents=True, exist_ok=True)
        temporario = self.path.with_name(self.path.name + ".tmp")
        with open(temporario, "w", encoding="utf-8") as f:
            json.dump(conteudo, f, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(temporario, self.path)
        logger.debug("Cache local %s gravado (%d chaves)", kind.value, len(dados))
