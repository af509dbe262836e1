"""
Gateway HTTP para o armazenamento remoto de relatórios.

Fala com a mesma API JSON exposta por `/reports/<kind>`:
- GET  {base}/reports/<kind>  -> [{"<kind>Key", "key", "period", "data", ...}]
- POST {base}/reports/<kind>  <- {"<kind>Key", "period", "data"}
"""

import logging
from typing import Any, Dict, Optional

import requests

from painel_suporte.core.reports.entities import ReportKind
from painel_suporte.core.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    TransientNetworkError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
USER_AGENT = "painel-suporte-sync/0.1"


class HttpReportGateway:
    """
    Implementação HTTP do RemoteReportGateway.

    Falhas de rede e respostas 5xx viram TransientNetworkError; o
    reconciliador decide o que fazer com elas.

    Example:
        gateway = HttpReportGateway("https://painel.exemplo/api")
        gateway.fetch_all(ReportKind.WEEKLY)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url é obrigatório")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    def _build_url(self, kind: ReportKind) -> str:
        return f"{self.base_url}/reports/{kind.value}"

    def _handle_response(self, response: requests.Response):
        status_code = response.status_code

        try:
            data = response.json()
        except ValueError:
            data = {"error": response.text}

        if 200 <= status_code < 300:
            return data

        error_message = (
            data.get("error") if isinstance(data, dict) else None
        ) or f"HTTP {status_code}"

        if status_code >= 500:
            raise TransientNetworkError(error_message, status_code=status_code)
        if status_code == 404:
            raise EntityNotFoundError(error_message)
        if status_code in (400, 422):
            raise ValidationError(error_message)
        raise DomainException(error_message, code=f"HTTP_{status_code}")

    def _request(self, method: str, kind: ReportKind, json: Dict = None):
        url = self._build_url(kind)
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransientNetworkError(f"Timeout na conexão com {url}: {e}")
        except requests.exceptions.ConnectionError as e:
            raise TransientNetworkError(f"Erro de conexão com {url}: {e}")
        except requests.exceptions.RequestException as e:
            raise TransientNetworkError(f"Erro na requisição para {url}: {e}")
        return self._handle_response(response)

    def fetch_all(self, kind) -> Dict[str, Dict[str, Any]]:
        """
        Returns:
            Mapa chave -> payload de todos os relatórios remotos do tipo
        """
        kind = ReportKind.from_string(kind)
        registros = self._request("GET", kind)
        if not isinstance(registros, list):
            raise TransientNetworkError(
                f"Resposta inesperada de {self._build_url(kind)}: esperado uma lista"
            )

        resultado = {}
        for registro in registros:
            chave = registro.get(kind.chave_api) or registro.get("key")
            if chave:
                resultado[chave] = registro.get("data") or {}
        logger.debug("Remote %s: %d relatórios", kind.value, len(resultado))
        return resultado

    def save(self, kind, key: str, payload: Dict[str, Any]) -> None:
        kind = ReportKind.from_string(kind)
        self._request(
            "POST",
            kind,
            json={
                kind.chave_api: key,
                "period": (payload or {}).get("period"),
                "data": payload,
            },
        )
        logger.debug("Remote %s %s gravado", kind.value, key)
