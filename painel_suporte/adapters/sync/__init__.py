"""
Adapters de sincronização de relatórios (remoto + cache local).
"""

from .http_gateway import HttpReportGateway
from .service_gateway import ServiceReportGateway
from .file_cache import JsonFileReportCache

__all__ = [
    "HttpReportGateway",
    "ServiceReportGateway",
    "JsonFileReportCache",
]
