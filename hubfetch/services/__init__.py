"""
Service layer for HubFetch.
"""

from .hub_api import HubAPIService
from .download import DownloadService

__all__ = [
    "HubAPIService",
    "DownloadService",
]
