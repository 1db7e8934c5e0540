"""
HubFetch: fetch model repositories from a model hub into a local cache.
"""

from .interfaces.api import HubDownloader
from .models import (
    DownloadConfig,
    DownloadProgress,
    ModelManifest,
    Repository,
    RepositoryResult,
)

__version__ = "0.1.0"

__all__ = [
    "HubDownloader",
    "DownloadConfig",
    "DownloadProgress",
    "ModelManifest",
    "Repository",
    "RepositoryResult",
]
