"""
Core data models API surface for HubFetch.

This file re-exports model classes from domain-specific modules so that
imports like `from hubfetch.models import X` keep working.
"""

from .hub import (
    EntryKind,
    Repository,
    LfsInfo,
    RemoteEntry,
)
from .download import (
    DownloadStatus,
    DownloadProgress,
    ProgressCallback,
    TransferTask,
    TransferResult,
    RepositoryResult,
)
from .config import DownloadConfig, ProxyConfig
from .manifest import ModelManifest

__all__ = [
    # Hub models
    "EntryKind",
    "Repository",
    "LfsInfo",
    "RemoteEntry",
    # Download models
    "DownloadStatus",
    "DownloadProgress",
    "ProgressCallback",
    "TransferTask",
    "TransferResult",
    "RepositoryResult",
    # Config models
    "DownloadConfig",
    "ProxyConfig",
    "ModelManifest",
]
