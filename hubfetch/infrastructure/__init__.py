"""
Infrastructure layer for HubFetch: logging, errors and the transport client.
"""

from .error_handler import (
    DownloadError,
    NetworkError,
    ProtocolError,
    AuthenticationError,
    RepositoryNotFoundError,
    RateLimitError,
    TransferError,
    FilesystemError,
    MissingFileError,
    CorruptModelError,
)
from .http_client import create_client, resolve_proxy_config
from .logger import logger

__all__ = [
    "DownloadError",
    "NetworkError",
    "ProtocolError",
    "AuthenticationError",
    "RepositoryNotFoundError",
    "RateLimitError",
    "TransferError",
    "FilesystemError",
    "MissingFileError",
    "CorruptModelError",
    "create_client",
    "resolve_proxy_config",
    "logger",
]
