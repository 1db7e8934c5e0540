"""
Configuration models for HubFetch downloads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class DownloadConfig:
    """
    Unified configuration for repository downloads.

    Groups the hub endpoint, per-request timeouts, progress reporting
    and the rules used to select what gets downloaded.
    """

    # Hub settings
    endpoint: str = "https://huggingface.co"
    revision: str = "main"

    # Timeouts in seconds
    list_timeout: float = 30.0
    transfer_timeout: float = 1800.0  # sized for large model weights

    # Transfer settings
    chunk_size: int = 1024 * 1024
    partial_suffix: str = ".download"

    # Progress reporting
    show_progress: bool = True
    progress_threshold: int = 100_000_000
    progress_step: int = 10
    large_file_log_threshold: int = 10_000_000

    # Traversal and selection
    max_depth: int = 32
    model_suffix: str = ".mlmodelc"
    essential_extensions: Tuple[str, ...] = (".json", ".txt")
    config_file_name: str = "config.json"

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ValueError("endpoint is required")
        if self.list_timeout <= 0 or self.transfer_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 < self.progress_step <= 100:
            raise ValueError("progress_step must be between 1 and 100")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")
        if not self.partial_suffix:
            raise ValueError("partial_suffix is required")

    @property
    def base_url(self) -> str:
        return self.endpoint.rstrip("/")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "DownloadConfig":
        """Build a config, letting environment variables override defaults."""

        env = os.environ if environ is None else environ
        config = cls(**overrides)

        values = {}
        if env.get("HF_ENDPOINT"):
            values["endpoint"] = env["HF_ENDPOINT"]
        if env.get("HUBFETCH_LIST_TIMEOUT"):
            values["list_timeout"] = float(env["HUBFETCH_LIST_TIMEOUT"])
        if env.get("HUBFETCH_TRANSFER_TIMEOUT"):
            values["transfer_timeout"] = float(env["HUBFETCH_TRANSFER_TIMEOUT"])

        return replace(config, **values) if values else config


@dataclass(frozen=True)
class ProxyConfig:
    """Proxy URLs resolved once from the environment."""

    https: Optional[str] = None
    http: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.https and not self.http


__all__ = [
    "DownloadConfig",
    "ProxyConfig",
]
