"""
Public Python API for HubFetch.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

from ..core import (
    DirectoryMaterializer, LocalModelLoader, ModelLoader, RepositoryOrchestrator,
    RetrySupervisor, run_loader
)
from ..infrastructure.http_client import create_client
from ..infrastructure.logger import logger
from ..models import (
    DownloadConfig, ModelManifest, ProgressCallback, Repository, RepositoryResult
)
from ..services import DownloadService, HubAPIService


RepositoryLike = Union[str, Repository]
PathLike = Union[str, Path]


def _as_repository(repository: RepositoryLike) -> Repository:
    if isinstance(repository, Repository):
        return repository
    return Repository(repo_id=repository)


class HubDownloader:
    """
    High-level entry point wiring the download engine together.

    One instance owns one shared HTTP client; construct it once at startup
    and reuse it for every repository.
    """

    def __init__(
        self,
        config: Optional[DownloadConfig] = None,
        manifest: Optional[ModelManifest] = None,
        client: Optional[httpx.AsyncClient] = None,
        verbose: bool = False,
        environ: Optional[Mapping[str, str]] = None
    ):
        self.config = config or DownloadConfig.from_env(environ)
        self.manifest = manifest or ModelManifest()
        self.verbose = verbose

        self._owns_client = client is None
        self.client = client or create_client(self.config, environ)

        self.hub_service = HubAPIService(self.client, self.config)
        self.download_service = DownloadService(self.client, self.config)
        self.materializer = DirectoryMaterializer(
            self.hub_service, self.download_service, self.config
        )
        self.orchestrator = RepositoryOrchestrator(
            self.hub_service, self.download_service, self.manifest, self.config,
            materializer=self.materializer
        )
        self.supervisor = RetrySupervisor()

        self.set_verbose(verbose)

    def set_verbose(self, verbose: bool) -> None:
        """Switch the package logger between DEBUG and INFO."""

        self.verbose = verbose
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    async def sync_repository(
        self,
        repository: RepositoryLike,
        directory: PathLike,
        progress_callback: Optional[ProgressCallback] = None
    ) -> RepositoryResult:
        """Download a repository if needed and report what happened."""

        return await self.orchestrator.sync_repository(
            _as_repository(repository), directory, progress_callback
        )

    async def ensure_repository(
        self,
        repository: RepositoryLike,
        directory: PathLike,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Path:
        """Download a repository if needed and return its local path."""

        return await self.orchestrator.ensure_repository(
            _as_repository(repository), directory, progress_callback
        )

    async def load_models(
        self,
        repository: RepositoryLike,
        model_names: Sequence[str],
        directory: PathLike,
        loader: Optional[ModelLoader] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Any:
        """
        Ensure a repository is on disk and hand it to ``loader``.

        A failure anywhere in download or load wipes the repository cache and
        retries exactly once.

        Args:
            repository: Repository id or Repository
            model_names: Model package names the loader should load
            directory: Base directory holding repository caches
            loader: Downstream loader, LocalModelLoader by default
            progress_callback: Optional per-file progress callback

        Returns:
            Whatever the loader returns (model name to path by default)
        """
        repo = _as_repository(repository)
        loader = loader or LocalModelLoader()
        names = list(model_names)

        async def attempt() -> Any:
            repo_path = await self.orchestrator.ensure_repository(repo, directory, progress_callback)
            return await run_loader(loader, repo_path, names)

        return await self.supervisor.load_with_recovery(repo, directory, attempt)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HubDownloader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = [
    "HubDownloader",
    "DownloadConfig",
]
