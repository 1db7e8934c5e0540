"""
Orchestrator deciding what a repository sync downloads and dispatching it.
"""

from pathlib import Path
from typing import Optional, Union

import aiofiles.os as aios

from ..infrastructure.logger import logger
from ..models import (
    DownloadConfig, DownloadStatus, ModelManifest, ProgressCallback,
    Repository, RepositoryResult
)
from ..services import DownloadService, HubAPIService
from .filter import EntryAction, FilterEngine, SelectionCriteria
from .materializer import DirectoryMaterializer


PathLike = Union[str, Path]


class RepositoryOrchestrator:
    """
    Materializes a repository under a base directory.

    Only model packages listed in the manifest and essential metadata files
    are fetched. An existing repository directory is trusted as complete and
    is never re-checked.
    """

    def __init__(
        self,
        hub_service: HubAPIService,
        download_service: DownloadService,
        manifest: ModelManifest,
        config: DownloadConfig,
        materializer: Optional[DirectoryMaterializer] = None
    ):
        self.hub_service = hub_service
        self.download_service = download_service
        self.manifest = manifest
        self.config = config
        self.materializer = materializer or DirectoryMaterializer(
            hub_service, download_service, config
        )

    @staticmethod
    def repository_path(repository: Repository, base_directory: PathLike) -> Path:
        return Path(base_directory) / repository.cache_folder_name

    async def ensure_repository(
        self,
        repository: Repository,
        base_directory: PathLike,
        progress: Optional[ProgressCallback] = None
    ) -> Path:
        """Make sure ``repository`` is on disk and return its local path."""

        result = await self.sync_repository(repository, base_directory, progress)
        return result.path

    async def sync_repository(
        self,
        repository: Repository,
        base_directory: PathLike,
        progress: Optional[ProgressCallback] = None
    ) -> RepositoryResult:
        """
        Download the required parts of ``repository`` unless already cached.

        Args:
            repository: Repository to sync
            base_directory: Directory holding repository caches
            progress: Optional caller progress callback

        Returns:
            RepositoryResult describing what was fetched, skipped or ignored
        """
        await self.download_service.ensure_directory(Path(base_directory))

        repo_path = self.repository_path(repository, base_directory)
        result = RepositoryResult(
            repository=repository,
            path=repo_path,
            status=DownloadStatus.IN_PROGRESS
        )

        if await aios.path.exists(repo_path):
            logger.info(f"Found {repository.cache_folder_name} locally, no download needed")
            result.cache_hit = True
            result.mark_completed()
            return result

        logger.info(f"Models not found in cache at {repo_path}")
        logger.info(f"Downloading {repository.display_name} from {self.config.base_url}...")
        await self.download_service.ensure_directory(repo_path)

        calls_before = self.hub_service.api_calls
        required_models = self.manifest.required_model_paths(repository.repo_id)
        filter_engine = FilterEngine(SelectionCriteria.from_config(self.config, required_models))

        entries = await self.hub_service.list_tree(repository.repo_id)
        selection = filter_engine.filter_entries(entries)
        logger.debug(
            f"Selected {selection.selected_entries}/{selection.total_entries} "
            f"top-level entries of {repository.display_name}"
        )

        # Entries are handled in listing order
        for entry in entries:
            action = filter_engine.classify(entry)

            if action is EntryAction.MATERIALIZE:
                logger.info(f"Downloading required model: {entry.path}")
                transfers = await self.materializer.materialize(
                    repository.repo_id, entry.path, repo_path, progress
                )
                for transfer in transfers:
                    result.record_transfer(transfer)
            elif action is EntryAction.TRANSFER:
                logger.info(f"Downloading {entry.path}")
                transfer = await self.materializer.transfer_entry(
                    repository.repo_id, entry, repo_path, progress
                )
                result.record_transfer(transfer)
            elif action is EntryAction.SKIP_MODEL:
                logger.info(f"Skipping unrequired model: {entry.path}")
                result.ignored_entries.append(entry.path)
            else:
                result.ignored_entries.append(entry.path)

        missing = required_models - {entry.path for entry in selection.model_directories}
        for name in sorted(missing):
            warning = f"Required model {name} is not present in {repository.display_name}"
            logger.warning(warning)
            result.warnings.append(warning)

        result.api_calls = self.hub_service.api_calls - calls_before
        result.mark_completed()
        logger.info(f"Downloaded all required models for {repository.cache_folder_name}")
        return result


__all__ = [
    "RepositoryOrchestrator",
]
