"""
Recursive download of remote model directories.
"""

from pathlib import Path, PurePosixPath
from typing import List, Optional

from ..infrastructure.error_handler import ProtocolError
from ..infrastructure.logger import format_bytes, logger
from ..models import DownloadConfig, ProgressCallback, RemoteEntry, TransferResult
from ..services import DownloadService, HubAPIService
from .progress import build_progress_sink


def resolve_local_path(local_root: Path, remote_path: str) -> Path:
    """
    Map a slash-separated remote path onto ``local_root``.

    Raises:
        ProtocolError: If the remote path is absolute, empty or escapes the root
    """
    remote = PurePosixPath(remote_path)
    if remote.is_absolute() or not remote.parts or ".." in remote.parts:
        raise ProtocolError(f"Unsafe remote path in listing: {remote_path!r}")
    return Path(local_root).joinpath(*remote.parts)


class DirectoryMaterializer:
    """
    Mirrors a remote directory into a local root, one file at a time.

    Entries are handled strictly in listing order; subdirectories are
    recursed into as they are met.
    """

    def __init__(
        self,
        hub_service: HubAPIService,
        download_service: DownloadService,
        config: DownloadConfig
    ):
        self.hub_service = hub_service
        self.download_service = download_service
        self.config = config

    async def materialize(
        self,
        repo_id: str,
        remote_dir: str,
        local_root: Path,
        progress: Optional[ProgressCallback] = None
    ) -> List[TransferResult]:
        """
        Download every file under ``remote_dir`` into ``local_root``.

        Args:
            repo_id: Repository identifier
            remote_dir: Directory path relative to the repository root
            local_root: Local repository directory
            progress: Optional caller progress callback

        Returns:
            One TransferResult per file, in download order
        """
        results: List[TransferResult] = []
        await self._materialize(repo_id, remote_dir, Path(local_root), progress, results, depth=0)
        return results

    async def _materialize(
        self,
        repo_id: str,
        remote_dir: str,
        local_root: Path,
        progress: Optional[ProgressCallback],
        results: List[TransferResult],
        depth: int
    ) -> None:
        if depth > self.config.max_depth:
            raise ProtocolError(
                f"Directory {remote_dir} is nested deeper than {self.config.max_depth} levels"
            )

        await self.download_service.ensure_directory(resolve_local_path(local_root, remote_dir))

        entries = await self.hub_service.list_tree(repo_id, remote_dir)
        for entry in entries:
            if entry.is_directory:
                await self._materialize(repo_id, entry.path, local_root, progress, results, depth + 1)
            elif entry.is_file:
                results.append(await self.transfer_entry(repo_id, entry, local_root, progress))

    async def transfer_entry(
        self,
        repo_id: str,
        entry: RemoteEntry,
        local_root: Path,
        progress: Optional[ProgressCallback] = None
    ) -> TransferResult:
        """Download a single file entry below ``local_root``."""

        expected_size = entry.true_size

        # Only large files are worth an INFO line
        if expected_size > self.config.large_file_log_threshold:
            logger.info(f"Downloading {entry.path} ({format_bytes(expected_size)})")
        else:
            logger.debug(f"Downloading {entry.path} ({format_bytes(expected_size)})")

        task = self.download_service.make_task(
            entry.path,
            resolve_local_path(local_root, entry.path),
            expected_size
        )
        sink = build_progress_sink(expected_size, progress, self.config)
        return await self.download_service.transfer(repo_id, task, sink)


__all__ = [
    "resolve_local_path",
    "DirectoryMaterializer",
]
