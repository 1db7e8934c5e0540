"""
Transfer engine: downloads one remote file to one local path.
"""

import asyncio
import shutil
import stat
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import aiofiles
import aiofiles.os as aios
import httpx

from ..infrastructure.error_handler import (
    DownloadError, FilesystemError, TransferError, handle_api_error, raise_for_status
)
from ..infrastructure.logger import format_bytes, logger
from ..models import (
    DownloadConfig, DownloadProgress, DownloadStatus, ProgressCallback,
    TransferResult, TransferTask
)


class DownloadService:
    """
    Writes remote files to disk through a ``.download`` sibling file and an
    atomic move, skipping files already present with the expected size.
    """

    def __init__(self, client: httpx.AsyncClient, config: DownloadConfig):
        self.client = client
        self.config = config
        self.requests_made = 0

    def file_url(self, repo_id: str, path: str) -> str:
        return (
            f"{self.config.base_url}/{repo_id}/resolve/"
            f"{quote(self.config.revision, safe='')}/{quote(path, safe='/')}"
        )

    def make_task(self, source_path: str, destination: Path, expected_size: int) -> TransferTask:
        return TransferTask(
            source_path=source_path,
            destination=destination,
            expected_size=expected_size,
            partial_suffix=self.config.partial_suffix,
        )

    async def ensure_directory(self, path: Path) -> None:
        """Create ``path`` and its parents. Idempotent."""

        try:
            await aios.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Could not create directory {path}", e) from e

    async def transfer(
        self,
        repo_id: str,
        task: TransferTask,
        progress: Optional[ProgressCallback] = None
    ) -> TransferResult:
        """
        Download ``task.source_path`` from ``repo_id`` to ``task.destination``.

        Args:
            repo_id: Repository identifier
            task: What to fetch and where to put it
            progress: Optional sink receiving DownloadProgress reports; the
                last report is always terminal (fraction 1.0)

        Returns:
            TransferResult; a size mismatch is reported as a warning

        Raises:
            TransferError: If the remote fetch fails
            FilesystemError: If the file cannot be written or finalized
        """
        await self.ensure_directory(task.destination.parent)

        existing_size = await self._file_size(task.destination)
        if existing_size is not None and existing_size == task.expected_size:
            logger.info(f"File already downloaded: {task.source_path}")
            self._report(progress, task.progress(1.0, task.expected_size))
            return TransferResult(
                task=task,
                status=DownloadStatus.SKIPPED,
                final_size=existing_size
            )

        # The partial size is only recorded; the fetch below always starts at byte 0.
        resumed_from = await self._file_size(task.partial_path)
        if resumed_from:
            logger.info(f"Resuming download of {task.source_path} from {format_bytes(resumed_from)}")

        try:
            bytes_written = await self._fetch(repo_id, task, progress)
        except FilesystemError:
            raise
        except DownloadError as e:
            logger.error(f"Download failed for {task.source_path}: {e}")
            raise TransferError(f"Failed to download {task.source_path}", e) from e

        await self.ensure_directory(task.destination.parent)
        await self._finalize(task.partial_path, task.destination)

        final_size = await self._file_size(task.destination)
        result = TransferResult(
            task=task,
            status=DownloadStatus.COMPLETED,
            bytes_written=bytes_written,
            final_size=final_size,
            resumed_from=resumed_from,
        )
        if result.size_mismatch:
            warning = (
                f"Downloaded file size mismatch for {task.source_path}: "
                f"got {final_size}, expected {task.expected_size}"
            )
            logger.warning(warning)
            result.warnings.append(warning)

        logger.debug(f"Downloaded {task.source_path} ({format_bytes(bytes_written)})")
        self._report(progress, task.progress(1.0, bytes_written))
        return result

    @handle_api_error
    async def _fetch(
        self,
        repo_id: str,
        task: TransferTask,
        progress: Optional[ProgressCallback]
    ) -> int:
        """Stream the whole file into the partial sibling; return bytes written."""

        url = self.file_url(repo_id, task.source_path)
        bytes_written = 0

        self.requests_made += 1
        async with self.client.stream("GET", url, timeout=self.config.transfer_timeout) as response:
            raise_for_status(response, f"download of {task.source_path}")

            async with aiofiles.open(task.partial_path, "wb") as handle:
                async for chunk in response.aiter_bytes(self.config.chunk_size):
                    await handle.write(chunk)
                    bytes_written += len(chunk)

                    if progress is not None and task.expected_size > 0:
                        fraction = bytes_written / task.expected_size
                        # 1.0 is reserved for the terminal report
                        if fraction < 1.0:
                            self._report(progress, task.progress(fraction, bytes_written))

        return bytes_written

    async def _finalize(self, source: Path, destination: Path) -> None:
        """Move ``source`` over ``destination``, copying if the move fails."""

        await self._remove_if_exists(destination)
        try:
            await aios.rename(source, destination)
            return
        except OSError as e:
            logger.warning(f"Move failed for {destination.name}, attempting copy: {e}")

        try:
            await asyncio.to_thread(shutil.copyfile, source, destination)
        except OSError as e:
            raise FilesystemError(f"Could not finalize {destination}", e) from e

        try:
            await aios.remove(source)
        except OSError as e:
            logger.warning(f"Could not remove {source.name} after copy: {e}")

    async def _remove_if_exists(self, path: Path) -> None:
        try:
            await aios.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise FilesystemError(f"Could not remove {path}", e) from e

    async def _file_size(self, path: Path) -> Optional[int]:
        """Size of the regular file at ``path``, or None if there is none."""

        try:
            info = await aios.stat(path)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise FilesystemError(f"Could not stat {path}", e) from e

        if not stat.S_ISREG(info.st_mode):
            return None
        return info.st_size

    @staticmethod
    def _report(progress: Optional[ProgressCallback], report: DownloadProgress) -> None:
        if progress is not None:
            progress(report)


__all__ = [
    "DownloadService",
]
