"""
Retry supervisor: one wipe-and-retry around a full repository load.
"""

import asyncio
import shutil
from pathlib import Path
from typing import Awaitable, Callable, TypeVar, Union

from ..infrastructure.logger import logger
from ..models import Repository


T = TypeVar("T")


class RetrySupervisor:
    """
    Runs a load at most twice.

    If the first attempt fails for any reason, the repository cache directory
    is deleted so the second attempt downloads everything again. A failure of
    the second attempt is propagated unchanged.
    """

    max_attempts = 2

    def __init__(self):
        self.attempts_made = 0

    async def execute(self, cache_dir: Path, load_fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``load_fn``, wiping ``cache_dir`` and retrying once on failure.

        Args:
            cache_dir: Repository cache directory to delete between attempts
            load_fn: Coroutine function performing ensure-then-load

        Returns:
            Whatever ``load_fn`` returns
        """
        self.attempts_made = 1
        try:
            return await load_fn()
        except Exception as e:
            logger.warning(f"Attempt 1 failed: {e}")
            logger.info(f"Deleting cache at {cache_dir} and re-downloading...")

        await self.wipe(cache_dir)

        self.attempts_made = 2
        try:
            return await load_fn()
        except Exception as e:
            logger.error(f"All {self.max_attempts} attempts failed, giving up: {e}")
            raise

    async def load_with_recovery(
        self,
        repository: Repository,
        base_directory: Union[str, Path],
        load_fn: Callable[[], Awaitable[T]]
    ) -> T:
        cache_dir = Path(base_directory) / repository.cache_folder_name
        return await self.execute(cache_dir, load_fn)

    @staticmethod
    async def wipe(cache_dir: Path) -> None:
        """Delete ``cache_dir`` wholesale. Errors are ignored."""
        await asyncio.to_thread(shutil.rmtree, cache_dir, ignore_errors=True)


__all__ = [
    "RetrySupervisor",
]
