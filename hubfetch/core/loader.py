"""
Hand-off to the downstream model loader.

``LocalModelLoader`` is the default loader: it validates that every expected
model package is materialized and returns its local path. Framework specific
loaders implement the same ``load`` method and return in-memory handles.
"""

import inspect
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence

import aiofiles.os as aios

from ..infrastructure.error_handler import CorruptModelError, MissingFileError
from ..infrastructure.logger import logger


class ModelLoader(Protocol):
    def load(self, repo_path: Path, model_names: Sequence[str]) -> Any:
        ...


class LocalModelLoader:
    """Checks model packages on disk and returns their paths."""

    def __init__(self, required_file: Optional[str] = "coremldata.bin"):
        self.required_file = required_file

    async def load(self, repo_path: Path, model_names: Sequence[str]) -> Dict[str, Path]:
        models: Dict[str, Path] = {}
        for name in model_names:
            model_path = Path(repo_path) / name

            if not await aios.path.exists(model_path):
                raise MissingFileError(f"Model file not found: {name}")

            if not await aios.path.isdir(model_path):
                raise CorruptModelError(f"Model path is not a directory: {name}")

            if self.required_file and not await aios.path.exists(model_path / self.required_file):
                logger.error(f"Missing {self.required_file} in {name}")
                contents = sorted(await aios.listdir(model_path))
                logger.error(f"   Model directory contents: {contents}")
                raise CorruptModelError(f"Missing {self.required_file} in model: {name}")

            models[name] = model_path
            logger.info(f"Loaded model: {name}")

        return models


async def run_loader(loader: ModelLoader, repo_path: Path, model_names: Sequence[str]) -> Any:
    """Call ``loader.load`` whether it is a plain or a coroutine method."""

    result = loader.load(repo_path, model_names)
    if inspect.isawaitable(result):
        result = await result
    return result


__all__ = [
    "ModelLoader",
    "LocalModelLoader",
    "run_loader",
]
