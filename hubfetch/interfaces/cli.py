"""
Command line entry point: ``python -m hubfetch``.
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path

from ..infrastructure.error_handler import DownloadError
from ..infrastructure.logger import logger
from ..models import DownloadConfig, ModelManifest, Repository
from .api import HubDownloader


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hubfetch",
        description="Download the required models of a hub repository and check them on disk.",
    )
    p.add_argument("repo_id", help="repository id, e.g. org/model")
    p.add_argument("--dest", required=True, help="base directory holding repository caches")
    p.add_argument("--model", dest="models", action="append", required=True,
                   help="model package to download and load (repeatable)")
    p.add_argument("--folder-name", help="local folder name for the repository")
    p.add_argument("--endpoint", help="hub base URL (defaults to HF_ENDPOINT or huggingface.co)")
    p.add_argument("--no-progress", action="store_true", help="do not log progress of large files")
    p.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    return p


def build_config(args: argparse.Namespace) -> DownloadConfig:
    config = DownloadConfig.from_env(show_progress=not args.no_progress)
    if args.endpoint:
        config = replace(config, endpoint=args.endpoint)
    return config


async def _run(args: argparse.Namespace) -> int:
    repository = Repository(repo_id=args.repo_id, folder_name=args.folder_name)
    manifest = ModelManifest().with_models(repository, args.models)

    async with HubDownloader(build_config(args), manifest=manifest, verbose=args.verbose) as downloader:
        models = await downloader.load_models(repository, args.models, Path(args.dest))

    for name, path in models.items():
        print(f"{name}\t{path}")
    return 0


def main(argv=None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)

    try:
        return asyncio.run(_run(args))
    except (DownloadError, ValueError) as e:
        logger.error(f"Download failed: {e}")
        return 1


__all__ = [
    "build_parser",
    "build_config",
    "main",
]
