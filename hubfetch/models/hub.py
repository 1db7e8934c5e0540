"""
Hub domain models for HubFetch.

This module contains strongly typed data classes and enums representing
model hub repositories and the rows returned by the tree listing endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, Optional


class EntryKind(Enum):
    """Kinds of rows returned by the tree listing endpoint."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Repository:
    """Immutable identity of a remote model repository."""

    repo_id: str
    folder_name: Optional[str] = None

    def __post_init__(self) -> None:
        owner, _, name = self.repo_id.partition("/")
        if not owner or not name or "/" in name:
            raise ValueError(f"Invalid repository id: {self.repo_id!r}")

        if self.folder_name is not None:
            if not self.folder_name or "/" in self.folder_name or self.folder_name in (".", ".."):
                raise ValueError(f"Invalid folder name: {self.folder_name!r}")

    @property
    def owner(self) -> str:
        return self.repo_id.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.repo_id.split("/", 1)[1]

    @property
    def cache_folder_name(self) -> str:
        """Deterministic local directory name for this repository."""
        return self.folder_name or f"{self.owner}--{self.name}"

    @property
    def display_name(self) -> str:
        return self.repo_id


@dataclass(frozen=True)
class LfsInfo:
    """Large-file-storage block attached to a listing row."""

    size: int
    sha256: Optional[str] = None
    oid: Optional[str] = None
    pointer_size: Optional[int] = None


@dataclass(frozen=True)
class RemoteEntry:
    """One row of a remote tree listing."""

    kind: EntryKind
    path: str
    size: int
    lfs: Optional[LfsInfo] = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Entry path is required")
        if self.size < 0:
            raise ValueError(f"Entry size cannot be negative: {self.path}")

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def true_size(self) -> int:
        """Size on disk once downloaded; the lfs size wins when present."""
        if self.lfs is not None:
            return self.lfs.size
        return self.size

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RemoteEntry":
        """
        Build an entry from one JSON row of the listing endpoint.

        Raises:
            ValueError: If the row does not match the listing schema
        """
        if not isinstance(data, dict):
            raise ValueError(f"Listing row is not an object: {data!r}")

        try:
            kind = EntryKind(data["type"])
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid entry type in row: {data!r}") from e

        path = data.get("path")
        if not isinstance(path, str):
            raise ValueError(f"Invalid entry path in row: {data!r}")

        size = data.get("size", 0)
        if isinstance(size, bool) or not isinstance(size, int):
            raise ValueError(f"Invalid entry size in row: {data!r}")

        lfs = None
        raw_lfs = data.get("lfs")
        if raw_lfs is not None:
            if not isinstance(raw_lfs, dict):
                raise ValueError(f"Invalid lfs block in row: {data!r}")
            lfs_size = raw_lfs.get("size")
            if isinstance(lfs_size, bool) or not isinstance(lfs_size, int) or lfs_size < 0:
                raise ValueError(f"Invalid lfs size in row: {data!r}")
            lfs = LfsInfo(
                size=lfs_size,
                sha256=raw_lfs.get("sha256"),
                oid=raw_lfs.get("oid"),
                pointer_size=raw_lfs.get("pointer_size"),
            )

        return cls(kind=kind, path=path, size=size, lfs=lfs)


__all__ = [
    "EntryKind",
    "Repository",
    "LfsInfo",
    "RemoteEntry",
]
