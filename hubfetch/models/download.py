"""
Download domain models for HubFetch.

This module contains data classes and enums representing transfer tasks,
progress reports and the results of transfers and repository syncs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional

from .hub import Repository


class DownloadStatus(Enum):
    """Status enumeration for download operations."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class DownloadProgress:
    """Progress report for a single file transfer."""

    fraction: float
    file_name: str
    file_path: str
    file_size: int
    bytes_downloaded: int

    def __post_init__(self) -> None:
        if not 0.0 <= self.fraction <= 1.0:
            raise ValueError(f"Progress fraction out of range: {self.fraction}")

    @property
    def percentage(self) -> int:
        return int(self.fraction * 100)

    @property
    def is_terminal(self) -> bool:
        return self.fraction == 1.0


ProgressCallback = Callable[[DownloadProgress], None]


@dataclass
class TransferTask:
    """A single remote file to be written to a single local path."""

    source_path: str
    destination: Path
    expected_size: int
    partial_suffix: str = ".download"

    def __post_init__(self) -> None:
        if not self.source_path:
            raise ValueError("Source path is required")
        if self.expected_size < 0:
            raise ValueError("Expected size cannot be negative")
        self.destination = Path(self.destination)

    @property
    def file_name(self) -> str:
        return PurePosixPath(self.source_path).name

    @property
    def partial_path(self) -> Path:
        """Sibling file holding the in-flight payload."""
        return self.destination.with_name(self.destination.name + self.partial_suffix)

    def progress(self, fraction: float, bytes_downloaded: int) -> DownloadProgress:
        return DownloadProgress(
            fraction=fraction,
            file_name=self.file_name,
            file_path=self.source_path,
            file_size=self.expected_size,
            bytes_downloaded=bytes_downloaded,
        )


@dataclass
class TransferResult:
    """Outcome of one transfer. Warnings are non-fatal."""

    task: TransferTask
    status: DownloadStatus
    bytes_written: int = 0
    final_size: Optional[int] = None
    resumed_from: Optional[int] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def size_mismatch(self) -> bool:
        return self.final_size is not None and self.final_size != self.task.expected_size


@dataclass
class RepositoryResult:
    """Result of one orchestrated repository sync."""

    repository: Repository
    path: Path
    status: DownloadStatus = DownloadStatus.PENDING
    cache_hit: bool = False

    downloaded_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    ignored_entries: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    api_calls: int = 0
    total_bytes: int = 0
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def record_transfer(self, result: TransferResult) -> None:
        """Fold a single transfer outcome into the repository totals."""

        if result.status is DownloadStatus.SKIPPED:
            self.skipped_files.append(result.task.source_path)
        else:
            self.downloaded_files.append(result.task.source_path)
            self.total_bytes += result.bytes_written
        self.warnings.extend(result.warnings)

    def mark_completed(self) -> None:
        self.completed_at = datetime.now()
        self.status = DownloadStatus.COMPLETED


__all__ = [
    "DownloadStatus",
    "DownloadProgress",
    "ProgressCallback",
    "TransferTask",
    "TransferResult",
    "RepositoryResult",
]
