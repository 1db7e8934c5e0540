"""
Progress throttling for large file transfers.
"""

from typing import Optional

from ..infrastructure.logger import logger
from ..models import DownloadConfig, DownloadProgress, ProgressCallback


class ProgressThrottler:
    """
    Forwards a progress report only when the integer percentage has advanced
    by at least ``step`` points since the last forwarded report. The terminal
    report (fraction 1.0) is always forwarded, exactly once.
    """

    def __init__(self, sink: ProgressCallback, step: int = 10):
        if step <= 0:
            raise ValueError("step must be positive")
        self.sink = sink
        self.step = step
        self.last_percentage = 0
        self.forwarded = 0
        self._finished = False

    def __call__(self, progress: DownloadProgress) -> None:
        if self._finished:
            return

        if progress.is_terminal:
            self._finished = True
            self._forward(progress)
            return

        if progress.percentage >= self.last_percentage + self.step:
            self._forward(progress)

    def _forward(self, progress: DownloadProgress) -> None:
        self.last_percentage = progress.percentage
        self.forwarded += 1
        self.sink(progress)


def log_progress(progress: DownloadProgress) -> None:
    """Default sink for large files when the caller supplies none."""
    logger.info(f"   Progress: {progress.percentage}% of {progress.file_name}")


def _terminal_only(sink: ProgressCallback) -> ProgressCallback:
    def forward(progress: DownloadProgress) -> None:
        if progress.is_terminal:
            sink(progress)

    return forward


def build_progress_sink(
    file_size: int,
    callback: Optional[ProgressCallback],
    config: DownloadConfig
) -> Optional[ProgressCallback]:
    """
    Choose the sink used for one file.

    Files above ``config.progress_threshold`` get a throttler, wrapping the
    caller's callback or the logging sink. Smaller files only pass the
    terminal report to the caller's callback.
    """
    if file_size > config.progress_threshold:
        sink = callback
        if sink is None and config.show_progress:
            sink = log_progress
        if sink is None:
            return None
        return ProgressThrottler(sink, config.progress_step)

    if callback is None:
        return None
    return _terminal_only(callback)


__all__ = [
    "ProgressThrottler",
    "log_progress",
    "build_progress_sink",
]
