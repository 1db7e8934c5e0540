"""
Selection rules deciding which top-level entries of a repository are fetched.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import FrozenSet, Iterable, List, Tuple

from ..models import DownloadConfig, RemoteEntry


class EntryAction(Enum):
    """What the orchestrator does with a top-level entry."""

    MATERIALIZE = "materialize"     # required model package, fetched recursively
    TRANSFER = "transfer"           # essential metadata file
    SKIP_MODEL = "skip_model"       # model package not in the required set
    IGNORE = "ignore"               # anything else


@dataclass(frozen=True)
class SelectionCriteria:
    """Rules for model packages and essential files."""

    required_models: FrozenSet[str] = frozenset()
    model_suffix: str = ".mlmodelc"
    essential_extensions: Tuple[str, ...] = (".json", ".txt")
    config_file_name: str = "config.json"

    @classmethod
    def from_config(cls, config: DownloadConfig, required_models: Iterable[str]) -> "SelectionCriteria":
        return cls(
            required_models=frozenset(required_models),
            model_suffix=config.model_suffix,
            essential_extensions=tuple(config.essential_extensions),
            config_file_name=config.config_file_name,
        )

    def is_model_package(self, path: str) -> bool:
        return path.endswith(self.model_suffix)

    def is_required_model(self, path: str) -> bool:
        return self.is_model_package(path) and path in self.required_models

    def is_essential_file(self, path: str) -> bool:
        name = PurePosixPath(path).name
        if name == self.config_file_name:
            return True
        return PurePosixPath(path).suffix in self.essential_extensions


@dataclass
class FilterResult:
    """Top-level entries grouped by the action taken on them."""

    model_directories: List[RemoteEntry] = field(default_factory=list)
    essential_files: List[RemoteEntry] = field(default_factory=list)
    skipped_models: List[RemoteEntry] = field(default_factory=list)
    ignored_entries: List[RemoteEntry] = field(default_factory=list)

    @property
    def total_entries(self) -> int:
        return (
            len(self.model_directories) + len(self.essential_files)
            + len(self.skipped_models) + len(self.ignored_entries)
        )

    @property
    def selected_entries(self) -> int:
        return len(self.model_directories) + len(self.essential_files)


class FilterEngine:
    """Classifies top-level repository entries."""

    def __init__(self, criteria: SelectionCriteria):
        self.criteria = criteria

    def classify(self, entry: RemoteEntry) -> EntryAction:
        if entry.is_directory:
            if not self.criteria.is_model_package(entry.path):
                return EntryAction.IGNORE
            if self.criteria.is_required_model(entry.path):
                return EntryAction.MATERIALIZE
            return EntryAction.SKIP_MODEL

        if entry.is_file and self.criteria.is_essential_file(entry.path):
            return EntryAction.TRANSFER
        return EntryAction.IGNORE

    def should_include_entry(self, entry: RemoteEntry) -> bool:
        return self.classify(entry) in (EntryAction.MATERIALIZE, EntryAction.TRANSFER)

    def filter_entries(self, entries: Iterable[RemoteEntry]) -> FilterResult:
        result = FilterResult()
        buckets = {
            EntryAction.MATERIALIZE: result.model_directories,
            EntryAction.TRANSFER: result.essential_files,
            EntryAction.SKIP_MODEL: result.skipped_models,
            EntryAction.IGNORE: result.ignored_entries,
        }
        for entry in entries:
            buckets[self.classify(entry)].append(entry)
        return result


__all__ = [
    "EntryAction",
    "SelectionCriteria",
    "FilterResult",
    "FilterEngine",
]
