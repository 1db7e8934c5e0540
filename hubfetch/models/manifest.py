"""
Required model lookup for HubFetch.

Maps a repository id to the model package directories that must be
downloaded for it.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from .hub import Repository


class ModelManifest:
    """Static, read-only table of required model paths per repository."""

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None):
        self._entries: Dict[str, FrozenSet[str]] = {
            repo_id: frozenset(paths) for repo_id, paths in (entries or {}).items()
        }

    def required_model_paths(self, repo_id: str) -> FrozenSet[str]:
        """Required model paths for ``repo_id``; empty for unknown repositories."""
        return self._entries.get(repo_id, frozenset())

    def supports(self, repo_id: str) -> bool:
        return repo_id in self._entries

    def with_models(self, repository: Repository, model_names: Iterable[str]) -> "ModelManifest":
        """Return a copy that also requires ``model_names`` for ``repository``."""

        entries = dict(self._entries)
        entries[repository.repo_id] = entries.get(repository.repo_id, frozenset()) | frozenset(model_names)
        return ModelManifest(entries)

    def __contains__(self, repo_id: str) -> bool:
        return self.supports(repo_id)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = [
    "ModelManifest",
]
