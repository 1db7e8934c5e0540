"""
Core download engine for HubFetch.
"""

from .filter import EntryAction, FilterEngine, FilterResult, SelectionCriteria
from .loader import LocalModelLoader, ModelLoader, run_loader
from .materializer import DirectoryMaterializer, resolve_local_path
from .orchestrator import RepositoryOrchestrator
from .progress import ProgressThrottler, build_progress_sink, log_progress
from .supervisor import RetrySupervisor

__all__ = [
    "EntryAction",
    "FilterEngine",
    "FilterResult",
    "SelectionCriteria",
    "LocalModelLoader",
    "ModelLoader",
    "run_loader",
    "DirectoryMaterializer",
    "resolve_local_path",
    "RepositoryOrchestrator",
    "ProgressThrottler",
    "build_progress_sink",
    "log_progress",
    "RetrySupervisor",
]
