"""analysis_prep.domain.result

The per-run classification aggregate.

One :class:`AnalysisResult` exists per pre-processing run. It is append-only
while projects are being classified, then frozen; after that only the
completion fields (``ran_to_completion``, ``config_file_path``) may change, and
they change exactly once through :meth:`AnalysisResult.mark_completed`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Set

from .project import ClassificationStatus, ProjectRecord


class AnalysisResult:
    """Projects keyed by classification status, plus shared files."""

    def __init__(self) -> None:
        self._projects: Dict[ProjectRecord, ClassificationStatus] = {}
        self._shared_files: Set[str] = set()
        self._frozen = False
        self.ran_to_completion = False
        self.config_file_path: Optional[str] = None

    # -------------------------
    # Building (classification only)
    # -------------------------

    def add(self, record: ProjectRecord, status: ClassificationStatus) -> None:
        """Record the status of one project. Each record is classified once."""
        self._require_mutable()
        if record in self._projects:
            raise ValueError(f"Project already classified: {record.full_path}")
        self._projects[record] = ClassificationStatus(status)

    def add_shared_file(self, path: str) -> None:
        self._require_mutable()
        self._shared_files.add(path)

    def freeze(self) -> None:
        """Stop accepting classifications; readers now see a fixed snapshot."""
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _require_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("AnalysisResult is frozen; classification has already finished.")

    # -------------------------
    # Queries
    # -------------------------

    @property
    def projects(self) -> Mapping[ProjectRecord, ClassificationStatus]:
        return MappingProxyType(self._projects)

    @property
    def shared_files(self) -> FrozenSet[str]:
        return frozenset(self._shared_files)

    def projects_with_status(self, status: ClassificationStatus) -> List[ProjectRecord]:
        """Projects with the given status, in classification order."""
        return [p for p, s in self._projects.items() if s is status]

    def status_counts(self) -> Dict[ClassificationStatus, int]:
        counts = {s: 0 for s in ClassificationStatus}
        for s in self._projects.values():
            counts[s] += 1
        return counts

    # -------------------------
    # Completion
    # -------------------------

    def mark_completed(self, config_file_path: str) -> None:
        if self.ran_to_completion:
            raise RuntimeError("AnalysisResult is already marked as completed.")
        if not config_file_path:
            raise ValueError("config_file_path is required to mark a run as completed.")
        self.config_file_path = str(config_file_path)
        self.ran_to_completion = True

    def __len__(self) -> int:
        return len(self._projects)
