"""pipeline.models

Lightweight data structures passed into and out of a pre-processing run.

They give the CLI and the orchestrator a small, explicit vocabulary instead of
long argument lists:
- what to prepare (PrepRequest)
- what came out (PrepOutcome)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from analysis_prep.domain.config import MergedConfiguration
from analysis_prep.domain.project import ProjectRecord
from analysis_prep.domain.result import AnalysisResult


@dataclass(frozen=True)
class PrepRequest:
    """Parameters for one pre-processing run.

    ``candidates`` of None means "discover project descriptors in the output
    directory"; an empty sequence means "there are no projects".
    """

    project_key: str
    project_name: Optional[str] = None
    project_version: Optional[str] = None
    organization: Optional[str] = None
    local_properties: Tuple[Tuple[str, str], ...] = ()
    candidates: Optional[Sequence[ProjectRecord]] = None


@dataclass(frozen=True)
class PrepOutcome:
    """Result of a run. Callers must check ``completed`` *and* inspect
    ``result``: a failed run may still have written some artifacts.
    """

    completed: bool
    result: AnalysisResult
    state: str
    config: Optional[MergedConfiguration] = None
    error: Optional[str] = None
