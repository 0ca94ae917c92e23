"""pipeline.pipeline

This module defines a *single, high-level* object that represents this repo's
primary capability: preparing a build for static analysis.

Why this exists
---------------
The behavior is implemented across several modules (classification, profile
resolution, rule-set materialization, config merge) that
:mod:`pipeline.orchestrator` sequences. Callers (CLI, scripts, CI runners)
should not have to assemble local settings or build requests by hand, so the
:class:`AnalysisPrepPipeline` facade gives them one obvious entrypoint:

- ``prepare(...)``: run the pre-processor for one project key

The facade is intentionally thin: it turns caller-level arguments into a
:class:`~pipeline.models.PrepRequest` and delegates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from analysis_prep.domain.project import ProjectRecord
from tools.sonar.types import SonarConfig

from pipeline.local_settings import collect_local_settings
from pipeline.models import PrepOutcome, PrepRequest
from pipeline.orchestrator import PreProcessor


class AnalysisPrepPipeline:
    """High-level facade over the pre-processor.

    Callers should prefer using this object (built via
    :func:`pipeline.wiring.build_pipeline`) rather than importing low-level
    modules directly.
    """

    def __init__(self, preprocessor: PreProcessor, *, sonar: Optional[SonarConfig] = None) -> None:
        self.preprocessor = preprocessor
        self.sonar = sonar

    @property
    def settings(self):
        return self.preprocessor.settings

    def build_request(
        self,
        project_key: str,
        *,
        project_name: Optional[str] = None,
        project_version: Optional[str] = None,
        organization: Optional[str] = None,
        properties: Sequence[str] = (),
        settings_file: Optional[Union[str, Path]] = None,
        candidates: Optional[Sequence[ProjectRecord]] = None,
    ) -> PrepRequest:
        """Collect local settings and build the request for one run."""
        local = collect_local_settings(
            settings_file=settings_file or self.settings.settings_file,
            cli_properties=properties,
            host_url=self.sonar.host if self.sonar else None,
        )
        org = organization or (self.sonar.organization if self.sonar else None)
        return PrepRequest(
            project_key=project_key,
            project_name=project_name,
            project_version=project_version,
            organization=org,
            local_properties=tuple(local),
            candidates=candidates,
        )

    def prepare(self, project_key: str, **kwargs) -> PrepOutcome:
        """Run the pre-processor. See :meth:`build_request` for arguments."""
        return self.preprocessor.execute(self.build_request(project_key, **kwargs))
