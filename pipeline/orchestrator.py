"""pipeline.orchestrator

Drive one pre-processing run end to end.

States
------
INIT -> CLASSIFIED -> PROFILES_RESOLVED -> ARTIFACTS_MATERIALIZED
     -> CONFIGURATION_MERGED -> COMPLETED

FAILED is reachable from every non-terminal state. Steps run strictly in
sequence, each consuming the full output of the previous one.

Failure policy
--------------
- Missing required arguments raise ValueError immediately (never caught here).
- A fatal step error (server unreachable, missing output directory, install
  failure, filesystem error) moves the run to FAILED and returns
  ``completed=False``. Files already written stay on disk.
- No profile for a language, no Valid projects and empty rule sets are normal
  zero-result outcomes; the run proceeds.

This module is intentionally "boring": it wires together existing components.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from analysis_prep.domain.config import MergedConfiguration
from analysis_prep.domain.ports import QualityProfileServer, TargetsInstaller
from analysis_prep.domain.profile import QualityProfile, RuleSetArtifact
from analysis_prep.domain.project import ClassificationStatus, ProjectRecord
from analysis_prep.domain.result import AnalysisResult
from analysis_prep.errors import AnalysisPrepError
from analysis_prep.io.layout import ensure_prep_dirs

from pipeline.classification import classify_projects
from pipeline.config_merge import merge_configuration, write_analysis_config
from pipeline.discovery import discover_project_descriptors
from pipeline.models import PrepOutcome, PrepRequest
from pipeline.profiles import QualityProfileResolver
from pipeline.report import write_summary_report
from pipeline.rulesets import materialize_profile
from pipeline.settings import PrepSettings

logger = logging.getLogger(__name__)


class PrepState(Enum):
    INIT = "Init"
    CLASSIFIED = "Classified"
    PROFILES_RESOLVED = "ProfilesResolved"
    ARTIFACTS_MATERIALIZED = "ArtifactsMaterialized"
    CONFIGURATION_MERGED = "ConfigurationMerged"
    COMPLETED = "Completed"
    FAILED = "Failed"


NEXT_STATE: Dict[PrepState, PrepState] = {
    PrepState.INIT: PrepState.CLASSIFIED,
    PrepState.CLASSIFIED: PrepState.PROFILES_RESOLVED,
    PrepState.PROFILES_RESOLVED: PrepState.ARTIFACTS_MATERIALIZED,
    PrepState.ARTIFACTS_MATERIALIZED: PrepState.CONFIGURATION_MERGED,
    PrepState.CONFIGURATION_MERGED: PrepState.COMPLETED,
}

TERMINAL_STATES = frozenset({PrepState.COMPLETED, PrepState.FAILED})


class PreProcessor:
    """One instance may run several times; runs never share an AnalysisResult."""

    def __init__(
        self,
        *,
        server: QualityProfileServer,
        installer: TargetsInstaller,
        settings: PrepSettings,
        write_report: bool = True,
    ) -> None:
        if server is None or installer is None or settings is None:
            raise ValueError("server, installer and settings are required")
        self.server = server
        self.installer = installer
        self.settings = settings
        self.write_report = write_report
        self.state = PrepState.INIT
        self.history: List[PrepState] = []

    # -------------------------
    # State machine
    # -------------------------

    def _enter(self, state: PrepState) -> None:
        self.state = state
        self.history.append(state)
        logger.info("Pre-processing state: %s", state.value)

    def _advance(self, expected: PrepState) -> None:
        nxt = NEXT_STATE.get(self.state)
        if nxt is not expected:
            raise RuntimeError(f"Illegal transition {self.state.value} -> {expected.value}")
        self._enter(nxt)

    def _fail(self, exc: BaseException) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Cannot fail from terminal state {self.state.value}")
        logger.error("Pre-processing failed in state %s: %s", self.state.value, exc)
        self._enter(PrepState.FAILED)

    # -------------------------
    # Steps
    # -------------------------

    def _candidates(self, request: PrepRequest) -> Sequence[ProjectRecord]:
        if request.candidates is not None:
            return request.candidates
        return discover_project_descriptors(self.settings.paths.output_dir)

    def _resolve_profiles(self, request: PrepRequest, result: AnalysisResult) -> Dict[str, QualityProfile]:
        valid = result.projects_with_status(ClassificationStatus.VALID)
        if not valid:
            logger.warning("No valid projects to analyze; no rule sets will be generated.")
        resolver = QualityProfileResolver(self.server)
        return resolver.resolve(
            valid,
            self.settings.languages,
            request.organization,
            project_key=request.project_key,
        )

    def _materialize(self, profiles: Dict[str, QualityProfile]) -> List[RuleSetArtifact]:
        artifacts: List[RuleSetArtifact] = []
        for profile in profiles.values():
            artifacts.extend(
                materialize_profile(
                    self.settings.paths.config_dir,
                    profile,
                    include_inactive_only=self.settings.include_inactive_only_rulesets,
                )
            )
        return artifacts

    def _report(self, result: AnalysisResult) -> None:
        if not self.write_report:
            return
        try:
            path = write_summary_report(result, self.settings.paths.output_dir)
        except OSError as e:
            logger.warning("Could not write the project summary report: %s", e)
            return
        logger.debug("Project summary report: %s", path)

    # -------------------------
    # Entry point
    # -------------------------

    def execute(self, request: PrepRequest) -> PrepOutcome:
        """Run the full pre-processing sequence for ``request``."""
        if request is None:
            raise ValueError("request is required")
        if not request.project_key:
            raise ValueError("request.project_key is required")

        self.state = PrepState.INIT
        self.history = [PrepState.INIT]
        paths = self.settings.paths

        result = AnalysisResult()
        classified = False
        config: Optional[MergedConfiguration] = None

        try:
            self.installer.install(logger, paths.working_dir)
            ensure_prep_dirs(paths)

            result = classify_projects(self._candidates(request))
            classified = True
            self._advance(PrepState.CLASSIFIED)

            server_properties = self.server.get_global_properties(request.project_key)
            profiles = self._resolve_profiles(request, result)
            self._advance(PrepState.PROFILES_RESOLVED)

            artifacts = self._materialize(profiles)
            self._advance(PrepState.ARTIFACTS_MATERIALIZED)

            config = merge_configuration(
                request.project_key,
                request.project_name,
                request.project_version,
                server_properties,
                request.local_properties,
                artifacts,
                paths=paths,
                organization=request.organization,
            )
            config_path = write_analysis_config(config, paths.analysis_config_path)
            self._advance(PrepState.CONFIGURATION_MERGED)

            result.mark_completed(str(config_path))
            self._advance(PrepState.COMPLETED)
        except (AnalysisPrepError, OSError) as e:
            self._fail(e)
            if classified:
                self._report(result)
            return PrepOutcome(
                completed=False,
                result=result,
                state=self.state.value,
                config=None,
                error=str(e),
            )

        self._report(result)
        return PrepOutcome(completed=True, result=result, state=self.state.value, config=config)
