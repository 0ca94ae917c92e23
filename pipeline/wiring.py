"""pipeline.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables
- choose real vs stub implementations (useful for testing)
- build the high-level facade object

Keeping this wiring in one place prevents configuration and dependency setup
from being duplicated across entrypoints (CLI, scripts, CI).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional, Union

from analysis_prep.domain.ports import QualityProfileServer, TargetsInstaller
from tools.sonar.api import SonarQubeServer

from pipeline.installer import FileTargetsInstaller, NoOpTargetsInstaller
from pipeline.orchestrator import PreProcessor
from pipeline.pipeline import AnalysisPrepPipeline
from pipeline.settings import load_environment, settings_from_env, sonar_config_from_env


def build_installer(env: Mapping[str, str]) -> TargetsInstaller:
    """Copy a hook file when PREP_TARGETS_FILE is set, otherwise do nothing."""
    source = env.get("PREP_TARGETS_FILE")
    if not source:
        return NoOpTargetsInstaller()
    dests = [d.strip() for d in (env.get("PREP_TARGETS_DIRS") or "").split(",") if d.strip()]
    return FileTargetsInstaller(source, dests or ["."])


def build_pipeline(
    *,
    load_dotenv: bool = True,
    env: Optional[Mapping[str, str]] = None,
    working_dir: Optional[Union[str, Path]] = None,
    host: Optional[str] = None,
    organization: Optional[str] = None,
    server: Optional[QualityProfileServer] = None,
    installer: Optional[TargetsInstaller] = None,
    write_report: bool = True,
) -> AnalysisPrepPipeline:
    """Build the high-level facade.

    ``server`` and ``installer`` may be injected (tests); otherwise the real
    SonarQube client and the installer selected by the environment are used.
    """

    if load_dotenv:
        load_environment()

    env = os.environ if env is None else env
    settings = settings_from_env(env, working_dir=working_dir)
    sonar = sonar_config_from_env(env, host=host, organization=organization)

    preprocessor = PreProcessor(
        server=server if server is not None else SonarQubeServer(sonar),
        installer=installer if installer is not None else build_installer(env),
        settings=settings,
        write_report=write_report,
    )
    return AnalysisPrepPipeline(preprocessor, sonar=sonar)
