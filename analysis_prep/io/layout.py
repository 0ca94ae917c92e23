"""analysis_prep.io.layout

Canonical filesystem layout for one pre-processing run.

Everything the pre-processor writes lives under one analysis base directory
inside the build's working directory::

    <work>/.sonarqube/
        conf/SonarQubeAnalysisConfig.json
        conf/SonarQube-<language>-<plugin>.ruleset
        out/<project>/ProjectInfo.json      (written by the build)
        out/ProjectInfo.log                 (summary report)
        bin/                                (owned by the bootstrapper)

Components receive a :class:`PrepPaths` value explicitly; none of them looks
directories up from the environment on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from analysis_prep.errors import RuleSetNameError

ANALYSIS_BASE_DIRNAME = ".sonarqube"
CONFIG_DIRNAME = "conf"
OUTPUT_DIRNAME = "out"
BIN_DIRNAME = "bin"

ANALYSIS_CONFIG_FILENAME = "SonarQubeAnalysisConfig.json"
PROJECT_INFO_FILENAME = "ProjectInfo.json"
SUMMARY_REPORT_FILENAME = "ProjectInfo.log"
RULESET_EXTENSION = ".ruleset"

# "-" separates segments and "~" escapes, so neither may appear verbatim.
_SAFE_SEGMENT = re.compile(r"[^A-Za-z0-9_.]")


@dataclass(frozen=True)
class PrepPaths:
    """Directories and well-known files of one pre-processing run."""

    working_dir: Path
    analysis_base_dir: Path
    config_dir: Path
    output_dir: Path
    bin_dir: Path

    @property
    def analysis_config_path(self) -> Path:
        return self.config_dir / ANALYSIS_CONFIG_FILENAME

    @property
    def summary_report_path(self) -> Path:
        return self.output_dir / SUMMARY_REPORT_FILENAME


def build_prep_paths(working_dir: Union[str, Path]) -> PrepPaths:
    """Derive the run layout from a working directory (pure)."""
    work = Path(working_dir).resolve()
    base = work / ANALYSIS_BASE_DIRNAME
    return PrepPaths(
        working_dir=work,
        analysis_base_dir=base,
        config_dir=base / CONFIG_DIRNAME,
        output_dir=base / OUTPUT_DIRNAME,
        bin_dir=base / BIN_DIRNAME,
    )


def ensure_prep_dirs(paths: PrepPaths) -> None:
    """Create the directories the pre-processor writes into.

    The bin directory is left to the bootstrapper.
    """
    for d in (paths.analysis_base_dir, paths.config_dir, paths.output_dir):
        d.mkdir(parents=True, exist_ok=True)


def _escape(m: "re.Match[str]") -> str:
    return "".join(f"~{b:02X}" for b in m.group(0).encode("utf-8"))


def _safe_segment(value: str) -> str:
    if not (value or "").strip():
        raise RuleSetNameError(f"Cannot derive a file name segment from {value!r}")
    return _SAFE_SEGMENT.sub(_escape, value)


def ruleset_filename(language: str, plugin: str) -> str:
    """File name of the rule set for one (language, plugin) pair.

    >>> ruleset_filename("cs", "fxcop")
    'SonarQube-cs-fxcop.ruleset'

    Other characters are escaped as ``~XX`` per UTF-8 byte, so distinct pairs
    never share a file name:

    >>> ruleset_filename("c-s", "x"), ruleset_filename("c", "s-x")
    ('SonarQube-c~2Ds-x.ruleset', 'SonarQube-c-s~2Dx.ruleset')
    """
    return f"SonarQube-{_safe_segment(language)}-{_safe_segment(plugin)}{RULESET_EXTENSION}"


def ruleset_path(config_dir: Union[str, Path], language: str, plugin: str) -> Path:
    return Path(config_dir) / ruleset_filename(language, plugin)
