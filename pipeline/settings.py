"""pipeline.settings

Explicit run settings.

Environment variables (optionally from a ``.env`` file) are read in exactly one
place, :func:`settings_from_env`, and turned into frozen values that are passed
into each component. No component looks up directories or credentials on its
own.

Variables
---------
PREP_WORK_DIR                working directory (default: current directory)
PREP_LANGUAGES               comma-separated language keys (default: cs,vbnet)
PREP_INCLUDE_INACTIVE_ONLY   write rule sets for plugins with only inactive rules
PREP_SETTINGS_FILE           YAML analysis settings file
PREP_TARGETS_FILE            integration hook file to install (default: none)
PREP_TARGETS_DIRS            comma-separated install directories for the hook
SONAR_HOST / SONAR_TOKEN / SONAR_ORG / SONAR_TIMEOUT
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from dotenv import load_dotenv

from analysis_prep.io.layout import PrepPaths, build_prep_paths
from tools.sonar.types import SONAR_HOST_DEFAULT, SonarConfig

DEFAULT_LANGUAGES: Tuple[str, ...] = ("cs", "vbnet")


@dataclass(frozen=True)
class PrepSettings:
    paths: PrepPaths
    languages: Tuple[str, ...] = DEFAULT_LANGUAGES
    include_inactive_only_rulesets: bool = False
    settings_file: Optional[Path] = None


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_csv(value: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if not value:
        return default
    items = tuple(x.strip() for x in value.split(",") if x.strip())
    return items or default


def load_environment(dotenv_path: Optional[Union[str, Path]] = None) -> None:
    """Load a ``.env`` file into ``os.environ`` without overriding set values."""
    path = Path(dotenv_path) if dotenv_path else Path.cwd() / ".env"
    if path.is_file():
        load_dotenv(path, override=False)


def settings_from_env(
    env: Optional[Mapping[str, str]] = None,
    *,
    working_dir: Optional[Union[str, Path]] = None,
) -> PrepSettings:
    env = os.environ if env is None else env
    work = working_dir or env.get("PREP_WORK_DIR") or Path.cwd()
    settings_file = env.get("PREP_SETTINGS_FILE")
    return PrepSettings(
        paths=build_prep_paths(work),
        languages=_env_csv(env.get("PREP_LANGUAGES"), DEFAULT_LANGUAGES),
        include_inactive_only_rulesets=_env_flag(env.get("PREP_INCLUDE_INACTIVE_ONLY")),
        settings_file=Path(settings_file) if settings_file else None,
    )


def sonar_config_from_env(
    env: Optional[Mapping[str, str]] = None,
    *,
    host: Optional[str] = None,
    organization: Optional[str] = None,
) -> SonarConfig:
    """Connection settings; explicit arguments win over the environment."""
    env = os.environ if env is None else env
    timeout_raw = env.get("SONAR_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else 30.0
    except ValueError as e:
        raise ValueError(f"SONAR_TIMEOUT must be a number, got {timeout_raw!r}") from e
    return SonarConfig(
        host=host or env.get("SONAR_HOST") or SONAR_HOST_DEFAULT,
        token=env.get("SONAR_TOKEN") or None,
        organization=organization or env.get("SONAR_ORG") or None,
        timeout=timeout,
    )
