"""pipeline.config_merge

Merge server and local settings into the single persisted analysis config.

Precedence
----------
* Within the local namespace, the last value given for a key wins.
* Within the server namespace, the last value given for a key wins.
* The two namespaces are never merged: a key set both locally and on the
  server is stored once in each.

The produced rule sets are recorded in the config so downstream stages can
find them without re-scanning the config directory. The config is written once
per run; writing again overwrites the file at the same path.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from analysis_prep.domain.config import AnalyzerSettings, MergedConfiguration, dedupe_properties
from analysis_prep.domain.profile import RuleSetArtifact
from analysis_prep.io.fs import write_json_atomic
from analysis_prep.io.layout import PrepPaths

logger = logging.getLogger(__name__)


def now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""

    return datetime.now(timezone.utc).isoformat()


def _pairs(props: Union[Mapping[str, str], Iterable[Tuple[str, str]], None]) -> Iterable[Tuple[str, str]]:
    if props is None:
        return ()
    if isinstance(props, Mapping):
        return props.items()
    return props


def merge_configuration(
    project_key: str,
    name: Optional[str],
    version: Optional[str],
    server_properties: Union[Mapping[str, str], Iterable[Tuple[str, str]], None],
    local_properties: Union[Mapping[str, str], Iterable[Tuple[str, str]], None],
    artifacts: Sequence[RuleSetArtifact],
    *,
    paths: PrepPaths,
    organization: Optional[str] = None,
    generated_at: Optional[str] = None,
) -> MergedConfiguration:
    """Build the merged configuration (pure apart from the clock)."""
    if not project_key:
        raise ValueError("project_key is required")
    if paths is None:
        raise ValueError("paths is required")

    return MergedConfiguration(
        project_key=project_key,
        project_name=name,
        project_version=version,
        organization=organization,
        config_dir=str(paths.config_dir),
        output_dir=str(paths.output_dir),
        bin_dir=str(paths.bin_dir),
        local_settings=dedupe_properties(_pairs(local_properties)),
        server_settings=dedupe_properties(_pairs(server_properties)),
        analyzers_settings=tuple(AnalyzerSettings.from_artifact(a) for a in (artifacts or ())),
        generated_at=generated_at or now_iso(),
    )


def write_analysis_config(config: MergedConfiguration, path: Union[str, Path]) -> Path:
    """Persist the config (atomic, sorted keys). Overwrites an existing file."""
    p = Path(path)
    write_json_atomic(p, config.to_dict())
    logger.info(
        "Wrote analysis config %s (%d local, %d server setting(s), %d analyzer setting(s))",
        p,
        len(config.local_settings),
        len(config.server_settings),
        config.analyzers_count,
    )
    return p
