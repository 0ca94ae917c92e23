"""pipeline.local_settings

Collect the *local* analysis settings of a run.

Sources, applied in order (later wins for the same key):

1. an optional YAML analysis settings file::

       properties:
         sonar.exclusions: "**/generated/**"
         sonar.cs.opencover.reportsPaths: coverage.xml

2. ``key=value`` properties given on the command line

Server settings are never mixed in here; they are merged separately.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

import yaml

PropertyPair = Tuple[str, str]


def parse_property_arg(raw: str) -> PropertyPair:
    """Parse one ``key=value`` property. Only the first '=' separates."""
    if raw is None or "=" not in raw:
        raise ValueError(f"Invalid property {raw!r}: expected key=value")
    key, value = raw.split("=", 1)
    key = key.strip()
    if not key:
        raise ValueError(f"Invalid property {raw!r}: empty key")
    return key, value


def parse_property_args(raw: Sequence[str]) -> List[PropertyPair]:
    return [parse_property_arg(r) for r in (raw or [])]


def load_settings_file(path: Union[str, Path]) -> List[PropertyPair]:
    """Load the ``properties`` mapping of a YAML analysis settings file."""
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Analysis settings file not found: {p}")
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Analysis settings YAML must be a mapping at top level: {p}")

    props: Any = raw.get("properties") or {}
    if not isinstance(props, dict):
        raise ValueError(f"'properties' must be a mapping in {p}")
    return [(str(k), "" if v is None else str(v)) for k, v in props.items()]


def collect_local_settings(
    *,
    settings_file: Optional[Union[str, Path]] = None,
    cli_properties: Sequence[str] = (),
    host_url: Optional[str] = None,
) -> List[PropertyPair]:
    """Assemble local settings in precedence order (last write wins later).

    ``host_url`` is added as ``sonar.host.url`` only when no other source
    set it.
    """
    pairs: List[PropertyPair] = []
    if settings_file:
        pairs.extend(load_settings_file(settings_file))
    pairs.extend(parse_property_args(cli_properties))

    if host_url and not any(k == "sonar.host.url" for k, _ in pairs):
        pairs.insert(0, ("sonar.host.url", host_url))
    return pairs
