"""analysis_prep.domain.config

The merged analysis configuration written once per pre-processing run.

Later pipeline stages (the analysis wrapper, post-processing) read the
persisted file back with :func:`load_analysis_config`; they never re-scan the
output directories to discover rule sets.

Local and server settings live in separate namespaces. A key present in both is
kept twice: once per namespace. Within one namespace a key appears once.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from analysis_prep.io.fs import read_json

from .profile import RuleSetArtifact


@dataclass(frozen=True)
class Property:
    id: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "value": self.value}


def dedupe_properties(pairs: Iterable[Tuple[str, Any]]) -> Tuple[Property, ...]:
    """Collapse duplicate keys: last value wins, first position is kept."""
    merged: Dict[str, str] = {}
    for key, value in pairs:
        k = str(key)
        merged[k] = "" if value is None else str(value)
    return tuple(Property(id=k, value=v) for k, v in merged.items())


def find_property(props: Iterable[Property], key: str) -> Optional[Property]:
    for p in props:
        if p.id == key:
            return p
    return None


@dataclass(frozen=True)
class AnalyzerSettings:
    """Where an external analyzer finds the rule set it must enforce."""

    language: str
    plugin: str
    ruleset_path: str
    active_rule_count: int = 0
    inactive_rule_count: int = 0

    @classmethod
    def from_artifact(cls, artifact: RuleSetArtifact) -> "AnalyzerSettings":
        return cls(
            language=artifact.language,
            plugin=artifact.plugin,
            ruleset_path=artifact.path,
            active_rule_count=len(artifact.rule_keys),
            inactive_rule_count=len(artifact.inactive_rule_keys),
        )

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "AnalyzerSettings":
        return cls(
            language=str(d.get("language") or ""),
            plugin=str(d.get("plugin") or ""),
            ruleset_path=str(d.get("ruleSetFilePath") or ""),
            active_rule_count=int(d.get("activeRuleCount") or 0),
            inactive_rule_count=int(d.get("inactiveRuleCount") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "plugin": self.plugin,
            "ruleSetFilePath": self.ruleset_path,
            "activeRuleCount": self.active_rule_count,
            "inactiveRuleCount": self.inactive_rule_count,
        }


def _props_from_list(raw: Any) -> Tuple[Property, ...]:
    if not isinstance(raw, list):
        return ()
    pairs = []
    for item in raw:
        if isinstance(item, Mapping) and item.get("id"):
            pairs.append((item["id"], item.get("value")))
    return dedupe_properties(pairs)


@dataclass(frozen=True)
class MergedConfiguration:
    project_key: str
    project_name: Optional[str]
    project_version: Optional[str]
    config_dir: str
    output_dir: str
    bin_dir: Optional[str] = None
    organization: Optional[str] = None
    local_settings: Tuple[Property, ...] = ()
    server_settings: Tuple[Property, ...] = ()
    analyzers_settings: Tuple[AnalyzerSettings, ...] = ()
    generated_at: Optional[str] = None

    @property
    def analyzers_count(self) -> int:
        return len(self.analyzers_settings)

    def get_local_setting(self, key: str) -> Optional[str]:
        p = find_property(self.local_settings, key)
        return p.value if p else None

    def get_server_setting(self, key: str) -> Optional[str]:
        p = find_property(self.server_settings, key)
        return p.value if p else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sonarProjectKey": self.project_key,
            "sonarProjectName": self.project_name,
            "sonarProjectVersion": self.project_version,
            "organization": self.organization,
            "sonarConfigDir": self.config_dir,
            "sonarOutputDir": self.output_dir,
            "sonarBinDir": self.bin_dir,
            "localSettings": [p.to_dict() for p in self.local_settings],
            "serverSettings": [p.to_dict() for p in self.server_settings],
            "analyzersSettings": [a.to_dict() for a in self.analyzers_settings],
            "generatedAt": self.generated_at,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "MergedConfiguration":
        if not isinstance(d, Mapping):
            raise ValueError("Analysis config must be a JSON object at top level.")
        analyzers: List[AnalyzerSettings] = []
        for item in d.get("analyzersSettings") or []:
            if isinstance(item, Mapping):
                analyzers.append(AnalyzerSettings.from_dict(item))
        return cls(
            project_key=str(d.get("sonarProjectKey") or ""),
            project_name=d.get("sonarProjectName"),
            project_version=d.get("sonarProjectVersion"),
            config_dir=str(d.get("sonarConfigDir") or ""),
            output_dir=str(d.get("sonarOutputDir") or ""),
            bin_dir=d.get("sonarBinDir"),
            organization=d.get("organization"),
            local_settings=_props_from_list(d.get("localSettings")),
            server_settings=_props_from_list(d.get("serverSettings")),
            analyzers_settings=tuple(analyzers),
            generated_at=d.get("generatedAt"),
        )


def load_analysis_config(path: Union[str, Path]) -> MergedConfiguration:
    """Read a persisted analysis config back."""
    return MergedConfiguration.from_dict(read_json(Path(path)))
