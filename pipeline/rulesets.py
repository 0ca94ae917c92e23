"""pipeline.rulesets

Write rule-set files consumed by external analyzers.

One ``.ruleset`` XML document is written per (language, plugin) pair, named by
:func:`analysis_prep.io.layout.ruleset_filename`. The document is fully
determined by its inputs (no timestamps, stable attribute order), so writing
the same rules twice yields byte-identical files.

The destination directory must already exist; the orchestrator creates it. A
missing directory is fatal for this step and is not retried.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Sequence, Union

from analysis_prep.domain.profile import QualityProfile, RuleSetArtifact
from analysis_prep.errors import OutputDirectoryMissingError
from analysis_prep.io.fs import write_text_atomic
from analysis_prep.io.layout import ruleset_path

from pipeline.rules import partition_rules

logger = logging.getLogger(__name__)

TOOLS_VERSION = "14.0"
ACTIVE_ACTION = "Warning"
INACTIVE_ACTION = "None"


def render_ruleset(
    language: str,
    plugin: str,
    active_rule_keys: Sequence[str],
    inactive_rule_keys: Sequence[str] = (),
) -> str:
    """Render the rule-set XML document (pure)."""
    root = ET.Element(
        "RuleSet",
        {
            "Name": f"SonarQube - {language} - {plugin}",
            "Description": (
                f"Rule set generated from the quality profile for language '{language}' "
                f"and rule repository '{plugin}'."
            ),
            "ToolsVersion": TOOLS_VERSION,
        },
    )
    rules_elem = ET.SubElement(root, "Rules", {"AnalyzerId": plugin, "RuleNamespace": plugin})
    for key in active_rule_keys:
        ET.SubElement(rules_elem, "Rule", {"Id": key, "Action": ACTIVE_ACTION})
    for key in inactive_rule_keys:
        ET.SubElement(rules_elem, "Rule", {"Id": key, "Action": INACTIVE_ACTION})

    ET.indent(root, space="  ", level=0)
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="utf-8"?>\n' + body + "\n"


def materialize_ruleset(
    config_dir: Union[str, Path],
    language: str,
    plugin: str,
    active_rule_keys: Sequence[str],
    inactive_rule_keys: Sequence[str] = (),
) -> RuleSetArtifact:
    """Write the rule set for (language, plugin) and describe what was written."""
    dest_dir = Path(config_dir)
    if not dest_dir.is_dir():
        raise OutputDirectoryMissingError(f"Rule-set directory does not exist: {dest_dir}")

    path = ruleset_path(dest_dir, language, plugin)
    write_text_atomic(
        path,
        render_ruleset(language, plugin, active_rule_keys, inactive_rule_keys),
        create_parents=False,
    )
    logger.debug("Wrote rule set %s (%d active rule(s))", path, len(active_rule_keys))

    return RuleSetArtifact(
        language=language,
        plugin=plugin,
        rule_keys=tuple(active_rule_keys),
        path=str(path),
        inactive_rule_keys=tuple(inactive_rule_keys),
    )


def materialize_profile(
    config_dir: Union[str, Path],
    profile: QualityProfile,
    *,
    include_inactive_only: bool = False,
) -> List[RuleSetArtifact]:
    """Partition one language profile by plugin and write a rule set per plugin."""
    partitions = partition_rules(profile.rules, include_inactive_only=include_inactive_only)
    artifacts = [
        materialize_ruleset(config_dir, profile.language, part.plugin, part.active, part.inactive)
        for part in partitions.values()
    ]
    logger.info(
        "Language '%s': wrote %d rule set(s) from profile '%s'",
        profile.language,
        len(artifacts),
        profile.profile_id,
    )
    return artifacts
