"""analysis_prep.domain.profile

Quality profiles, rule bindings and the rule-set artifacts built from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RuleBinding:
    """One rule as bound to a quality profile.

    ``plugin`` is the originating rule repository (e.g. ``fxcop`` or
    ``csharpsquid``); rules are partitioned by it, not by language.
    """

    key: str
    plugin: str
    active: bool = True


@dataclass(frozen=True)
class QualityProfile:
    """The profile assigned to one language, with the rules fetched for it."""

    profile_id: str
    language: str
    organization: Optional[str] = None
    rules: Tuple[RuleBinding, ...] = ()

    @property
    def active_rules(self) -> Tuple[RuleBinding, ...]:
        return tuple(r for r in self.rules if r.active)

    @property
    def inactive_rules(self) -> Tuple[RuleBinding, ...]:
        return tuple(r for r in self.rules if not r.active)


@dataclass(frozen=True)
class RuleSetArtifact:
    """A rule-set file written for one (language, plugin) pair."""

    language: str
    plugin: str
    rule_keys: Tuple[str, ...]
    path: str
    inactive_rule_keys: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "plugin": self.plugin,
            "ruleSetFilePath": self.path,
            "activeRuleCount": len(self.rule_keys),
            "inactiveRuleCount": len(self.inactive_rule_keys),
        }
