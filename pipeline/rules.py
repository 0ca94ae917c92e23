"""pipeline.rules

Split one language's rules into per-plugin subsets.

A single language profile can bind rules from several originating plugins
(e.g. ``fxcop`` and ``csharpsquid`` for C#). Each external analyzer must only
see its own rules, so the partition key is the rule's plugin, not the language.

A plugin with no active rules is dropped unless ``include_inactive_only`` is
set, in which case it is kept when it has at least one inactive rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from analysis_prep.domain.profile import RuleBinding


@dataclass(frozen=True)
class RulePartition:
    plugin: str
    active: Tuple[str, ...] = ()
    inactive: Tuple[str, ...] = ()


def _dedupe_preserve_order(items: List[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def partition_rules(
    rules: Iterable[RuleBinding],
    *,
    include_inactive_only: bool = False,
) -> Dict[str, RulePartition]:
    """Return ``{plugin: RulePartition}`` in first-seen plugin order.

    A key that is both active and inactive for the same plugin is reported as
    active only.
    """
    if rules is None:
        raise ValueError("rules is required")

    active: Dict[str, List[str]] = {}
    inactive: Dict[str, List[str]] = {}
    order: List[str] = []

    for rule in rules:
        plugin = rule.plugin or ""
        if plugin not in active:
            active[plugin] = []
            inactive[plugin] = []
            order.append(plugin)
        (active if rule.active else inactive)[plugin].append(rule.key)

    out: Dict[str, RulePartition] = {}
    for plugin in order:
        act = _dedupe_preserve_order(active[plugin])
        act_keys = set(act)
        inact = tuple(k for k in _dedupe_preserve_order(inactive[plugin]) if k not in act_keys)
        if not act and not (include_inactive_only and inact):
            continue
        out[plugin] = RulePartition(plugin=plugin, active=act, inactive=inact)
    return out
