"""tools.sonar.rules

Pure parsing of quality-profile server payloads.

- `api.py` is responsible for HTTP calls.
- This module turns the JSON it gets back into plain values and
  :class:`~analysis_prep.domain.profile.RuleBinding` objects.

Everything here is side-effect free so it can be tested with literal payloads.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from analysis_prep.domain.profile import RuleBinding


def parse_settings_values(payload: Dict[str, Any]) -> Dict[str, str]:
    """Parse `/api/settings/values` into a flat key/value mapping.

    Settings come in three shapes:
      - {"key": "k", "value": "v"}
      - {"key": "k", "values": ["a", "b"]}          -> "a,b"
      - {"key": "k", "fieldValues": [{"f": "x"}]}   -> "k"="1", "k.1.f"="x"
    """
    out: Dict[str, str] = {}
    for setting in (payload or {}).get("settings") or []:
        if not isinstance(setting, dict):
            continue
        key = str(setting.get("key") or "").strip()
        if not key:
            continue

        if "value" in setting:
            out[key] = str(setting.get("value"))
        elif "values" in setting:
            out[key] = ",".join(str(v) for v in setting.get("values") or [])
        elif "fieldValues" in setting:
            field_sets = [fv for fv in setting.get("fieldValues") or [] if isinstance(fv, dict)]
            out[key] = ",".join(str(i) for i in range(1, len(field_sets) + 1))
            for i, fv in enumerate(field_sets, start=1):
                for field_key, field_value in fv.items():
                    out[f"{key}.{i}.{field_key}"] = str(field_value)
    return out


def parse_languages(payload: Dict[str, Any]) -> Set[str]:
    """Parse `/api/languages/list` into a set of language keys."""
    keys: Set[str] = set()
    for lang in (payload or {}).get("languages") or []:
        if isinstance(lang, dict) and lang.get("key"):
            keys.add(str(lang["key"]))
    return keys


def select_profile_key(payload: Dict[str, Any], language: str) -> Optional[str]:
    """Pick the profile for `language` out of `/api/qualityprofiles/search`.

    When several profiles match (shouldn't happen for a project-scoped search),
    the default profile wins, then the first listed.
    """
    matches = [
        p for p in (payload or {}).get("profiles") or []
        if isinstance(p, dict) and p.get("language") == language and p.get("key")
    ]
    if not matches:
        return None
    for p in matches:
        if p.get("isDefault"):
            return str(p["key"])
    return str(matches[0]["key"])


def split_rule_key(raw_key: str, repo: Optional[str] = None) -> tuple[str, str]:
    """Split "repo:rule" into (repo, rule). An explicit `repo` field wins."""
    if ":" in raw_key:
        prefix, rule = raw_key.split(":", 1)
    else:
        prefix, rule = "", raw_key
    return (repo or prefix), rule


def parse_rules_page(payload: Dict[str, Any], *, active: bool) -> List[RuleBinding]:
    """Parse one `/api/rules/search` page into rule bindings."""
    out: List[RuleBinding] = []
    for rule in (payload or {}).get("rules") or []:
        if not isinstance(rule, dict) or not rule.get("key"):
            continue
        plugin, key = split_rule_key(str(rule["key"]), rule.get("repo"))
        if not key or not plugin:
            continue
        out.append(RuleBinding(key=key, plugin=plugin, active=active))
    return out


def has_more_pages(payload: Dict[str, Any], *, page: int, page_size: int, got: int) -> bool:
    """Pagination check for `/api/rules/search`."""
    total = (payload or {}).get("total")
    if total is None:
        paging = (payload or {}).get("paging") or {}
        total = paging.get("total")
    if isinstance(total, int):
        return page * page_size < total
    return got >= page_size
