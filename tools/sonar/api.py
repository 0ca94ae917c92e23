"""tools/sonar/api.py

All quality-profile server HTTP calls live here.

Design goals:
  - Keep network I/O separated from parsing (see rules.py).
  - Fail loudly: any transport error, non-2xx status or undecodable body is a
    ServerError. Retry/timeout policy is a client setting, not pipeline logic.
  - 404 on a project-scoped profile search is *not* an error: the project is
    simply unknown to the server, so the server defaults apply.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

import requests

from analysis_prep.domain.profile import RuleBinding
from analysis_prep.errors import ServerError

from .rules import (
    has_more_pages,
    parse_languages,
    parse_rules_page,
    parse_settings_values,
    select_profile_key,
)
from .types import SonarConfig

logger = logging.getLogger(__name__)


def _auth_headers(cfg: SonarConfig) -> Dict[str, str]:
    if not cfg.token:
        return {}
    return {"Authorization": f"Bearer {cfg.token}"}


class SonarQubeServer:
    """HTTP implementation of the QualityProfileServer interface."""

    def __init__(self, cfg: SonarConfig, *, session: Optional[requests.Session] = None) -> None:
        self.cfg = cfg
        self._session = session or requests.Session()
        self._session.headers.update(_auth_headers(cfg))

    # -------------------------
    # HTTP plumbing
    # -------------------------

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None, *, allow_404: bool = False) -> Optional[Dict[str, Any]]:
        url = f"{self.cfg.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self._session.get(url, params=params, timeout=self.cfg.timeout)
        except requests.RequestException as e:
            raise ServerError(f"Request to {url} failed: {e}") from e

        if allow_404 and resp.status_code == 404:
            return None

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise ServerError(f"HTTP {resp.status_code} from {url}: {resp.text[:200]!r}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ServerError(f"Could not decode JSON from {url}") from e
        if not isinstance(data, dict):
            raise ServerError(f"Unexpected JSON payload from {url}: expected an object")
        return data

    def _org_params(self, organization: Optional[str]) -> Dict[str, Any]:
        org = organization or self.cfg.organization
        return {"organization": org} if org else {}

    # -------------------------
    # QualityProfileServer
    # -------------------------

    def get_global_properties(self, project_key: Optional[str] = None) -> Dict[str, str]:
        params: Dict[str, Any] = {}
        if project_key:
            params["component"] = project_key
        data = self._get("/api/settings/values", params, allow_404=bool(project_key))
        if data is None:
            # Unknown project: fall back to the global settings.
            data = self._get("/api/settings/values") or {}
        return parse_settings_values(data)

    def get_supported_languages(self) -> Set[str]:
        return parse_languages(self._get("/api/languages/list") or {})

    def get_assigned_profile(
        self,
        language: str,
        organization: Optional[str] = None,
        project_key: Optional[str] = None,
    ) -> Optional[str]:
        params = self._org_params(organization)
        data: Optional[Dict[str, Any]] = None
        if project_key:
            data = self._get("/api/qualityprofiles/search", {**params, "project": project_key}, allow_404=True)
        if data is None:
            data = self._get("/api/qualityprofiles/search", {**params, "defaults": "true"}) or {}
        return select_profile_key(data, language)

    def _search_rules(
        self,
        params: Dict[str, Any],
        *,
        active: bool,
        organization: Optional[str] = None,
    ) -> List[RuleBinding]:
        rules: List[RuleBinding] = []
        page = 1
        page_size = self.cfg.page_size
        while True:
            data = self._get(
                "/api/rules/search",
                {**self._org_params(organization), **params, "f": "repo,internalKey", "ps": page_size, "p": page},
            ) or {}
            batch = parse_rules_page(data, active=active)
            rules.extend(batch)
            got = len((data.get("rules") or []))
            if got == 0 or not has_more_pages(data, page=page, page_size=page_size, got=got):
                break
            page += 1
        return rules

    def get_active_rules(self, profile_id: str, organization: Optional[str] = None) -> List[RuleBinding]:
        return self._search_rules(
            {"qprofile": profile_id, "activation": "true"},
            active=True,
            organization=organization,
        )

    def get_inactive_rules(
        self,
        profile_id: str,
        language: str,
        organization: Optional[str] = None,
    ) -> List[RuleBinding]:
        return self._search_rules(
            {"qprofile": profile_id, "activation": "false", "languages": language},
            active=False,
            organization=organization,
        )
