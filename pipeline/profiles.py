"""pipeline.profiles

Resolve the quality profile (and its rules) for each language in use.

Remote calls are bounded by the languages actually in use: a language is only
looked up when it is known to the pre-processor, supported by the server and
requested by at least one Valid project. Rules are only fetched for languages
that have an assigned profile.

A missing profile is a zero-result outcome (the language contributes no rule
sets), not an error. Server failures propagate as ServerError.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from analysis_prep.domain.ports import QualityProfileServer
from analysis_prep.domain.profile import QualityProfile
from analysis_prep.domain.project import ProjectRecord

logger = logging.getLogger(__name__)


def requested_languages(projects: Iterable[ProjectRecord], declared_languages: Sequence[str]) -> List[str]:
    """Declared languages requested by at least one of ``projects``.

    A project that declares no languages requests every declared language.
    Result keeps the order of ``declared_languages``.
    """
    declared = list(dict.fromkeys(declared_languages))
    wanted = set()
    for p in projects:
        if p.languages:
            wanted.update(p.languages)
        else:
            wanted.update(declared)
    return [lang for lang in declared if lang in wanted]


class QualityProfileResolver:
    def __init__(self, server: QualityProfileServer) -> None:
        if server is None:
            raise ValueError("server is required")
        self.server = server

    def resolve(
        self,
        valid_projects: Sequence[ProjectRecord],
        declared_languages: Sequence[str],
        organization: Optional[str] = None,
        *,
        project_key: Optional[str] = None,
    ) -> Dict[str, QualityProfile]:
        """Return ``{language: QualityProfile}`` for languages with a profile.

        Each returned profile carries both its active and its inactive rules.
        """
        if valid_projects is None or declared_languages is None:
            raise ValueError("valid_projects and declared_languages are required")

        supported = self.server.get_supported_languages()
        known = [lang for lang in dict.fromkeys(declared_languages) if lang in supported]
        unsupported = [lang for lang in dict.fromkeys(declared_languages) if lang not in supported]
        if unsupported:
            logger.debug("Languages not supported by the server: %s", ", ".join(unsupported))

        languages = requested_languages(valid_projects, known)
        if not languages:
            logger.info("No valid project requests a supported language; no profiles to resolve.")
            return {}

        resolved: Dict[str, QualityProfile] = {}
        for language in languages:
            profile_id = self.server.get_assigned_profile(language, organization, project_key)
            if not profile_id:
                logger.warning("No quality profile is assigned for language '%s'; skipping.", language)
                continue

            active = [
                replace(r, active=True)
                for r in self.server.get_active_rules(profile_id, organization=organization)
            ]
            inactive = [
                replace(r, active=False)
                for r in self.server.get_inactive_rules(profile_id, language, organization=organization)
            ]
            logger.info(
                "Quality profile '%s' for '%s': %d active, %d inactive rule(s)",
                profile_id,
                language,
                len(active),
                len(inactive),
            )
            resolved[language] = QualityProfile(
                profile_id=profile_id,
                language=language,
                organization=organization,
                rules=tuple(active) + tuple(inactive),
            )
        return resolved
