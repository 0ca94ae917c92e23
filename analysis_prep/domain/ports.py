"""analysis_prep.domain.ports

Interfaces of the external collaborators the pre-processor drives.

These are structural (duck-typed) contracts. The HTTP implementation of the
server lives in :mod:`tools.sonar.api`; tests use small in-memory fakes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Set, Union

from .profile import RuleBinding


class QualityProfileServer(Protocol):
    """Remote quality-profile server."""

    def get_global_properties(self, project_key: Optional[str] = None) -> Dict[str, str]:
        ...

    def get_supported_languages(self) -> Set[str]:
        ...

    def get_assigned_profile(
        self,
        language: str,
        organization: Optional[str] = None,
        project_key: Optional[str] = None,
    ) -> Optional[str]:
        """Return the profile id assigned for ``language``, or None."""
        ...

    def get_active_rules(self, profile_id: str, organization: Optional[str] = None) -> List[RuleBinding]:
        ...

    def get_inactive_rules(
        self,
        profile_id: str,
        language: str,
        organization: Optional[str] = None,
    ) -> List[RuleBinding]:
        ...


class TargetsInstaller(Protocol):
    """Places the integration hooks into the host build system."""

    def install(self, logger: logging.Logger, working_directory: Union[str, Path]) -> None:
        ...
