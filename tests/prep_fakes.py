"""In-memory collaborators shared by the pre-processing tests."""

from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from analysis_prep.domain.profile import RuleBinding
from analysis_prep.domain.project import ProjectKind, ProjectRecord
from analysis_prep.errors import ServerError


GUID_A = "11111111-1111-1111-1111-111111111111"
GUID_B = "22222222-2222-2222-2222-222222222222"
GUID_C = "33333333-3333-3333-3333-333333333333"


def make_project(
    name: str,
    guid: Optional[str],
    *,
    files: Sequence[str] = ("Program.cs",),
    kind: ProjectKind = ProjectKind.PRODUCT,
    excluded: bool = False,
    languages: Sequence[str] = (),
) -> ProjectRecord:
    return ProjectRecord(
        guid=guid,
        name=name,
        project_path=f"/src/{name}/{name}.csproj",
        kind=kind,
        analyzable_files=tuple(files),
        is_excluded=excluded,
        languages=tuple(languages),
    )


class FakeQualityProfileServer:
    """Records every call; answers from plain dictionaries.

    ``profiles`` maps ``(language, organization)`` to a profile id; a lookup
    falls back to ``(language, None)``.
    """

    def __init__(
        self,
        *,
        properties: Optional[Dict[str, str]] = None,
        languages: Optional[Set[str]] = None,
        profiles: Optional[Dict[Tuple[str, Optional[str]], str]] = None,
        active: Optional[Dict[str, List[RuleBinding]]] = None,
        inactive: Optional[Dict[str, List[RuleBinding]]] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.properties = dict(properties or {})
        self.languages = set(languages if languages is not None else {"cs", "vbnet"})
        self.profiles = dict(profiles or {})
        self.active = dict(active or {})
        self.inactive = dict(inactive or {})
        self.fail_on = fail_on
        self.calls: Counter = Counter()
        self.profile_requests: List[Tuple[str, Optional[str], Optional[str]]] = []
        self.rule_requests: List[Tuple[str, Optional[str]]] = []

    def _enter(self, name: str) -> None:
        self.calls[name] += 1
        if self.fail_on == name:
            raise ServerError(f"{name}: connection refused")

    def get_global_properties(self, project_key: Optional[str] = None) -> Dict[str, str]:
        self._enter("get_global_properties")
        return dict(self.properties)

    def get_supported_languages(self) -> Set[str]:
        self._enter("get_supported_languages")
        return set(self.languages)

    def get_assigned_profile(
        self,
        language: str,
        organization: Optional[str] = None,
        project_key: Optional[str] = None,
    ) -> Optional[str]:
        self._enter("get_assigned_profile")
        self.profile_requests.append((language, organization, project_key))
        if (language, organization) in self.profiles:
            return self.profiles[(language, organization)]
        return self.profiles.get((language, None))

    def get_active_rules(self, profile_id: str, organization: Optional[str] = None) -> List[RuleBinding]:
        self._enter("get_active_rules")
        self.rule_requests.append((profile_id, organization))
        return list(self.active.get(profile_id, []))

    def get_inactive_rules(
        self,
        profile_id: str,
        language: str,
        organization: Optional[str] = None,
    ) -> List[RuleBinding]:
        self._enter("get_inactive_rules")
        self.rule_requests.append((profile_id, organization))
        return list(self.inactive.get(profile_id, []))

    @property
    def rule_fetches(self) -> int:
        return self.calls["get_active_rules"] + self.calls["get_inactive_rules"]


def two_language_server(**kwargs) -> FakeQualityProfileServer:
    """cs and vbnet profiles with one fxcop rule each plus a non-fxcop rule."""
    return FakeQualityProfileServer(
        properties={"server.key": "server value 1", "sonar.exclusions": "**/bin/**"},
        profiles={("cs", None): "qp-cs", ("vbnet", None): "qp-vb"},
        active={
            "qp-cs": [RuleBinding("CA1000", "fxcop"), RuleBinding("S100", "csharpsquid")],
            "qp-vb": [RuleBinding("CA2000", "fxcop")],
        },
        inactive={
            "qp-cs": [RuleBinding("CA1001", "fxcop", active=False)],
        },
        **kwargs,
    )


class RecordingInstaller:
    def __init__(self, *, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[Path] = []

    def install(self, logger, working_directory) -> None:
        self.calls.append(Path(working_directory))
        if self.error is not None:
            raise self.error
