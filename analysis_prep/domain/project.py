"""analysis_prep.domain.project

Canonical representation of one discovered sub-project.

A build produces one project descriptor per sub-project (``ProjectInfo.json``).
The pre-processor turns each descriptor into a :class:`ProjectRecord` and then
classifies it exactly once (see :mod:`pipeline.classification`).

Records are immutable and compared by *object identity*: two descriptors that
happen to carry the same GUID are still two distinct records, which is exactly
what duplicate detection needs to see.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class ProjectKind(Enum):
    PRODUCT = "Product"
    TEST = "Test"

    @classmethod
    def parse(cls, value: Any) -> "ProjectKind":
        """Parse a descriptor value; anything that is not "test" is a product."""
        if isinstance(value, ProjectKind):
            return value
        if str(value or "").strip().lower() == "test":
            return cls.TEST
        return cls.PRODUCT


class ClassificationStatus(Enum):
    """Outcome of validating one project for analysis eligibility.

    This is a closed set: every consumer that dispatches on it (the summary
    report, for one) must handle every member.
    """

    VALID = "Valid"
    DUPLICATE_IDENTITY = "DuplicateIdentity"
    INVALID_IDENTITY = "InvalidIdentity"
    NO_ANALYZABLE_FILES = "NoAnalyzableFiles"
    EXCLUDED_BY_FLAG = "ExcludedByFlag"


def _as_str_tuple(v: Any) -> Tuple[str, ...]:
    if v is None:
        return ()
    if isinstance(v, str):
        v = [v]
    elif not isinstance(v, (list, tuple)):
        return ()
    out = []
    for x in v:
        if x is None:
            continue
        s = str(x).strip()
        if s:
            out.append(s)
    return tuple(out)


def _as_optional_str(v: Any) -> Optional[str]:
    if isinstance(v, str) and v.strip():
        return v
    return None


def _as_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "yes", "y"}
    return bool(v)


def parse_project_guid(raw: Optional[str]) -> Optional[uuid.UUID]:
    """Parse a project identity.

    Returns None for missing, empty, unparseable and all-zero identities.
    """
    s = (raw or "").strip()
    if not s:
        return None
    try:
        guid = uuid.UUID(s)
    except (ValueError, TypeError):
        return None
    if guid.int == 0:
        return None
    return guid


@dataclass(frozen=True, eq=False)
class ProjectRecord:
    """One discovered sub-project.

    ``eq=False`` keeps the default identity-based ``__eq__``/``__hash__`` so
    records can be used as mapping keys even when their fields coincide.
    """

    guid: Optional[str]
    name: str
    project_path: str
    files_list_path: Optional[str] = None
    kind: ProjectKind = ProjectKind.PRODUCT
    analyzable_files: Tuple[str, ...] = ()
    is_excluded: bool = False
    languages: Tuple[str, ...] = ()

    @property
    def parsed_guid(self) -> Optional[uuid.UUID]:
        return parse_project_guid(self.guid)

    @property
    def full_path(self) -> str:
        """Path used when listing the project in reports."""
        return self.project_path or self.name

    @classmethod
    def from_dict(
        cls,
        d: Mapping[str, Any],
        *,
        analyzable_files: Optional[Tuple[str, ...]] = None,
    ) -> "ProjectRecord":
        """Build a record from a ``ProjectInfo.json`` payload.

        ``analyzable_files`` overrides the descriptor's inline ``files`` list;
        discovery passes the contents of the ``filesToAnalyze`` list file here.
        """
        if not isinstance(d, Mapping):
            raise ValueError(f"Project descriptor must be a mapping, got {type(d).__name__}")

        guid = d.get("projectGuid")
        files = analyzable_files if analyzable_files is not None else _as_str_tuple(d.get("files"))

        return cls(
            guid=str(guid) if guid is not None else None,
            name=str(d.get("projectName") or ""),
            project_path=str(d.get("projectPath") or ""),
            files_list_path=_as_optional_str(d.get("filesToAnalyze")),
            kind=ProjectKind.parse(d.get("projectType")),
            analyzable_files=tuple(files),
            is_excluded=_as_bool(d.get("isExcluded", False)),
            languages=_as_str_tuple(d.get("languages")),
        )

    def to_dict(self) -> dict:
        return {
            "projectGuid": self.guid,
            "projectName": self.name,
            "projectPath": self.project_path,
            "projectType": self.kind.value,
            "isExcluded": self.is_excluded,
            "languages": list(self.languages),
            "filesToAnalyze": self.files_list_path,
            "files": list(self.analyzable_files),
        }
