"""pipeline.report

Human-readable summary of which projects were found and how they were
classified. It is written for people debugging a build, nothing reads it back.

Sections
--------
Product projects / Test projects   -> Valid projects, split by kind
Invalid projects                   -> DuplicateIdentity + InvalidIdentity
Skipped projects                   -> NoAnalyzableFiles
Excluded projects                  -> ExcludedByFlag
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Union

from analysis_prep.domain.project import ClassificationStatus, ProjectKind, ProjectRecord
from analysis_prep.domain.result import AnalysisResult
from analysis_prep.io.fs import write_text_atomic
from analysis_prep.io.layout import SUMMARY_REPORT_FILENAME

logger = logging.getLogger(__name__)

TITLE_UNDERLINE = "---------------------------------------"
NO_PROJECTS = "No projects of this type"

INVALID_SECTION = "Invalid projects"
SKIPPED_SECTION = "Skipped projects"
EXCLUDED_SECTION = "Excluded projects"

# Every non-Valid status maps to exactly one section. Valid projects are split
# by kind instead.
STATUS_SECTIONS: Mapping[ClassificationStatus, str] = {
    ClassificationStatus.VALID: "",
    ClassificationStatus.DUPLICATE_IDENTITY: INVALID_SECTION,
    ClassificationStatus.INVALID_IDENTITY: INVALID_SECTION,
    ClassificationStatus.NO_ANALYZABLE_FILES: SKIPPED_SECTION,
    ClassificationStatus.EXCLUDED_BY_FLAG: EXCLUDED_SECTION,
}

_missing = set(ClassificationStatus) - set(STATUS_SECTIONS)
if _missing:
    raise RuntimeError(f"Report sections missing for statuses: {sorted(s.value for s in _missing)}")

KIND_SECTIONS: Mapping[ProjectKind, str] = {
    ProjectKind.PRODUCT: "Product projects",
    ProjectKind.TEST: "Test projects",
}

SECTION_ORDER = (
    KIND_SECTIONS[ProjectKind.PRODUCT],
    KIND_SECTIONS[ProjectKind.TEST],
    INVALID_SECTION,
    SKIPPED_SECTION,
    EXCLUDED_SECTION,
)


def group_projects(result: AnalysisResult) -> Dict[str, List[ProjectRecord]]:
    """Group projects into report sections, in classification order per status."""
    groups: Dict[str, List[ProjectRecord]] = {title: [] for title in SECTION_ORDER}

    for project in result.projects_with_status(ClassificationStatus.VALID):
        groups[KIND_SECTIONS[project.kind]].append(project)

    # Status order within a section follows the enum declaration order.
    for status in ClassificationStatus:
        if status is ClassificationStatus.VALID:
            continue
        groups[STATUS_SECTIONS[status]].extend(result.projects_with_status(status))
    return groups


def build_summary_report(result: AnalysisResult) -> str:
    lines: List[str] = []
    groups = group_projects(result)
    for title in SECTION_ORDER:
        lines.append(title)
        lines.append(TITLE_UNDERLINE)
        projects = groups[title]
        if projects:
            lines.extend(p.full_path for p in projects)
        else:
            lines.append(NO_PROJECTS)
        lines.append("")
        lines.append("")
    return "\n".join(lines) + "\n"


def write_summary_report(result: AnalysisResult, output_dir: Union[str, Path]) -> Path:
    """Write ``ProjectInfo.log`` into ``output_dir`` and return its path."""
    if result is None:
        raise ValueError("result is required")
    path = Path(output_dir) / SUMMARY_REPORT_FILENAME
    logger.debug("Writing project summary report to %s", path)
    write_text_atomic(path, build_summary_report(result))
    return path
