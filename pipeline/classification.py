"""pipeline.classification

Classify discovered projects for analysis eligibility.

Rules, applied in this order, exactly one status per record:

1. ``is_excluded`` set           -> ExcludedByFlag (wins over everything else)
2. identity shared with another non-excluded record -> DuplicateIdentity,
   for *every* record sharing it (no arbitrary survivor)
3. missing / empty / unparseable identity           -> InvalidIdentity
4. no analyzable files                               -> NoAnalyzableFiles
5. otherwise                                         -> Valid

Files listed by more than one Valid project are recorded as shared files.
Classification never raises for bad project data.
"""

from __future__ import annotations

import logging
import os
import uuid
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from analysis_prep.domain.project import ClassificationStatus, ProjectRecord
from analysis_prep.domain.result import AnalysisResult

logger = logging.getLogger(__name__)


def _status_for(
    record: ProjectRecord,
    guid: Optional[uuid.UUID],
    guid_counts: Counter,
) -> ClassificationStatus:
    if record.is_excluded:
        return ClassificationStatus.EXCLUDED_BY_FLAG
    if guid is not None and guid_counts[guid] > 1:
        return ClassificationStatus.DUPLICATE_IDENTITY
    if guid is None:
        return ClassificationStatus.INVALID_IDENTITY
    if not record.analyzable_files:
        return ClassificationStatus.NO_ANALYZABLE_FILES
    return ClassificationStatus.VALID


def _file_key(path: str) -> str:
    return os.path.normpath(path)


def find_shared_files(projects: Iterable[ProjectRecord]) -> List[str]:
    """Files referenced by more than one of ``projects``, first-seen order."""
    owners: Dict[str, int] = {}
    order: List[str] = []
    for p in projects:
        for f in dict.fromkeys(_file_key(x) for x in p.analyzable_files):
            if f not in owners:
                owners[f] = 0
                order.append(f)
            owners[f] += 1
    return [f for f in order if owners[f] > 1]


def classify_projects(candidates: Sequence[ProjectRecord]) -> AnalysisResult:
    """Classify every candidate and return a frozen :class:`AnalysisResult`.

    Records are keyed by identity, so a record object listed more than once is
    classified once.
    """
    if candidates is None:
        raise ValueError("candidates is required (pass an empty sequence for none).")

    listed = list(candidates)
    records = list(dict.fromkeys(listed))
    if len(records) != len(listed):
        logger.debug("Ignoring %d repeated project record(s)", len(listed) - len(records))
    guids = [r.parsed_guid for r in records]

    guid_counts: Counter = Counter(
        g for r, g in zip(records, guids) if g is not None and not r.is_excluded
    )

    result = AnalysisResult()
    for record, guid in zip(records, guids):
        status = _status_for(record, guid, guid_counts)
        if status is not ClassificationStatus.VALID:
            logger.debug("Project %s classified as %s", record.full_path, status.value)
        result.add(record, status)

    valid = result.projects_with_status(ClassificationStatus.VALID)
    for f in find_shared_files(valid):
        result.add_shared_file(f)

    result.freeze()

    counts = result.status_counts()
    logger.info(
        "Classified %d project(s): %s",
        len(records),
        ", ".join(f"{s.value}={n}" for s, n in counts.items() if n),
    )
    return result
