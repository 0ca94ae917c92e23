"""pipeline.discovery

Find the project descriptors the build wrote into the output directory.

Each sub-project gets its own folder under ``<output_dir>`` containing a
``ProjectInfo.json``. The descriptor's ``filesToAnalyze`` entry points at a
plain text file listing one analyzable file per line.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from analysis_prep.domain.project import ProjectRecord
from analysis_prep.io.fs import read_json, read_lines
from analysis_prep.io.layout import PROJECT_INFO_FILENAME

logger = logging.getLogger(__name__)


def _read_files_list(descriptor_dir: Path, raw: Any) -> Optional[Tuple[str, ...]]:
    """Contents of the analyzable-file list; () if the list file is missing."""
    if not raw:
        return None
    if not isinstance(raw, str):
        logger.warning("Ignoring non-text filesToAnalyze entry in %s: %r", descriptor_dir, raw)
        return ()
    p = Path(raw)
    if not p.is_absolute():
        p = descriptor_dir / p
    if not p.is_file():
        logger.debug("Analyzable file list not found: %s", p)
        return ()
    return tuple(read_lines(p))


def load_project_descriptor(path: Union[str, Path]) -> Optional[ProjectRecord]:
    """Load one ``ProjectInfo.json``. Returns None if it is not a readable object."""
    p = Path(path)
    try:
        data = read_json(p)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable project descriptor %s: %s", p, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping project descriptor %s: expected a JSON object", p)
        return None

    files = _read_files_list(p.parent, data.get("filesToAnalyze"))
    return ProjectRecord.from_dict(data, analyzable_files=files)


def discover_project_descriptors(output_dir: Union[str, Path]) -> List[ProjectRecord]:
    """Load every ``<output_dir>/*/ProjectInfo.json``, ordered by folder name."""
    root = Path(output_dir)
    if not root.is_dir():
        return []

    records: List[ProjectRecord] = []
    for descriptor in sorted(root.glob(f"*/{PROJECT_INFO_FILENAME}")):
        record = load_project_descriptor(descriptor)
        if record is not None:
            records.append(record)

    logger.info("Discovered %d project descriptor(s) under %s", len(records), root)
    return records
