"""analysis_prep.io

Filesystem contracts and IO helpers.

Design principle
----------------
The pre-processor's output layout is a public contract: the build integration
hooks and the post-processor both read from it. Keeping the "where do files go"
rules in one module means they can evolve in one place.
"""

from __future__ import annotations

from .fs import read_json, read_lines, write_json_atomic, write_text_atomic
from .layout import (
    ANALYSIS_CONFIG_FILENAME,
    PROJECT_INFO_FILENAME,
    SUMMARY_REPORT_FILENAME,
    PrepPaths,
    build_prep_paths,
    ensure_prep_dirs,
    ruleset_filename,
    ruleset_path,
)

__all__ = [
    "ANALYSIS_CONFIG_FILENAME",
    "PROJECT_INFO_FILENAME",
    "SUMMARY_REPORT_FILENAME",
    "PrepPaths",
    "build_prep_paths",
    "ensure_prep_dirs",
    "read_json",
    "read_lines",
    "ruleset_filename",
    "ruleset_path",
    "write_json_atomic",
    "write_text_atomic",
]
