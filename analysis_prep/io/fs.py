"""analysis_prep.io.fs

Atomic, stable filesystem writers.

Every artifact the pre-processor produces (rule sets, the analysis config, the
summary report) goes through these helpers so that:

* an interrupted run never leaves a half-written file behind
* the same input always produces byte-identical output (stable key order,
  explicit trailing newline)
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional


def _atomic_write_text(
    path: Path,
    write_fn,
    *,
    encoding: str = "utf-8",
    newline: Optional[str] = None,
    create_parents: bool = True,
) -> None:
    """Write a file atomically by writing to a temp file and os.replace().

    With ``create_parents=False`` a missing parent directory raises
    FileNotFoundError instead of being created.
    """

    p = Path(path)
    if create_parents:
        p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline=newline) as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # If os.replace fails, best-effort cleanup of the temp file.
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def write_text_atomic(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
    create_parents: bool = True,
) -> None:
    """Write text atomically, without newline translation."""

    def _write(f) -> None:
        f.write(text)

    _atomic_write_text(Path(path), _write, encoding=encoding, newline="", create_parents=create_parents)


def write_json_atomic(
    path: Path,
    data: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
    ensure_ascii: bool = False,
    encoding: str = "utf-8",
    create_parents: bool = True,
) -> None:
    """Write JSON atomically with stable formatting."""

    def _write(f) -> None:
        json.dump(data, f, indent=indent, sort_keys=sort_keys, ensure_ascii=ensure_ascii)
        f.write("\n")

    _atomic_write_text(Path(path), _write, encoding=encoding, newline="", create_parents=create_parents)


def read_json(path: Path, *, encoding: str = "utf-8") -> Any:
    """Read JSON from disk."""

    with Path(path).open("r", encoding=encoding) as f:
        return json.load(f)


def read_lines(path: Path, *, encoding: str = "utf-8") -> list[str]:
    """Read non-blank, stripped lines from a text file."""

    with Path(path).open("r", encoding=encoding, errors="replace") as f:
        return [ln.strip() for ln in f if ln.strip()]
