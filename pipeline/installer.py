"""pipeline.installer

Build-host integration hook installers.

The pre-processor calls ``install(logger, working_directory)`` exactly once,
before classification. Any failure is fatal for the run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Sequence, Union

from analysis_prep.errors import TargetsInstallError


class NoOpTargetsInstaller:
    """Used when the build host already carries the integration hooks."""

    def install(self, logger: logging.Logger, working_directory: Union[str, Path]) -> None:
        logger.debug("No integration hooks to install for %s", working_directory)


class FileTargetsInstaller:
    """Copy a hook file into each destination directory.

    Relative destinations are resolved against the working directory.
    Existing files are overwritten only when their content differs.
    """

    def __init__(self, source: Union[str, Path], destinations: Sequence[Union[str, Path]]) -> None:
        self.source = Path(source)
        self.destinations = [Path(d) for d in destinations]

    def install(self, logger: logging.Logger, working_directory: Union[str, Path]) -> None:
        if not self.source.is_file():
            raise TargetsInstallError(f"Integration hook file not found: {self.source}")

        work = Path(working_directory)
        payload = self.source.read_bytes()
        for dest_dir in self.destinations:
            target_dir = dest_dir if dest_dir.is_absolute() else work / dest_dir
            target = target_dir / self.source.name
            try:
                if target.is_file() and target.read_bytes() == payload:
                    logger.debug("Integration hook already up to date: %s", target)
                    continue
                target_dir.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(self.source, target)
            except OSError as e:
                raise TargetsInstallError(f"Failed to install {self.source.name} into {target_dir}: {e}") from e
            logger.info("Installed integration hook %s", target)
