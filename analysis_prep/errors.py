"""analysis_prep.errors

Exception types raised by the pre-processor.

Only *fatal* conditions are modeled here. Zero-result outcomes (no quality
profile for a language, no valid projects, empty rule sets) are not errors and
never raise.
"""

from __future__ import annotations


class AnalysisPrepError(Exception):
    """Base class for fatal pre-processing failures."""


class ServerError(AnalysisPrepError):
    """The quality-profile server could not be reached or returned bad data."""


class TargetsInstallError(AnalysisPrepError):
    """Installing the build integration hooks failed."""


class OutputDirectoryMissingError(AnalysisPrepError, FileNotFoundError):
    """A destination directory that must already exist does not."""


class RuleSetNameError(AnalysisPrepError, ValueError):
    """A language or rule repository key cannot be turned into a file name."""
