"""analysis_prep.domain

Domain objects that form the *contract* between pre-processing steps.

Key idea
--------
Each step consumes the complete output of the previous one. Giving those
outputs explicit, immutable types keeps the steps independently testable:
classification produces an :class:`AnalysisResult`, profile resolution produces
:class:`QualityProfile` objects, materialization produces
:class:`RuleSetArtifact` objects and the merger produces one
:class:`MergedConfiguration`.
"""

from __future__ import annotations

from .config import (
    AnalyzerSettings,
    MergedConfiguration,
    Property,
    dedupe_properties,
    find_property,
    load_analysis_config,
)
from .ports import QualityProfileServer, TargetsInstaller
from .profile import QualityProfile, RuleBinding, RuleSetArtifact
from .project import ClassificationStatus, ProjectKind, ProjectRecord, parse_project_guid
from .result import AnalysisResult

__all__ = [
    "AnalysisResult",
    "AnalyzerSettings",
    "ClassificationStatus",
    "MergedConfiguration",
    "ProjectKind",
    "ProjectRecord",
    "Property",
    "QualityProfile",
    "QualityProfileServer",
    "RuleBinding",
    "RuleSetArtifact",
    "TargetsInstaller",
    "dedupe_properties",
    "find_property",
    "load_analysis_config",
    "parse_project_guid",
]
