"""ace_gedcom package: Ancestral convergence analysis of GEDCOM trees and DNA triangulation data."""

from ace_gedcom.ancestry import AncestryGraph
from ace_gedcom.analysis import AnalysisOrchestrator
from ace_gedcom.app_hooks import AppHooks
from ace_gedcom.gedcom_parser import GedcomParser, ParseIssue
from ace_gedcom.person import Person
from ace_gedcom.scoring import (
    ACEResult,
    AceConfig,
    ConfidenceLevel,
    ConvergenceFactors,
    ConvergenceScorer,
    MRCACandidate,
)
from ace_gedcom.segments import group_matches, segments_overlap
from ace_gedcom.triangulation import EmptyTriangulationInput, TriangulationMatch, TriangulationParser

__all__ = [
    "ACEResult",
    "AceConfig",
    "AncestryGraph",
    "AnalysisOrchestrator",
    "AppHooks",
    "ConfidenceLevel",
    "ConvergenceFactors",
    "ConvergenceScorer",
    "EmptyTriangulationInput",
    "GedcomParser",
    "MRCACandidate",
    "ParseIssue",
    "Person",
    "TriangulationMatch",
    "TriangulationParser",
    "group_matches",
    "segments_overlap",
]
