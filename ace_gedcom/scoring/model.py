from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from ace_gedcom.person import Person
from ace_gedcom.triangulation import TriangulationMatch


class ConfidenceLevel(str, Enum):
    """Confidence that a segment group's leading candidate is the common ancestor."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @classmethod
    def from_score(cls, score: Optional[float], thresholds: Optional[Mapping[str, float]] = None) -> ConfidenceLevel:
        """
        Map the top candidate score of a group to a confidence level.

        Args:
            score: Top candidate score, or None when no candidate survived.
            thresholds: Lower bounds (exclusive) keyed by level value.
        """
        if score is None:
            return cls.LOW
        thresholds = thresholds or {"Very High": 80, "High": 60, "Medium": 40}
        for level in (cls.VERY_HIGH, cls.HIGH, cls.MEDIUM):
            if score > thresholds[level.value]:
                return level
        return cls.LOW

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConvergenceFactors:
    """
    The seven convergence factors of a candidate ancestor, each in [0, 100].
    """
    cm: float = 0.0
    triangulation_depth: float = 0.0
    gedcom_convergence: float = 0.0
    surname_match: float = 0.0
    haplogroup_consistency: float = 0.0
    lifespan_score: float = 0.0
    location_score: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        """Convert to a dictionary keyed by factor name (cM, triangulationDepth, ...)."""
        return {
            'cM': self.cm,
            'triangulationDepth': self.triangulation_depth,
            'gedcomConvergence': self.gedcom_convergence,
            'surnameMatch': self.surname_match,
            'haplogroupConsistency': self.haplogroup_consistency,
            'lifespanScore': self.lifespan_score,
            'locationScore': self.location_score,
        }

    def weighted_score(self, weights: Mapping[str, float]) -> float:
        """Weighted sum of the factors."""
        return sum(value * weights[key] for key, value in self.to_dict().items())


@dataclass(frozen=True)
class MRCACandidate:
    """
    A scored candidate for most recent common ancestor of a segment group.

    Attributes:
        person (Person): The candidate ancestor.
        convergence_factors (ConvergenceFactors): Individual factor scores.
        score (float): Weighted overall score in [0, 100].
        explanations (Tuple[str, ...]): Human readable reasons for the score.
        generation_estimate (int): Rough number of generations back.
        matches (Tuple[TriangulationMatch, ...]): Matches descending from the candidate.
    """
    person: Person
    convergence_factors: ConvergenceFactors
    score: float
    explanations: Tuple[str, ...] = ()
    generation_estimate: int = 0
    matches: Tuple[TriangulationMatch, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            'person': self.person.to_dict(),
            'score': self.score,
            'convergenceFactors': self.convergence_factors.to_dict(),
            'explanations': list(self.explanations),
            'generationEstimate': self.generation_estimate,
            'matches': [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True)
class ACEResult:
    """
    Result of the ancestral convergence analysis for one segment group.

    Attributes:
        segment (str): Span of the group, e.g. '12.0–45.5 Mb'.
        matches (Tuple[TriangulationMatch, ...]): The group's matches.
        suggested_mrca (Tuple[MRCACandidate, ...]): Best candidates, highest score first.
        confidence (ConfidenceLevel): Confidence in the leading candidate.
    """
    segment: str
    matches: Tuple[TriangulationMatch, ...]
    suggested_mrca: Tuple[MRCACandidate, ...]
    confidence: ConfidenceLevel

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            'segment': self.segment,
            'matches': [m.to_dict() for m in self.matches],
            'suggestedMRCA': [c.to_dict() for c in self.suggested_mrca],
            'confidence': self.confidence.value,
        }
