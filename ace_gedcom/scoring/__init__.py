"""Convergence scoring: candidate common ancestors for DNA segment groups.

Components:
    - AceConfig: weights and thresholds, loaded from config.yaml
    - NameResolver: matches DNA match names to GEDCOM people
    - factors: the seven convergence factor functions
    - ConvergenceScorer: candidate collection, scoring and ranking per group

Example:
    >>> from ace_gedcom.scoring import ConvergenceScorer
    >>> scorer = ConvergenceScorer(graph)
    >>> candidates, confidence = scorer.score_group(group)
"""

from .config import AceConfig
from .model import ACEResult, ConfidenceLevel, ConvergenceFactors, MRCACandidate
from .resolver import NameResolver, names_match
from .factors import Contribution, compute_factors
from .scorer import ConvergenceScorer

__all__ = [
    'AceConfig',
    'ACEResult',
    'ConfidenceLevel',
    'Contribution',
    'ConvergenceFactors',
    'ConvergenceScorer',
    'MRCACandidate',
    'NameResolver',
    'compute_factors',
    'names_match',
]
