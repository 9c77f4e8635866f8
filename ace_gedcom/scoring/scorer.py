"""
Convergence scoring of candidate common ancestors for one segment group.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ace_gedcom.ancestry import AncestryGraph
from ace_gedcom.person import Person
from ace_gedcom.triangulation import TriangulationMatch

from .config import AceConfig
from .factors import Contribution, compute_factors, explain, generation_estimate
from .model import ConfidenceLevel, MRCACandidate
from .resolver import NameResolver

logger = logging.getLogger(__name__)


class ConvergenceScorer:
    """
    Scores the ancestors shared by the matches of a segment group.

    For each group the scorer resolves match names to graph people, gathers the
    ancestors of the resolved people as candidates, scores each candidate with the
    convergence factors and ranks them.

    Attributes:
        graph (AncestryGraph): People and ancestor closures.
        config (AceConfig): Weights and thresholds.
        resolver (NameResolver): Match name resolution.
    """
    __slots__ = ['graph', 'config', 'resolver', '_resolved']

    def __init__(self, graph: AncestryGraph, config: Optional[AceConfig] = None) -> None:
        self.graph = graph
        self.config = config if config else AceConfig()
        self.resolver = NameResolver(graph, ratio=self.config.name_match_ratio)
        self._resolved: Dict[str, Optional[Person]] = {}

    def resolve_matches(self, group: Sequence[TriangulationMatch]) -> List[Contribution]:
        """
        Pair each match of the group with the person it names.

        Returns:
            List[Contribution]: One entry per match, in group order; person is None
                for unresolved names.
        """
        contributions = []
        for match in group:
            if match.match_name not in self._resolved:
                self._resolved[match.match_name] = self.resolver.resolve(match.match_name)
            contributions.append(Contribution(match, self._resolved[match.match_name]))
        return contributions

    def collect_candidates(self, contributions: Sequence[Contribution]) -> Dict[str, Tuple[Person, List[Contribution]]]:
        """
        Gather candidate ancestors with the contributions descending from each.

        A match counts once per candidate, even when the candidate appears more than
        once in the resolved person's ancestors.

        Returns:
            Dict[str, Tuple[Person, List[Contribution]]]: Candidates keyed by person ID
                in discovery order.
        """
        candidates: Dict[str, Tuple[Person, List[Contribution]]] = {}
        for contribution in contributions:
            if contribution.person is None:
                continue
            counted = set()
            for ancestor in self.graph.ancestors(contribution.person.xref_id):
                if ancestor.xref_id in counted:
                    continue
                counted.add(ancestor.xref_id)
                if ancestor.xref_id not in candidates:
                    candidates[ancestor.xref_id] = (ancestor, [])
                candidates[ancestor.xref_id][1].append(contribution)
        return candidates

    def score_candidate(self, candidate: Person, contributions: Sequence[Contribution], group_size: int) -> MRCACandidate:
        """
        Score one candidate ancestor.

        Args:
            candidate: The candidate ancestor.
            contributions: Group matches descending from the candidate.
            group_size: Number of matches in the whole group.
        """
        factors = compute_factors(candidate, contributions, group_size, self.config)
        score = max(0.0, min(100.0, factors.weighted_score(self.config.weights)))
        generations = generation_estimate(contributions, self.config)
        return MRCACandidate(
            person=candidate,
            convergence_factors=factors,
            score=score,
            explanations=tuple(explain(candidate, contributions, factors, generations, self.config)),
            generation_estimate=generations,
            matches=tuple(c.match for c in contributions),
        )

    def rank_candidates(self, group: Sequence[TriangulationMatch]) -> List[MRCACandidate]:
        """
        Score all candidates of a group and rank them.

        Candidates at or below the minimum score are dropped; the rest are sorted by
        descending score, keeping discovery order on ties.
        """
        contributions = self.resolve_matches(group)
        resolved = sum(1 for c in contributions if c.person is not None)
        candidates = self.collect_candidates(contributions)
        logger.debug(f"Group of {len(group)} matches: {resolved} resolved, {len(candidates)} candidate ancestors")

        scored = [
            self.score_candidate(person, candidate_contributions, len(group))
            for person, candidate_contributions in candidates.values()
        ]
        kept = [c for c in scored if c.score > self.config.min_candidate_score]
        return sorted(kept, key=lambda c: c.score, reverse=True)

    def confidence(self, candidates: Sequence[MRCACandidate]) -> ConfidenceLevel:
        """Confidence label from the leading candidate's score."""
        top_score = candidates[0].score if candidates else None
        return ConfidenceLevel.from_score(top_score, self.config.confidence_thresholds)

    def score_group(self, group: Sequence[TriangulationMatch]) -> Tuple[List[MRCACandidate], ConfidenceLevel]:
        """
        Suggest common ancestors for a segment group.

        Returns:
            Tuple[List[MRCACandidate], ConfidenceLevel]: The best candidates (at most
                config.max_candidates) and the group's confidence.
        """
        ranked = self.rank_candidates(group)[:self.config.max_candidates]
        return ranked, self.confidence(ranked)
