"""
Resolution of DNA match names to people in the ancestry graph.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from rapidfuzz import fuzz, process

from ace_gedcom.ancestry import AncestryGraph
from ace_gedcom.normalize import canonical_name
from ace_gedcom.person import Person

logger = logging.getLogger(__name__)


def names_match(name1: str, name2: str, ratio: float = 0.5) -> bool:
    """
    Check whether two canonical names refer to the same person.

    The smaller of the two token sets must have at least `ratio` of its tokens
    in the other set. Empty names never match.

    Args:
        name1: Canonical name (see normalize.canonical_name).
        name2: Canonical name.
        ratio: Required share of shared tokens.
    """
    tokens1 = set(name1.split())
    tokens2 = set(name2.split())
    if not tokens1 or not tokens2:
        return False
    smaller, larger = (tokens1, tokens2) if len(tokens1) <= len(tokens2) else (tokens2, tokens1)
    common = len(smaller & larger)
    return common >= len(smaller) * ratio


class NameResolver:
    """
    Finds the graph person a DNA match name refers to.

    Canonical names of all graph people are computed once. The first person in
    graph order whose name matches wins; there is no further disambiguation.

    Attributes:
        ratio (float): Share of shared tokens required for a match.
    """
    __slots__ = ['ratio', '_entries']

    def __init__(self, graph: AncestryGraph, ratio: float = 0.5) -> None:
        self.ratio = ratio
        self._entries: List[Tuple[str, Person]] = [
            (canonical_name(person.name), person) for person in graph.people
        ]

    def resolve(self, match_name: str) -> Optional[Person]:
        """
        Resolve a match name.

        Args:
            match_name: Name as written in the triangulation table.

        Returns:
            Optional[Person]: The first matching person, or None.
        """
        canonical = canonical_name(match_name)
        for person_canonical, person in self._entries:
            if names_match(canonical, person_canonical, self.ratio):
                return person
        closest = self.closest(match_name)
        if closest:
            logger.info(f"Match '{match_name}' not found in GEDCOM (closest: '{closest[0].name}', similarity {closest[1]:.0f})")
        else:
            logger.info(f"Match '{match_name}' not found in GEDCOM")
        return None

    def closest(self, match_name: str) -> Optional[Tuple[Person, float]]:
        """
        Find the most similar graph person for diagnostics.

        Returns:
            Optional[Tuple[Person, float]]: Person and token-set similarity (0-100),
                or None if the graph is empty.
        """
        canonical = canonical_name(match_name)
        if not canonical or not self._entries:
            return None
        choices = [person_canonical for person_canonical, _ in self._entries]
        best = process.extractOne(canonical, choices, scorer=fuzz.token_set_ratio)
        if best is None:
            return None
        _, similarity, index = best
        return self._entries[index][1], similarity
