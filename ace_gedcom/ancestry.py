"""
ancestry.py - Ancestry graph with per-person ancestor closures.

This module defines the AncestryGraph class, which holds the people read from a
GEDCOM file and answers "who are this person's ancestors?" for convergence
scoring. It supports:
    - Lookup of people by GEDCOM cross-reference ID
    - Ancestor closures limited to a fixed number of generations
    - Pedigree collapse: an ancestor reached along several lineages is listed once
      per lineage
    - Cycle protection: a person is never listed as their own ancestor

People are stored in an arena (a list) and parent links are held as integer
indices into it, so closures never depend on object identity and can be memoized
per person.

Module: ace_gedcom.ancestry
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .person import Person

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_CAP = 10


class AncestryGraph:
    """
    Mapping of person ID to person plus ancestor closure.

    Attributes:
        generation_cap (int): Number of generations followed upwards from a person.
        issues (list): Recoverable problems reported while building the graph
            (see gedcom_parser.ParseIssue).
    """
    __slots__ = [
        'generation_cap',
        'issues',
        '_people',
        '_index',
        '_parent_indices',
        '_closures',
    ]

    def __init__(self, people: Iterable[Person], generation_cap: int = DEFAULT_GENERATION_CAP, issues: Optional[list] = None) -> None:
        """
        Initialize the graph.

        Args:
            people (Iterable[Person]): People in discovery order. A repeated xref ID
                keeps the first person.
            generation_cap (int): Number of generations in each ancestor closure.
            issues (Optional[list]): Parser issues to carry along with the graph.
        """
        self.generation_cap: int = generation_cap
        self.issues: list = list(issues) if issues else []
        self._people: List[Person] = []
        self._index: Dict[str, int] = {}
        for person in people:
            if person.xref_id in self._index:
                logger.warning(f"Ignoring repeated person ID '{person.xref_id}' in ancestry graph")
                continue
            self._index[person.xref_id] = len(self._people)
            self._people.append(person)

        self._parent_indices: List[Tuple[int, ...]] = [
            tuple(self._index[parent_id] for parent_id in person.parent_ids if parent_id in self._index)
            for person in self._people
        ]
        self._closures: Dict[int, Tuple[int, ...]] = {}

    def __len__(self) -> int:
        return len(self._people)

    def __contains__(self, person_id: str) -> bool:
        return person_id in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __getitem__(self, person_id: str) -> Person:
        return self._people[self._index[person_id]]

    def get(self, person_id: str) -> Optional[Person]:
        """Get a person by ID, or None if unknown."""
        index = self._index.get(person_id)
        return self._people[index] if index is not None else None

    @property
    def people(self) -> List[Person]:
        """All people in discovery order."""
        return list(self._people)

    def ancestors(self, person_id: str) -> List[Person]:
        """
        Get the ancestor closure of a person.

        The closure is depth first: each parent is followed directly by that
        parent's own ancestors, fathers before mothers as linked by the parser.

        Args:
            person_id (str): The xref ID of the starting person.

        Returns:
            List[Person]: Ancestors, possibly with repeats under pedigree collapse.
                Empty for an unknown person.
        """
        index = self._index.get(person_id)
        if index is None:
            return []
        return [self._people[i] for i in self._closure(index)]

    def ancestor_ids(self, person_id: str) -> List[str]:
        """Get the xref IDs of a person's ancestor closure."""
        return [person.xref_id for person in self.ancestors(person_id)]

    def _closure(self, start: int) -> Tuple[int, ...]:
        """
        Compute (or fetch) the ancestor closure for an arena index.

        Each stack entry carries the set of indices on its own branch, so a parent
        already on the path back to the start is skipped while the same ancestor
        on a different branch is still collected.
        """
        cached = self._closures.get(start)
        if cached is not None:
            return cached

        result: List[int] = []
        start_path = frozenset((start,))
        stack: List[Tuple[int, int, frozenset]] = []
        if self.generation_cap >= 1:
            stack = [(parent, 1, start_path) for parent in reversed(self._parent_indices[start])]

        while stack:
            current, generation, path = stack.pop()
            if current in path:
                logger.debug(f"Cycle in ancestry of '{self._people[start].xref_id}' at '{self._people[current].xref_id}'")
                continue
            result.append(current)
            if generation < self.generation_cap:
                branch_path = path | {current}
                for parent in reversed(self._parent_indices[current]):
                    stack.append((parent, generation + 1, branch_path))

        closure = tuple(result)
        self._closures[start] = closure
        return closure

    def to_dict(self) -> Dict[str, dict]:
        """
        Convert to a plain dictionary of person ID to {'person', 'ancestors'}.
        """
        return {
            person.xref_id: {
                'person': person.to_dict(),
                'ancestors': self.ancestor_ids(person.xref_id),
            }
            for person in self._people
        }
