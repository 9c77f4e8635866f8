"""
Pytest fixtures for scoring tests.
"""
from __future__ import annotations

import pytest

from ace_gedcom.ancestry import AncestryGraph
from ace_gedcom.person import Person
from ace_gedcom.scoring.config import AceConfig
from ace_gedcom.scoring.factors import Contribution
from ace_gedcom.triangulation import TriangulationMatch


@pytest.fixture
def config() -> AceConfig:
    """Packaged default configuration."""
    return AceConfig()


@pytest.fixture
def make_person():
    """Factory for Person objects; surnames default to the last name token."""
    def _make_person(xref_id: str, name: str = "Test Person", **kwargs) -> Person:
        kwargs.setdefault("surnames", tuple(name.split()[-1:]))
        return Person(xref_id, name, **kwargs)
    return _make_person


@pytest.fixture
def make_match():
    """Factory for TriangulationMatch objects."""
    def _make_match(name: str = "Test Match", size_cm: float = 20.0, **kwargs) -> TriangulationMatch:
        return TriangulationMatch(match_name=name, size_cm=size_cm, **kwargs)
    return _make_match


@pytest.fixture
def contribution(make_match):
    """Factory for Contribution tuples."""
    def _contribution(person, name: str = "Test Match", size_cm: float = 20.0, **kwargs) -> Contribution:
        return Contribution(make_match(name, size_cm, **kwargs), person)
    return _contribution


@pytest.fixture
def family_graph(make_person) -> AncestryGraph:
    """
    Grandparents Thomas and Alice Hart with grandchildren Ruth Baker and Sam Cole.

    Thomas (b. 1840, d. 1900, Leeds) and Alice (b. 1845) are the parents of
    John (b. 1870) and Mary (b. 1872). Ruth (b. 1925, Leeds) is John's child
    and Sam (b. 1930, Bristol) is Mary's child.
    """
    people = [
        make_person("I1", "Thomas Hart", birth_year=1840, death_year=1900, birth_place="Leeds, Yorkshire"),
        make_person("I2", "Alice Hart", birth_year=1845),
        make_person("I3", "John Hart", birth_year=1870, parent_ids=("I1", "I2")),
        make_person("I4", "Mary Hart", birth_year=1872, parent_ids=("I1", "I2")),
        make_person("I5", "Ruth Baker", birth_year=1925, birth_place="Leeds", parent_ids=("I3",)),
        make_person("I6", "Sam Cole", birth_year=1930, birth_place="Bristol", parent_ids=("I4",)),
    ]
    return AncestryGraph(people)
