"""
Pytest fixtures for ace_gedcom tests.
"""
from __future__ import annotations

import pytest

from ace_gedcom.triangulation import TriangulationMatch

# George Miller has two sons, Paul and Peter; Dana Brown (Paul's child) and
# Erin Clark (Peter's child) are second cousins sharing George as ancestor.
COUSINS_GEDCOM = """0 HEAD
1 SOUR test
1 CHAR UTF-8
0 @I1@ INDI
1 NAME George /Miller/
1 SEX M
1 BIRT
2 DATE ABT 1820
2 PLAC Kilkenny, Ireland
1 DEAT
2 DATE 12 MAR 1880
2 PLAC Kilkenny, Ireland
0 @I2@ INDI
1 NAME Paul /Miller/
1 BIRT
2 DATE 1850
0 @I3@ INDI
1 NAME Peter /Miller/
1 BIRT
2 DATE 1852
0 @I4@ INDI
1 NAME Dana /Brown/
1 BIRT
2 DATE 1905
2 PLAC Kilkenny
0 @I5@ INDI
1 NAME Erin /Clark/
1 BIRT
2 DATE 1910
2 PLAC Boston, Massachusetts
0 @F1@ FAM
1 HUSB @I1@
1 CHIL @I2@
1 CHIL @I3@
0 @F2@ FAM
1 HUSB @I2@
1 CHIL @I4@
0 @F3@ FAM
1 HUSB @I3@
1 CHIL @I5@
0 TRLR
"""

OVERLAPPING_CSV = """Match Name,Source File,Start Position,End Position,Size (cM),SNPs,Y-Haplogroup,mtDNA,Surnames
Dana Brown,kit_a.csv,10,50,40,5000,,,Miller
Erin Clark,kit_a.csv,20,60,40,4800,,,"Miller; Clark"
"""


@pytest.fixture
def cousins_gedcom() -> str:
    """GEDCOM text for two cousins sharing a great-grandfather."""
    return COUSINS_GEDCOM


@pytest.fixture
def overlapping_csv() -> str:
    """Triangulation table with two overlapping 40 cM segments naming the cousins."""
    return OVERLAPPING_CSV


@pytest.fixture
def make_match():
    """Factory for TriangulationMatch objects."""
    def _make_match(name: str = "Test Match", start: float = 0.0, end: float = 10.0, size_cm: float = 20.0, **kwargs) -> TriangulationMatch:
        return TriangulationMatch(
            match_name=name,
            start_position=start,
            end_position=end,
            size_cm=size_cm,
            **kwargs
        )
    return _make_match
