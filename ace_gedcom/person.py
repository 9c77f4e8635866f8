"""
person.py - Person model for ancestral convergence analysis.

This module provides the Person class, the immutable record of one individual
read from a GEDCOM file. It supports:
    - Identity (GEDCOM cross-reference ID) and display name
    - Birth/death years and birth/death/marriage places
    - Surname tokens used for surname and name matching
    - Parent IDs filled in by the parser's family linking pass

Module: ace_gedcom.person
"""

__all__ = ['Person', 'extract_surnames']

from dataclasses import dataclass
from typing import List, Optional, Tuple


def extract_surnames(name: str) -> List[str]:
    """
    Extract surname tokens from a cleaned GEDCOM name.

    Tokens written fully in upper case (and longer than one character) are taken
    as surname components, e.g. "John SMITH JONES" -> ["SMITH", "JONES"]. If there
    are none, the last token of the name is used instead.

    Args:
        name (str): Name with GEDCOM slashes already removed.

    Returns:
        List[str]: Surname tokens, empty only for an empty name.
    """
    words = name.split()
    surnames = [word for word in words if word.isupper() and len(word) > 1]
    if not surnames and words:
        surnames.append(words[-1])
    return surnames


@dataclass(frozen=True)
class Person:
    """
    Represents a person in the GEDCOM file.

    Attributes:
        xref_id (str): GEDCOM cross-reference ID without the enclosing '@'.
        name (str): Full name with GEDCOM surname slashes removed.
        birth_year (Optional[int]): Year of birth.
        death_year (Optional[int]): Year of death.
        surnames (Tuple[str, ...]): Surname tokens.
        birth_place (Optional[str]): Place of birth.
        death_place (Optional[str]): Place of death.
        marriage_place (Optional[str]): Place of (first) marriage.
        parent_ids (Tuple[str, ...]): xref IDs of known parents.
    """
    xref_id: str
    name: str
    birth_year: Optional[int] = None
    death_year: Optional[int] = None
    surnames: Tuple[str, ...] = ()
    birth_place: Optional[str] = None
    death_place: Optional[str] = None
    marriage_place: Optional[str] = None
    parent_ids: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"Person(id={self.xref_id}, name={self.name})"

    @property
    def places(self) -> List[str]:
        """Birth, death and marriage places that are known, in that order."""
        return [place for place in (self.birth_place, self.death_place, self.marriage_place) if place]

    def to_dict(self) -> dict:
        """Convert to a plain dictionary."""
        return {
            'id': self.xref_id,
            'name': self.name,
            'birthYear': self.birth_year,
            'deathYear': self.death_year,
            'surnames': list(self.surnames),
            'birthPlace': self.birth_place,
            'deathPlace': self.death_place,
            'marriagePlace': self.marriage_place,
            'parentIds': list(self.parent_ids),
        }
