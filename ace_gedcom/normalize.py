"""
normalize.py - Name and place normalization for matching.

Names and places from GEDCOM files and DNA match tables are compared after
normalization: transliterated to ASCII, lower-cased, stripped of everything but
letters and spaces, and whitespace-collapsed.

Module: ace_gedcom.normalize
"""

import re
from typing import List

from unidecode import unidecode

NON_LETTER_RE = re.compile(r"[^a-z\s]")
SPACE_RE = re.compile(r"\s+")

# Candidate place tokens shorter than this are ignored when comparing places
MIN_PLACE_TOKEN_LENGTH = 4


def canonical_name(text: str) -> str:
    """
    Normalize a name or place string.

    Args:
        text (str): Raw text, e.g. "Ólafur O'Brien" or "St. Mary's, Cork".

    Returns:
        str: Canonical form, e.g. "olafur obrien" or "st marys cork".
    """
    if not text:
        return ""
    text = unidecode(text).lower()
    text = NON_LETTER_RE.sub("", text)
    return SPACE_RE.sub(" ", text).strip()


def name_tokens(name: str) -> List[str]:
    """Return the tokens of the canonical form of a name."""
    return canonical_name(name).split()


def place_tokens(place: str) -> List[str]:
    """Return the significant tokens of a canonical place."""
    return [token for token in canonical_name(place).split() if len(token) >= MIN_PLACE_TOKEN_LENGTH]


def places_match(place1: str, place2: str) -> bool:
    """
    Check whether a candidate place shares a token with another place.

    Only the tokens of place1 must be significant (see place_tokens); every
    token of place2 is compared. Two tokens match when either one is a
    substring of the other, so "york" matches "yorkshire" and "ryegate"
    matches "rye".
    """
    tokens2 = canonical_name(place2).split()
    return any(
        token2 in token1 or token1 in token2
        for token1 in place_tokens(place1)
        for token2 in tokens2
    )
