"""
segments.py - Grouping of DNA matches by overlapping segments.

Matches are grouped around a seed: the first unassigned match starts a group and
every later unassigned match whose segment overlaps the seed's segment joins it.
Two matches that only overlap through a third match are not necessarily put in
the same group.

Module: ace_gedcom.segments
"""

import logging
from typing import List, Sequence

from .triangulation import TriangulationMatch

logger = logging.getLogger(__name__)

DEFAULT_SEGMENT_UNIT = 'Mb'


def segments_overlap(match1: TriangulationMatch, match2: TriangulationMatch) -> bool:
    """Check whether two closed segment intervals overlap (touching ends count)."""
    return not (match1.end_position < match2.start_position or match2.end_position < match1.start_position)


def group_matches(matches: Sequence[TriangulationMatch]) -> List[List[TriangulationMatch]]:
    """
    Partition matches into seed-based overlap groups.

    Args:
        matches (Sequence[TriangulationMatch]): Matches in input order.

    Returns:
        List[List[TriangulationMatch]]: Non-empty groups in discovery order; every
            match is in exactly one group.
    """
    groups: List[List[TriangulationMatch]] = []
    used = [False] * len(matches)

    for index, seed in enumerate(matches):
        if used[index]:
            continue
        used[index] = True
        group = [seed]
        for other_index in range(index + 1, len(matches)):
            if not used[other_index] and segments_overlap(seed, matches[other_index]):
                group.append(matches[other_index])
                used[other_index] = True
        groups.append(group)

    logger.info(f"Grouped {len(matches)} matches into {len(groups)} segment groups")
    return groups


def segment_label(group: Sequence[TriangulationMatch], unit: str = DEFAULT_SEGMENT_UNIT) -> str:
    """
    Describe the span of a group, e.g. '12.0–45.5 Mb'.

    Args:
        group (Sequence[TriangulationMatch]): A non-empty match group.
        unit (str): Unit suffix for positions.
    """
    start = min(m.start_position for m in group)
    end = max(m.end_position for m in group)
    return f"{start:.1f}–{end:.1f} {unit}"
