"""
Convergence factor functions.

Each factor is a pure function of a candidate ancestor, the matches that
descend from it (with the people they resolved to) and the scoring
configuration. Every factor is clamped to [0, 100].
"""
from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Sequence

from ace_gedcom.normalize import places_match
from ace_gedcom.person import Person
from ace_gedcom.triangulation import TriangulationMatch

from .config import AceConfig
from .model import ConvergenceFactors


class Contribution(NamedTuple):
    """A group match and the graph person it resolved to (None if unresolved)."""
    match: TriangulationMatch
    person: Optional[Person]


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def average_cm(contributions: Sequence[Contribution]) -> float:
    if not contributions:
        return 0.0
    return sum(c.match.size_cm for c in contributions) / len(contributions)


def cm_factor(contributions: Sequence[Contribution], config: AceConfig) -> float:
    """Average segment size scaled so that config.cm_full_score cM scores 100."""
    return clamp(min(average_cm(contributions) / config.cm_full_score, 1.0) * 100)


def triangulation_depth_factor(contributions: Sequence[Contribution], group_size: int) -> float:
    """Share of the group's matches that descend from the candidate."""
    if group_size <= 0:
        return 0.0
    return clamp(len(contributions) / group_size * 100)


def gedcom_convergence_factor(contributions: Sequence[Contribution], group_size: int) -> float:
    """Distinct contributing match names relative to the group size."""
    if group_size <= 0:
        return 0.0
    distinct_names = {c.match.match_name for c in contributions}
    return clamp(len(distinct_names) / group_size * 100)


def matching_surnames(candidate: Person, contributions: Sequence[Contribution]) -> List[str]:
    """Candidate surnames (as written) that appear among the matches' surnames."""
    match_surnames = {s.lower() for c in contributions for s in c.match.surnames}
    return [s for s in candidate.surnames if s.lower() in match_surnames]


def surname_match_factor(candidate: Person, contributions: Sequence[Contribution]) -> float:
    """Share of the candidate's surnames found among the contributing matches' surnames."""
    if not candidate.surnames:
        return 0.0
    overlap = len(matching_surnames(candidate, contributions))
    return clamp(min(overlap / len(candidate.surnames), 1.0) * 100)


def haplogroup_consistency_factor(contributions: Sequence[Contribution]) -> float:
    """100 when the non-empty Y-DNA and mtDNA haplogroups each agree, else 0."""
    y_haplogroups = {c.match.y_haplogroup for c in contributions if c.match.y_haplogroup}
    mt_haplogroups = {c.match.mtdna for c in contributions if c.match.mtdna}
    return 100.0 if len(y_haplogroups) <= 1 and len(mt_haplogroups) <= 1 else 0.0


def estimated_death_year(candidate: Person, config: AceConfig) -> Optional[int]:
    """Death year, else birth year plus the estimated lifespan, else None."""
    if candidate.death_year:
        return candidate.death_year
    if candidate.birth_year:
        return candidate.birth_year + config.estimated_lifespan_years
    return None


def lifespan_factor(candidate: Person, contributions: Sequence[Contribution], config: AceConfig) -> float:
    """
    Plausibility of the gap between the candidate's death and each descendant's birth.

    A gap within lifespan_gap_likely (one to two generations) scores highest, one
    within lifespan_gap_plausible scores less, anything else scores low.
    """
    death_year = estimated_death_year(candidate, config)
    if death_year is None:
        return config.neutral_score

    likely_low, likely_high = config.lifespan_gap_likely
    plausible_low, plausible_high = config.lifespan_gap_plausible
    scores = []
    for contribution in contributions:
        person = contribution.person
        if person is None or not person.birth_year:
            continue
        gap = person.birth_year - death_year
        if likely_low <= gap <= likely_high:
            scores.append(config.lifespan_likely_score)
        elif plausible_low <= gap <= plausible_high:
            scores.append(config.lifespan_plausible_score)
        else:
            scores.append(config.lifespan_unlikely_score)

    if not scores:
        return config.neutral_score
    return clamp(sum(scores) / len(scores))


def surname_places(match: TriangulationMatch) -> List[str]:
    """Place hints from multi-word surnames, e.g. 'Smith of Kilkenny' -> 'Kilkenny'."""
    return [surname.split()[-1] for surname in match.surnames if ' ' in surname.strip()]


def location_factor(candidate: Person, contributions: Sequence[Contribution], config: AceConfig) -> float:
    """
    Agreement between the candidate's places and each contributing match's places.
    """
    candidate_places = candidate.places
    if not candidate_places:
        return config.neutral_score

    scores = []
    for contribution in contributions:
        other_places = contribution.person.places if contribution.person else []
        other_places = other_places + surname_places(contribution.match)
        if not other_places:
            continue
        overlap = any(places_match(c, o) for c in candidate_places for o in other_places)
        scores.append(config.location_match_score if overlap else config.location_mismatch_score)

    if not scores:
        return config.neutral_score
    return clamp(sum(scores) / len(scores))


def generation_estimate(contributions: Sequence[Contribution], config: AceConfig) -> int:
    """Average cM divided by cM per generation, rounded half up."""
    return int(math.floor(average_cm(contributions) / config.cm_per_generation + 0.5))


def compute_factors(candidate: Person, contributions: Sequence[Contribution], group_size: int, config: AceConfig) -> ConvergenceFactors:
    """Compute all seven factors for a candidate."""
    return ConvergenceFactors(
        cm=cm_factor(contributions, config),
        triangulation_depth=triangulation_depth_factor(contributions, group_size),
        gedcom_convergence=gedcom_convergence_factor(contributions, group_size),
        surname_match=surname_match_factor(candidate, contributions),
        haplogroup_consistency=haplogroup_consistency_factor(contributions),
        lifespan_score=lifespan_factor(candidate, contributions, config),
        location_score=location_factor(candidate, contributions, config),
    )


def explain(candidate: Person, contributions: Sequence[Contribution], factors: ConvergenceFactors,
            generations: int, config: AceConfig) -> List[str]:
    """
    Build the explanation list for a candidate.

    One sentence per factor above its explanation threshold, in a fixed order.
    """
    values = factors.to_dict()

    def above(key: str) -> bool:
        threshold = config.explanation_threshold(key)
        return threshold is not None and values[key] > threshold

    explanations = []
    if above('gedcomConvergence'):
        explanations.append(f"Present in {len(contributions)} match lineage(s) in GEDCOM")
    if above('surnameMatch'):
        explanations.append(f"Surname '{', '.join(matching_surnames(candidate, contributions))}' matches participants")
    if above('cM'):
        explanations.append(f"Average segment size ~{average_cm(contributions):.1f} cM suggesting ~{generations} generations")
    if above('haplogroupConsistency'):
        explanations.append("Consistent haplogroup patterns across matches")
    if above('lifespanScore'):
        explanations.append("Lifespan aligns with expected generational timing")
    if above('locationScore'):
        explanations.append("Geographic locations align with match origins")
    return explanations
