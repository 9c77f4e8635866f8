"""
Tests for scoring.model module.
"""
from __future__ import annotations

import dataclasses

import pytest

from ace_gedcom.scoring.model import ACEResult, ConfidenceLevel, ConvergenceFactors, MRCACandidate


class TestConfidenceLevel:
    """Tests for ConfidenceLevel."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (85, ConfidenceLevel.VERY_HIGH),
            (80.5, ConfidenceLevel.VERY_HIGH),
            (80, ConfidenceLevel.HIGH),
            (65, ConfidenceLevel.HIGH),
            (45, ConfidenceLevel.MEDIUM),
            (40, ConfidenceLevel.LOW),
            (10, ConfidenceLevel.LOW),
            (None, ConfidenceLevel.LOW),
        ],
    )
    def test_from_score(self, score, expected):
        """Test score to confidence mapping with strict thresholds."""
        assert ConfidenceLevel.from_score(score) is expected

    def test_from_score_custom_thresholds(self):
        """Test mapping with configured thresholds."""
        thresholds = {"Very High": 95, "High": 90, "Medium": 85}
        assert ConfidenceLevel.from_score(92, thresholds) is ConfidenceLevel.HIGH

    def test_str(self):
        """Test that levels print as their labels."""
        assert str(ConfidenceLevel.VERY_HIGH) == "Very High"
        assert ConfidenceLevel.MEDIUM == "Medium"


class TestConvergenceFactors:
    """Tests for ConvergenceFactors."""

    def test_to_dict_keys(self):
        """Test the factor names used in output."""
        factors = ConvergenceFactors(cm=80, location_score=60)
        assert factors.to_dict() == {
            "cM": 80,
            "triangulationDepth": 0.0,
            "gedcomConvergence": 0.0,
            "surnameMatch": 0.0,
            "haplogroupConsistency": 0.0,
            "lifespanScore": 0.0,
            "locationScore": 60,
        }

    def test_weighted_score(self, config):
        """Test the weighted sum with the default weights."""
        factors = ConvergenceFactors(100, 100, 100, 100, 100, 100, 100)
        # The published weights total 1.05; the scorer clamps the result.
        assert factors.weighted_score(config.weights) == pytest.approx(105.0)
        factors = ConvergenceFactors(cm=50, gedcom_convergence=40)
        assert factors.weighted_score(config.weights) == pytest.approx(15.0 + 10.0)


class TestResultRecords:
    """Tests for MRCACandidate and ACEResult."""

    def test_candidate_is_immutable(self, make_person):
        """Test that candidates cannot be modified."""
        candidate = MRCACandidate(make_person("I1", "Thomas Hart"), ConvergenceFactors(), 50.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            candidate.score = 60.0

    def test_result_to_dict(self, make_person, make_match):
        """Test conversion of a full result."""
        match = make_match("Ruth Hart", 30.0)
        candidate = MRCACandidate(
            make_person("I1", "Thomas Hart"),
            ConvergenceFactors(cm=60),
            score=42.0,
            explanations=("Surname 'Hart' matches participants",),
            generation_estimate=4,
            matches=(match,),
        )
        result = ACEResult("0.0–10.0 Mb", (match,), (candidate,), ConfidenceLevel.MEDIUM)
        d = result.to_dict()
        assert d["segment"] == "0.0–10.0 Mb"
        assert d["confidence"] == "Medium"
        assert d["matches"][0]["matchName"] == "Ruth Hart"
        top = d["suggestedMRCA"][0]
        assert top["person"]["id"] == "I1"
        assert top["score"] == 42.0
        assert top["generationEstimate"] == 4
        assert top["explanations"] == ["Surname 'Hart' matches participants"]
        assert top["convergenceFactors"]["cM"] == 60
