import pytest
from ace_gedcom import AceConfig, AnalysisOrchestrator, ConfidenceLevel, EmptyTriangulationInput

SEPARATE_SEGMENTS_CSV = """Match Name,Start Position,End Position,Size (cM),Surnames
Dana Brown,0,10,40,Miller
Erin Clark,50,60,40,Miller; Clark
"""

UNKNOWN_MATCHES_CSV = """Match Name,Start Position,End Position,Size (cM)
Zed Quigley,0,10,40
Yolanda Xavier,5,15,30
"""


class RecordingHooks:
    """Collects report_step calls."""

    def __init__(self):
        self.steps = []

    def report_step(self, info="", target=None, reset_counter=False, plus_step=1):
        self.steps.append((info, target, reset_counter, plus_step))


def names(candidates):
    return [c.person.name for c in candidates]


class TestAnalysisOrchestrator:
    """End-to-end analysis runs on the cousins tree."""

    def test_overlapping_cousins(self, cousins_gedcom, overlapping_csv):
        results = AnalysisOrchestrator().analyze(cousins_gedcom, overlapping_csv)
        assert len(results) == 1
        result = results[0]
        assert result.segment == "10.0–60.0 Mb"
        assert [m.match_name for m in result.matches] == ["Dana Brown", "Erin Clark"]
        assert names(result.suggested_mrca) == ["George Miller", "Paul Miller", "Peter Miller"]
        assert result.confidence is ConfidenceLevel.VERY_HIGH

        george = result.suggested_mrca[0]
        assert george.score == pytest.approx(93.0)
        assert george.generation_estimate == 6
        factors = george.convergence_factors
        assert factors.cm == pytest.approx(80.0)
        assert factors.triangulation_depth == pytest.approx(100.0)
        assert factors.gedcom_convergence == pytest.approx(100.0)
        assert factors.surname_match == pytest.approx(100.0)
        assert factors.haplogroup_consistency == pytest.approx(100.0)
        assert factors.lifespan_score == pytest.approx(100.0)
        assert factors.location_score == pytest.approx(60.0)
        assert list(george.explanations) == [
            "Present in 2 match lineage(s) in GEDCOM",
            "Surname 'Miller' matches participants",
            "Average segment size ~40.0 cM suggesting ~6 generations",
            "Consistent haplogroup patterns across matches",
            "Lifespan aligns with expected generational timing",
        ]
        assert [m.match_name for m in george.matches] == ["Dana Brown", "Erin Clark"]

        paul, peter = result.suggested_mrca[1:]
        assert paul.score == pytest.approx(62.0)
        assert peter.score == pytest.approx(62.0)
        assert [m.match_name for m in paul.matches] == ["Dana Brown"]

    def test_unknown_match_names(self, cousins_gedcom):
        results = AnalysisOrchestrator().analyze(cousins_gedcom, UNKNOWN_MATCHES_CSV)
        assert len(results) == 1
        assert results[0].suggested_mrca == ()
        assert results[0].confidence is ConfidenceLevel.LOW

    def test_separate_segments(self, cousins_gedcom):
        results = AnalysisOrchestrator().analyze(cousins_gedcom, SEPARATE_SEGMENTS_CSV)
        assert [r.segment for r in results] == ["0.0–10.0 Mb", "50.0–60.0 Mb"]

        first, second = results
        assert names(first.suggested_mrca) == ["George Miller", "Paul Miller"]
        assert first.suggested_mrca[0].score == pytest.approx(99.0)
        assert first.suggested_mrca[1].score == pytest.approx(79.5)

        assert names(second.suggested_mrca) == ["George Miller", "Peter Miller"]
        assert second.suggested_mrca[0].score == pytest.approx(87.0)
        assert second.confidence is ConfidenceLevel.VERY_HIGH

    def test_empty_triangulation_is_fatal(self, cousins_gedcom):
        with pytest.raises(EmptyTriangulationInput):
            AnalysisOrchestrator().analyze(cousins_gedcom, "Match Name,Size (cM)\n")

    def test_non_finite_segment_size_is_skipped(self, cousins_gedcom):
        csv_text = "Match Name,Start Position,End Position,Size (cM)\nDana Brown,0,10,1e999\nErin Clark,5,15,40\n"
        results = AnalysisOrchestrator().analyze(cousins_gedcom, csv_text)
        assert len(results) == 1
        assert [m.match_name for m in results[0].matches] == ["Erin Clark"]
        assert results[0].suggested_mrca[0].generation_estimate == 6

    def test_empty_gedcom_gives_no_candidates(self, overlapping_csv):
        results = AnalysisOrchestrator().analyze("", overlapping_csv)
        assert len(results) == 1
        assert results[0].suggested_mrca == ()
        assert results[0].confidence is ConfidenceLevel.LOW

    def test_analysis_is_deterministic(self, cousins_gedcom, overlapping_csv):
        orchestrator = AnalysisOrchestrator()
        first = [r.to_dict() for r in orchestrator.analyze(cousins_gedcom, overlapping_csv)]
        second = [r.to_dict() for r in orchestrator.analyze(cousins_gedcom, overlapping_csv)]
        assert first == second

    def test_generation_cap_from_config(self, cousins_gedcom, overlapping_csv):
        config = AceConfig.from_dict({"generation_cap": 1})
        results = AnalysisOrchestrator(config=config).analyze(cousins_gedcom, overlapping_csv)
        # George is two generations above the cousins and drops out.
        assert names(results[0].suggested_mrca) == ["Paul Miller", "Peter Miller"]

    def test_max_candidates_from_config(self, cousins_gedcom, overlapping_csv):
        config = AceConfig.from_dict({"max_candidates": 1})
        results = AnalysisOrchestrator(config=config).analyze(cousins_gedcom, overlapping_csv)
        assert names(results[0].suggested_mrca) == ["George Miller"]

    def test_app_hooks_receive_progress(self, cousins_gedcom, overlapping_csv):
        hooks = RecordingHooks()
        AnalysisOrchestrator(app_hooks=hooks).analyze(cousins_gedcom, overlapping_csv)
        infos = [info for info, _, _, _ in hooks.steps if info]
        assert infos == [
            "Parsing GEDCOM",
            "Parsing triangulation data",
            "Grouping segments",
            "Scoring segment groups",
        ]
        assert hooks.steps[-1] == ("", None, False, 1)

    def test_analyze_files(self, tmp_path, cousins_gedcom, overlapping_csv):
        gedcom_file = tmp_path / "tree.ged"
        gedcom_file.write_text(cousins_gedcom, encoding="utf-8")
        csv_file = tmp_path / "matches.csv"
        csv_file.write_text(overlapping_csv, encoding="utf-8")
        results = AnalysisOrchestrator().analyze_files(gedcom_file, csv_file)
        assert names(results[0].suggested_mrca)[0] == "George Miller"

    def test_result_to_dict(self, cousins_gedcom, overlapping_csv):
        result = AnalysisOrchestrator().analyze(cousins_gedcom, overlapping_csv)[0]
        d = result.to_dict()
        assert set(d) == {"segment", "matches", "suggestedMRCA", "confidence"}
        assert d["confidence"] == "Very High"
        top = d["suggestedMRCA"][0]
        assert top["person"]["name"] == "George Miller"
        assert set(top["convergenceFactors"]) == {
            "cM",
            "triangulationDepth",
            "gedcomConvergence",
            "surnameMatch",
            "haplogroupConsistency",
            "lifespanScore",
            "locationScore",
        }
