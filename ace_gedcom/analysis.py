"""
analysis.py - Ancestral convergence analysis of a GEDCOM tree and a triangulation table.

This module defines the AnalysisOrchestrator class, the entry point used by
front ends. One analysis run:
    - Parses the GEDCOM text into an AncestryGraph
    - Parses the triangulation table into matches (no matches is fatal)
    - Groups the matches by overlapping segments
    - Scores candidate common ancestors for each group
    - Returns one ACEResult per group, in group discovery order

Module: ace_gedcom.analysis
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from .app_hooks import AppHooks
from .gedcom_parser import GedcomParser, read_text_file
from .scoring import ACEResult, AceConfig, ConvergenceScorer
from .segments import group_matches, segment_label
from .triangulation import TriangulationParser

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    """
    Runs the ancestral convergence analysis.

    Attributes:
        config (AceConfig): Scoring configuration.
        app_hooks (Optional[AppHooks]): Optional application hooks for progress reporting.
    """
    __slots__ = ['config', 'app_hooks']

    def __init__(self, config: Optional[AceConfig] = None, app_hooks: Optional['AppHooks'] = None) -> None:
        self.config = config if config else AceConfig()
        self.app_hooks = app_hooks

    def analyze_files(self, gedcom_file: Union[str, Path], triangulation_file: Union[str, Path]) -> List[ACEResult]:
        """
        Analyze a GEDCOM file against a triangulation table file.

        Args:
            gedcom_file: Path to the GEDCOM file.
            triangulation_file: Path to the CSV/TSV triangulation table.

        Returns:
            List[ACEResult]: One result per segment group.
        """
        gedcom_text = read_text_file(Path(gedcom_file))
        triangulation_text = read_text_file(Path(triangulation_file))
        return self.analyze(gedcom_text, triangulation_text)

    def analyze(self, gedcom_text: str, triangulation_text: str) -> List[ACEResult]:
        """
        Analyze GEDCOM text against triangulation table text.

        Args:
            gedcom_text: Full GEDCOM content.
            triangulation_text: Full triangulation table content.

        Returns:
            List[ACEResult]: One result per segment group, in group discovery order.

        Raises:
            EmptyTriangulationInput: If the table has no valid matches.
        """
        self._report_step("Parsing GEDCOM", target=4, reset_counter=True, plus_step=0)
        graph = GedcomParser(generation_cap=self.config.generation_cap).parse(gedcom_text)
        if graph.issues:
            logger.info(f"GEDCOM parsed with {len(graph.issues)} issues")

        self._report_step("Parsing triangulation data", plus_step=1)
        matches = TriangulationParser().parse(triangulation_text)

        self._report_step("Grouping segments", plus_step=1)
        groups = group_matches(matches)

        self._report_step("Scoring segment groups", target=len(groups), reset_counter=True, plus_step=0)
        scorer = ConvergenceScorer(graph, self.config)
        results = []
        for group in groups:
            candidates, confidence = scorer.score_group(group)
            results.append(ACEResult(
                segment=segment_label(group, self.config.segment_unit),
                matches=tuple(group),
                suggested_mrca=tuple(candidates),
                confidence=confidence,
            ))
            self._report_step(plus_step=1)

        logger.info(f"Analysis complete: {len(results)} segment groups from {len(matches)} matches and {len(graph)} people")
        return results

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available. (Private method)

        Args:
            info (str): Information message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        else:
            logger.debug(info)
