"""
Example: Suggesting common ancestors for DNA segment groups.

This example demonstrates how to:
1. Load a GEDCOM tree and a triangulation table
2. Run the ancestral convergence analysis
3. Print the suggested ancestors per segment group
4. Export results as JSON

Usage:
    python analyze_files.py tree.ged matches.csv [results.json]
"""

import json
import logging
import sys

from ace_gedcom import AnalysisOrchestrator, EmptyTriangulationInput


class PrintHooks:
    """Prints analysis progress."""

    def report_step(self, info="", target=None, reset_counter=False, plus_step=1):
        if info:
            print(f"... {info}")


def example_analysis(gedcom_file, triangulation_file, output_file=None):
    """Run an analysis and print a summary per segment group."""
    orchestrator = AnalysisOrchestrator(app_hooks=PrintHooks())
    try:
        results = orchestrator.analyze_files(gedcom_file, triangulation_file)
    except EmptyTriangulationInput as e:
        print(f"Nothing to analyze: {e}")
        return []

    for result in results:
        print(f"\n=== Segment {result.segment} ({len(result.matches)} matches) ===")
        print(f"Confidence: {result.confidence}")
        for candidate in result.suggested_mrca:
            print(f"  {candidate.person.name} ({candidate.person.xref_id}): score {candidate.score:.1f}, "
                  f"~{candidate.generation_estimate} generations")
            for explanation in candidate.explanations:
                print(f"    - {explanation}")

    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump([r.to_dict() for r in results], f, indent=2)
        print(f"\nResults written to {output_file}")
    return results


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    example_analysis(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None)
