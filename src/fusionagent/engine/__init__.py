"""Fusion engine: concurrent channel probing, ranking and answer synthesis."""

from .fusion import (
    FusionEngine,
    answer_query,
    build_appendix,
    build_executive_summary,
    compute_confidence,
    extract_key_findings,
    rank_results,
    score_match,
    synthesize,
)

__all__ = [
    "FusionEngine",
    "answer_query",
    "build_appendix",
    "build_executive_summary",
    "compute_confidence",
    "extract_key_findings",
    "rank_results",
    "score_match",
    "synthesize",
]
