"""
Targeting Context

Responsibilities:
- Heuristic content prioritization under space constraints
- Scores achievement bullets and selects which ones survive truncation

Owns: Relevance scoring, content selection
Never: Computes geometry or reads raw resume records
"""

from rework.contexts.targeting.content_scorer import (
    ContentScorer,
    ScoringWeights,
    score,
    select_top,
)

__all__ = ["ContentScorer", "ScoringWeights", "score", "select_top"]
