"""Compatibility scoring façade."""

from __future__ import annotations

from .config import get_scoring_config, set_scoring_config
from .model import CROSS_FUNCTIONAL, INTERNAL, ScoredEdge, ScoringConfig
from .scorer import (
    level_points,
    level_rank,
    pillar_points,
    salary_points,
    score,
    score_pair,
    transition_kind,
)
from .tables import COMMON_TRANSITIONS, HIGH_DEMAND_ROLES, LEVEL_RANKS, RELATED_AREAS

__all__ = [
    "COMMON_TRANSITIONS",
    "CROSS_FUNCTIONAL",
    "HIGH_DEMAND_ROLES",
    "INTERNAL",
    "LEVEL_RANKS",
    "RELATED_AREAS",
    "ScoredEdge",
    "ScoringConfig",
    "get_scoring_config",
    "level_points",
    "level_rank",
    "pillar_points",
    "salary_points",
    "score",
    "score_pair",
    "set_scoring_config",
    "transition_kind",
]
