"""Additive compatibility scoring between catalog positions."""

from __future__ import annotations

import logging
import math
from typing import List, Mapping, Optional, Sequence, Tuple

from ..catalog import Catalog, MissingCatalogEntry, Position
from .config import get_scoring_config
from .model import CROSS_FUNCTIONAL, INTERNAL, ScoredEdge, ScoringConfig
from .tables import COMMON_TRANSITIONS, DEFAULT_LEVEL_RANK, HIGH_DEMAND_ROLES, LEVEL_RANKS

logger = logging.getLogger(__name__)

Factor = Tuple[float, Optional[str]]

SALARY_MAX_POINTS = 35.0
SALARY_FLOOR_POINTS = 15.0
SALARY_GROWTH_POINTS = 10.0
SALARY_PROGRESSION_RATIO = 1.1

SAME_PILLAR_POINTS = 30.0
RELATED_PILLAR_POINTS = 18.0
NEW_PILLAR_POINTS = 5.0

LEVEL_DELTA_POINTS = {0: (20.0, "Same level"), 1: (25.0, "Natural progression"), 2: (15.0, "Big step up")}

SKILL_POINTS_PER_TAG = 5.0
SKILL_POINTS_CAP = 10.0
CONNECTION_POINTS = 10.0
HIGH_DEMAND_POINTS = 8.0
COMMON_TRANSITION_POINTS = 12.0

MAX_SCORE = 100


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def level_rank(label: str) -> int:
    return LEVEL_RANKS.get(label, DEFAULT_LEVEL_RANK)


def transition_kind(source: Position, target: Position) -> str:
    return INTERNAL if source.pillar == target.pillar else CROSS_FUNCTIONAL


def salary_points(source_average: float, target_average: float, config: ScoringConfig) -> Factor:
    """Score salary proximity inside the asymmetric acceptance window."""

    lower = source_average * config.lower_salary_ratio
    upper = source_average * config.upper_salary_ratio
    if lower <= target_average <= upper:
        max_diff = source_average * config.salary_flexibility
        distance = abs(source_average - target_average) / max_diff if max_diff > 0 else 0.0
        points = max(SALARY_FLOOR_POINTS, (1.0 - distance) * SALARY_MAX_POINTS)
        if target_average > source_average * SALARY_PROGRESSION_RATIO:
            return points, "Salary progression"
        return points, "Compatible salary"
    if target_average > source_average:
        return SALARY_GROWTH_POINTS, "Growth potential"
    return 0.0, None


def pillar_points(
    source_pillar: str, target_pillar: str, related_areas: Mapping[str, Sequence[str]]
) -> Factor:
    if source_pillar == target_pillar:
        return SAME_PILLAR_POINTS, "Same area"
    if target_pillar in related_areas.get(source_pillar, ()):
        return RELATED_PILLAR_POINTS, "Related area"
    return NEW_PILLAR_POINTS, "New area"


def level_points(source_level: str, target_level: str) -> Factor:
    delta = level_rank(target_level) - level_rank(source_level)
    return LEVEL_DELTA_POINTS.get(delta, (0.0, None))


def skill_overlap_points(source: Position, target: Position) -> Factor:
    shared = set(source.transferable_skills) & set(target.transferable_skills)
    if not shared:
        return 0.0, None
    return min(SKILL_POINTS_CAP, SKILL_POINTS_PER_TAG * len(shared)), "Transferable skills"


def connection_points(source: Position, target: Position) -> Factor:
    if target.id in source.connections:
        return CONNECTION_POINTS, "Direct connection"
    return 0.0, None


def high_demand_points(target: Position) -> Factor:
    if any(role in target.title for role in HIGH_DEMAND_ROLES):
        return HIGH_DEMAND_POINTS, "High demand"
    return 0.0, None


def common_transition_points(source: Position, target: Position) -> Factor:
    for source_role, next_roles in COMMON_TRANSITIONS.items():
        if source_role not in source.title:
            continue
        if any(role in target.title for role in next_roles):
            return COMMON_TRANSITION_POINTS, "Common transition"
    return 0.0, None


def score_pair(
    source: Position, target: Position, config: Optional[ScoringConfig] = None
) -> Tuple[float, Tuple[str, ...]]:
    """Return the raw (unclamped) score and the contributing reasons."""

    config = config or get_scoring_config()
    factors: List[Factor] = [
        salary_points(source.salary_average, target.salary_average, config),
        pillar_points(source.pillar, target.pillar, config.related_areas),
        level_points(source.level, target.level),
    ]
    if config.enable_bonuses:
        factors.extend(
            [
                skill_overlap_points(source, target),
                connection_points(source, target),
                high_demand_points(target),
                common_transition_points(source, target),
            ]
        )

    raw = sum(points for points, _ in factors)
    reasons = tuple(reason for _, reason in factors if reason)
    return raw, reasons


def score(source_id: str, catalog: Catalog, config: Optional[ScoringConfig] = None) -> List[ScoredEdge]:
    """Rank every other catalog entry as a transition from ``source_id``.

    Only candidates whose raw score reaches ``config.admission_threshold`` are
    kept; the result is sorted by descending score (ties keep catalog order)
    and truncated to ``config.max_edges``. An unknown source yields ``[]``.
    """

    config = config or get_scoring_config()
    try:
        source = catalog.require(source_id)
    except MissingCatalogEntry as exc:
        logger.warning("Cannot score transitions: %s", exc)
        return []

    edges: List[ScoredEdge] = []
    for target_id, target in catalog.items():
        if target_id == source_id:
            continue
        raw, reasons = score_pair(source, target, config)
        if raw < config.admission_threshold:
            continue
        edges.append(
            ScoredEdge(
                source_id=source_id,
                target_id=target_id,
                score=max(0, min(MAX_SCORE, round_half_up(raw))),
                raw_score=raw,
                reasons=reasons,
                salary_delta=round_half_up(target.salary_average - source.salary_average),
                transition_kind=transition_kind(source, target),
            )
        )

    edges.sort(key=lambda edge: -edge.score)
    kept = edges[: max(0, config.max_edges)]
    logger.debug(
        "Scored %s: %d admitted candidate(s), kept %d", source_id, len(edges), len(kept)
    )
    return kept
