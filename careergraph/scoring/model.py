"""Data structures produced and consumed by the compatibility scorer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from .tables import RELATED_AREAS

INTERNAL = "internal"
CROSS_FUNCTIONAL = "cross-functional"


@dataclass(frozen=True)
class ScoredEdge:
    """Directed transition candidate from ``source_id`` to ``target_id``."""

    source_id: str
    target_id: str
    score: int
    raw_score: float
    reasons: Tuple[str, ...]
    salary_delta: int
    transition_kind: str

    @property
    def is_internal(self) -> bool:
        return self.transition_kind == INTERNAL


@dataclass
class ScoringConfig:
    """Tunable constants of the additive scoring rule."""

    admission_threshold: float = 20.0
    salary_flexibility: float = 0.3
    upward_flexibility_factor: float = 1.5
    max_edges: int = 12
    enable_bonuses: bool = False
    related_areas: Dict[str, Tuple[str, ...]] = field(
        default_factory=lambda: {key: tuple(value) for key, value in RELATED_AREAS.items()}
    )

    @property
    def lower_salary_ratio(self) -> float:
        return 1.0 - self.salary_flexibility

    @property
    def upper_salary_ratio(self) -> float:
        return 1.0 + self.salary_flexibility * self.upward_flexibility_factor

    def cache_key(self) -> Tuple[object, ...]:
        related: Mapping[str, Tuple[str, ...]] = self.related_areas
        return (
            self.admission_threshold,
            self.salary_flexibility,
            self.upward_flexibility_factor,
            self.max_edges,
            self.enable_bonuses,
            tuple(sorted((key, tuple(value)) for key, value in related.items())),
        )
