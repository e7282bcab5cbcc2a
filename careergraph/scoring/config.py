"""Process-wide default for the scoring configuration."""

from __future__ import annotations

import copy

from .model import ScoringConfig

_SCORING_CONFIG = ScoringConfig()


def get_scoring_config() -> ScoringConfig:
    return copy.deepcopy(_SCORING_CONFIG)


def set_scoring_config(config: ScoringConfig) -> None:
    global _SCORING_CONFIG
    _SCORING_CONFIG = copy.deepcopy(config)
