"""Layout data structures and tunables."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

DEFAULT_PILLAR_ORDER: Tuple[str, ...] = (
    "Tecnologia",
    "Produto",
    "Dados",
    "Gestão",
    "Financeiro",
    "Recursos Humanos",
)


@dataclass
class LayoutNode:
    id: str
    x: float
    y: float
    width: float
    height: float
    is_center: bool = False
    pillar: str = ""
    transition_kind: Optional[str] = None
    score: Optional[int] = None

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass
class LayoutOptions:
    """Geometry of the radial layout and of the collision pass."""

    center_size: Tuple[float, float] = (160.0, 80.0)
    node_size: Tuple[float, float] = (140.0, 70.0)
    internal_radius: float = 200.0
    cross_functional_radius: float = 280.0
    score_radius_gain: float = 40.0
    sibling_radius_step: float = 25.0
    fallback_radius: float = 320.0
    padding: float = 10.0
    pillar_order: Tuple[str, ...] = DEFAULT_PILLAR_ORDER
    max_iterations: int = 100
    collision_margin: float = 10.0
    push_margin: float = 2.0
    hard_floor: float = 50.0
    nudge_offset: float = 80.0

    def pair_distance(self, first: LayoutNode, second: LayoutNode) -> float:
        """Centre-to-centre distance beyond which the two boxes cannot overlap."""

        width = (first.width + second.width) / 2.0
        height = (first.height + second.height) / 2.0
        return math.hypot(width, height) + self.collision_margin


@dataclass
class LayoutResult:
    nodes: List[LayoutNode] = field(default_factory=list)
    iterations: int = 0
    converged: bool = True
    nudged: int = 0
    dropped: List[str] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[LayoutNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def positions(self) -> dict:
        return {node.id: (node.x, node.y) for node in self.nodes}
