"""Bounded overlap resolution for laid-out nodes."""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .model import LayoutNode, LayoutOptions

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))
_EPS = 1e-9

Pair = Tuple[int, int]


def clamp_box(
    x: float, y: float, width: float, height: float, canvas_width: float, canvas_height: float, padding: float
) -> Tuple[float, float]:
    """Clamp a top-left corner so the box stays inside the padded canvas."""

    def _axis(value: float, size: float, limit: float) -> float:
        low = padding
        high = limit - size - padding
        if high < low:
            return max(0.0, (limit - size) / 2.0)
        return min(max(value, low), high)

    return _axis(x, width, canvas_width), _axis(y, height, canvas_height)


def _centers(nodes: Sequence[LayoutNode]) -> np.ndarray:
    return np.array([[node.center_x, node.center_y] for node in nodes], dtype=float).reshape(-1, 2)


def find_overlaps(nodes: Sequence[LayoutNode], options: LayoutOptions) -> List[Pair]:
    """Index pairs whose centres are closer than their pair distance, sorted."""

    if len(nodes) < 2:
        return []
    centers = _centers(nodes)
    # upper bound of every pair distance
    radius = math.hypot(max(n.width for n in nodes), max(n.height for n in nodes)) + options.collision_margin
    tree = cKDTree(centers)
    overlaps: List[Pair] = []
    for i, j in sorted(tree.query_pairs(radius)):
        distance = float(np.linalg.norm(centers[j] - centers[i]))
        if distance < options.pair_distance(nodes[i], nodes[j]):
            overlaps.append((i, j))
    return overlaps


class _Workspace:
    """Centre coordinates of the nodes being separated, with clamping."""

    def __init__(self, nodes: Sequence[LayoutNode], canvas: Tuple[float, float], options: LayoutOptions):
        self.nodes = nodes
        self.canvas = canvas
        self.options = options
        self.centers = _centers(nodes)
        self.sizes = np.array([[node.width, node.height] for node in nodes], dtype=float).reshape(-1, 2)

    def clamp(self, index: int) -> None:
        width, height = self.sizes[index]
        x, y = clamp_box(
            self.centers[index, 0] - width / 2.0,
            self.centers[index, 1] - height / 2.0,
            width,
            height,
            self.canvas[0],
            self.canvas[1],
            self.options.padding,
        )
        self.centers[index] = (x + width / 2.0, y + height / 2.0)

    def move(self, index: int, delta: np.ndarray) -> None:
        self.centers[index] = self.centers[index] + delta
        self.clamp(index)

    def write_back(self) -> None:
        for node, (cx, cy), (width, height) in zip(self.nodes, self.centers, self.sizes):
            node.x = float(cx - width / 2.0)
            node.y = float(cy - height / 2.0)


def _push_apart(ws: _Workspace, i: int, j: int) -> bool:
    nodes = ws.nodes
    required = ws.options.pair_distance(nodes[i], nodes[j])
    offset = ws.centers[j] - ws.centers[i]
    distance = float(np.hypot(offset[0], offset[1]))
    if distance >= required:
        return False

    if distance < _EPS:
        angle = GOLDEN_ANGLE * (i * len(nodes) + j)
        direction = np.array([math.cos(angle), math.sin(angle)])
    else:
        direction = offset / distance

    overlap = required - distance
    if nodes[i].is_center:
        ws.move(j, direction * (overlap + ws.options.push_margin))
    elif nodes[j].is_center:
        ws.move(i, -direction * (overlap + ws.options.push_margin))
    else:
        shift = direction * (overlap / 2.0 + ws.options.push_margin)
        ws.move(i, -shift)
        ws.move(j, shift)
    return True


def _final_separation(ws: _Workspace) -> int:
    """Nudge any pair still sharing (almost) the same spot by a fixed offset."""

    floor = ws.options.hard_floor
    offset = ws.options.nudge_offset
    nudged = 0
    count = len(ws.nodes)
    for i in range(count):
        for j in range(i + 1, count):
            dx, dy = np.abs(ws.centers[j] - ws.centers[i])
            if dx >= floor or dy >= floor:
                continue
            target = i if ws.nodes[j].is_center else j
            axis = 0 if j % 2 == 0 else 1
            before = ws.centers[target].copy()
            for sign in (1.0, -1.0):
                delta = np.zeros(2)
                delta[axis] = sign * offset
                ws.centers[target] = before
                ws.move(target, delta)
                if abs(ws.centers[target, axis] - before[axis]) >= floor:
                    break
            nudged += 1
    return nudged


def resolve_collisions(
    nodes: Sequence[LayoutNode],
    canvas_width: float,
    canvas_height: float,
    options: LayoutOptions,
) -> Tuple[int, bool, int]:
    """Separate overlapping nodes in place.

    Runs at most ``options.max_iterations`` passes; the center node never
    moves. Returns ``(iterations, converged, nudged)``.
    """

    if len(nodes) < 2:
        return 0, True, 0

    ws = _Workspace(nodes, (canvas_width, canvas_height), options)
    iterations = 0
    converged = False
    for _ in range(options.max_iterations):
        ws.write_back()
        pairs = find_overlaps(nodes, options)
        if not pairs:
            converged = True
            break
        iterations += 1
        for i, j in pairs:
            _push_apart(ws, i, j)

    nudged = _final_separation(ws)
    ws.write_back()
    if not converged:
        converged = not find_overlaps(nodes, options)
    logger.debug(
        "Collision pass: %d iteration(s), converged=%s, nudged=%d", iterations, converged, nudged
    )
    return iterations, converged, nudged
