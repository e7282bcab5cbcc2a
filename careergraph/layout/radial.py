"""Deterministic radial placement around a focused position."""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..catalog import Catalog
from ..logging_utils import apply_debug_logging
from ..scoring import INTERNAL, ScoredEdge, score
from .collisions import clamp_box, resolve_collisions
from .model import LayoutNode, LayoutOptions, LayoutResult

logger = logging.getLogger(__name__)

ScorerFn = Callable[[str], List[ScoredEdge]]
Sector = Tuple[float, float]

FULL_TURN = 2.0 * math.pi


def build_sector_table(pillars: Iterable[str], pillar_order: Sequence[str]) -> Dict[str, Sector]:
    """Split the full turn into one equal angular sector per pillar.

    Pillars from ``pillar_order`` come first, then any other pillar in the order
    it is first seen in ``pillars``.
    """

    ordered = list(dict.fromkeys([*pillar_order, *pillars]))
    if not ordered:
        return {}
    step = FULL_TURN / len(ordered)
    table: Dict[str, Sector] = {}
    for index, pillar in enumerate(ordered):
        end = FULL_TURN if index == len(ordered) - 1 else (index + 1) * step
        table[pillar] = (index * step, end)
    return table


def _peripheral_node(
    node_id: str,
    pillar: str,
    center: Tuple[float, float],
    angle: float,
    radius: float,
    options: LayoutOptions,
    **extra,
) -> LayoutNode:
    width, height = options.node_size
    return LayoutNode(
        id=node_id,
        x=center[0] + radius * math.cos(angle) - width / 2.0,
        y=center[1] + radius * math.sin(angle) - height / 2.0,
        width=width,
        height=height,
        pillar=pillar,
        **extra,
    )


def place_nodes(
    center_id: Optional[str],
    ordered_ids: Sequence[str],
    catalog: Catalog,
    edges: Sequence[ScoredEdge],
    canvas_width: float,
    canvas_height: float,
    options: LayoutOptions,
) -> List[LayoutNode]:
    """Initial polar placement before collision resolution."""

    canvas_center = (canvas_width / 2.0, canvas_height / 2.0)
    sectors = build_sector_table(catalog.pillars(), options.pillar_order)
    edge_by_target = {edge.target_id: edge for edge in edges}

    siblings: Dict[str, List[str]] = {}
    for edge in edges:
        if edge.target_id in catalog:
            siblings.setdefault(catalog[edge.target_id].pillar, []).append(edge.target_id)

    nodes: List[LayoutNode] = []
    if center_id is not None:
        width, height = options.center_size
        nodes.append(
            LayoutNode(
                id=center_id,
                x=canvas_center[0] - width / 2.0,
                y=canvas_center[1] - height / 2.0,
                width=width,
                height=height,
                is_center=True,
                pillar=catalog[center_id].pillar,
            )
        )

    fallback = [node_id for node_id in ordered_ids if node_id != center_id and node_id not in edge_by_target]
    for node_id in ordered_ids:
        if node_id == center_id:
            continue
        pillar = catalog[node_id].pillar
        edge = edge_by_target.get(node_id)
        if edge is None:
            index = fallback.index(node_id)
            angle = FULL_TURN * index / max(len(fallback), 1)
            nodes.append(
                _peripheral_node(node_id, pillar, canvas_center, angle, options.fallback_radius, options)
            )
            continue

        start, end = sectors[pillar]
        group = siblings[pillar]
        index = group.index(node_id)
        step = (end - start) / max(len(group), 1)
        angle = start + step * index + step / 2.0
        base = options.internal_radius if edge.transition_kind == INTERNAL else options.cross_functional_radius
        radius = base + (edge.score / 100.0) * options.score_radius_gain + index * options.sibling_radius_step
        nodes.append(
            _peripheral_node(
                node_id,
                pillar,
                canvas_center,
                angle,
                radius,
                options,
                transition_kind=edge.transition_kind,
                score=edge.score,
            )
        )

    for node in nodes:
        node.x, node.y = clamp_box(
            node.x, node.y, node.width, node.height, canvas_width, canvas_height, options.padding
        )
    return nodes


def layout(
    center_id: str,
    visible_ids: Iterable[str],
    catalog: Catalog,
    scorer: Optional[ScorerFn] = None,
    canvas_width: float = 1000.0,
    canvas_height: float = 700.0,
    options: Optional[LayoutOptions] = None,
) -> LayoutResult:
    """Place ``visible_ids`` around ``center_id`` and separate overlapping boxes.

    The input order of ``visible_ids`` does not matter: nodes are processed in
    catalog order. Ids missing from the catalog are dropped and reported in
    :attr:`LayoutResult.dropped`.
    """

    options = options or LayoutOptions()
    scorer = scorer or (lambda position_id: score(position_id, catalog))

    requested = list(dict.fromkeys(visible_ids))
    dropped = [node_id for node_id in requested if node_id not in catalog]
    for node_id in dropped:
        logger.warning("Layout skipping unknown position %r", node_id)

    focus: Optional[str] = center_id
    if center_id not in catalog:
        logger.warning("Layout center %r is not in the catalog; placing nodes on the outer ring", center_id)
        focus = None
        if center_id not in dropped:
            dropped.append(center_id)

    known = [node_id for node_id in requested if node_id in catalog]
    if focus is not None and focus not in known:
        known.append(focus)
    ordered = sorted(known, key=catalog.index_of)
    if not ordered:
        return LayoutResult(dropped=dropped)

    edges = scorer(focus) if focus is not None else []
    nodes = place_nodes(focus, ordered, catalog, edges, canvas_width, canvas_height, options)
    iterations, converged, nudged = resolve_collisions(nodes, canvas_width, canvas_height, options)

    logger.info(
        "Laid out %d node(s) around %s in %d iteration(s) (converged=%s, nudged=%d)",
        len(nodes),
        focus,
        iterations,
        converged,
        nudged,
    )
    return LayoutResult(
        nodes=nodes,
        iterations=iterations,
        converged=converged,
        nudged=nudged,
        dropped=dropped,
    )


apply_debug_logging(globals(), logger=logger)
