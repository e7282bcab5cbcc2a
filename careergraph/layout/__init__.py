"""Radial layout engine."""

from .collisions import clamp_box, find_overlaps, resolve_collisions
from .model import DEFAULT_PILLAR_ORDER, LayoutNode, LayoutOptions, LayoutResult
from .radial import build_sector_table, layout, place_nodes

__all__ = [
    "DEFAULT_PILLAR_ORDER",
    "LayoutNode",
    "LayoutOptions",
    "LayoutResult",
    "build_sector_table",
    "clamp_box",
    "find_overlaps",
    "layout",
    "place_nodes",
    "resolve_collisions",
]
