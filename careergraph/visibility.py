"""Exploration state: which positions are revealed and which one is focused."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .catalog import Catalog, MissingCatalogEntry, Position
from .logging_utils import apply_debug_logging
from .scoring import ScoredEdge, score

logger = logging.getLogger(__name__)

ScorerFn = Callable[[str], List[ScoredEdge]]

# salary bands overlap when they meet after widening the other band by these factors
PATH_SALARY_HEADROOM = 1.2
PATH_SALARY_FLOOR = 0.8


def career_path(catalog: Catalog, node_id: str) -> List[str]:
    """Ids along the career path of ``node_id``.

    The path starts with the position itself, then its authored connections,
    then (in catalog order) every position that shares a transferable skill
    and whose salary band overlaps within the headroom factors. Connections
    missing from the catalog are logged and skipped. Raises
    :class:`MissingCatalogEntry` for an unknown ``node_id``.
    """

    position = catalog.require(node_id)
    path: Dict[str, None] = {node_id: None}
    for target_id in position.connections:
        if target_id in catalog:
            path.setdefault(target_id, None)
        else:
            logger.warning("Career path of %s skips unknown connection %s", node_id, target_id)

    low, high = position.salary_bounds
    skills = set(position.transferable_skills)
    for other in catalog.values():
        if other.id in path:
            continue
        other_low, other_high = other.salary_bounds
        salary_overlap = low <= other_high * PATH_SALARY_HEADROOM and high >= other_low * PATH_SALARY_FLOOR
        if salary_overlap and skills.intersection(other.transferable_skills):
            path[other.id] = None
    return list(path)


@dataclass(frozen=True)
class VisibilitySnapshot:
    center: str
    visible: Tuple[str, ...]
    visited: Tuple[str, ...]


class VisibilityManager:
    """Grow-only visible set plus the current center.

    Nodes only leave the visible set through :meth:`reset` and
    :meth:`focus_path`.
    """

    def __init__(
        self,
        catalog: Catalog,
        initial_id: str,
        scorer: Optional[ScorerFn] = None,
        *,
        expand_limit: Optional[int] = None,
    ) -> None:
        catalog.require(initial_id)
        self.catalog = catalog
        self.initial_id = initial_id
        self.expand_limit = expand_limit
        self._scorer: ScorerFn = scorer or (lambda position_id: score(position_id, catalog))
        self._center = initial_id
        # dict keys keep insertion order
        self._visible: Dict[str, None] = {initial_id: None}
        self._visited: List[str] = [initial_id]

    @property
    def center(self) -> str:
        return self._center

    @property
    def visible(self) -> List[str]:
        return list(self._visible)

    def snapshot(self) -> VisibilitySnapshot:
        return VisibilitySnapshot(
            center=self._center,
            visible=tuple(self._visible),
            visited=tuple(self._visited),
        )

    def _reveal(self, ids: Sequence[str]) -> int:
        added = 0
        for position_id in ids:
            if position_id not in self._visible:
                self._visible[position_id] = None
                added += 1
        return added

    def expand(self, node_id: str) -> VisibilitySnapshot:
        """Focus ``node_id`` and reveal its best-scoring transitions."""

        if node_id not in self.catalog:
            logger.warning("Ignoring expand request: %s", MissingCatalogEntry(node_id))
            return self.snapshot()

        edges = self._scorer(node_id)
        if self.expand_limit is not None:
            edges = edges[: max(0, self.expand_limit)]
        self._center = node_id
        if node_id not in self._visited:
            self._visited.append(node_id)
        added = self._reveal([node_id] + [edge.target_id for edge in edges])
        logger.info(
            "Expanded %s: %d edge(s), %d newly visible, %d visible in total",
            node_id,
            len(edges),
            added,
            len(self._visible),
        )
        return self.snapshot()

    def reset(self) -> VisibilitySnapshot:
        self._center = self.initial_id
        self._visible = {self.initial_id: None}
        self._visited = [self.initial_id]
        logger.info("Reset exploration to %s", self.initial_id)
        return self.snapshot()

    def focus_path(self, node_id: str) -> VisibilitySnapshot:
        """Focus ``node_id`` and show only the initial position plus its career path.

        Like :meth:`reset`, this replaces the visible set instead of growing it.
        """

        try:
            path = career_path(self.catalog, node_id)
        except MissingCatalogEntry as exc:
            logger.warning("Ignoring focus request: %s", exc)
            return self.snapshot()

        self._center = node_id
        if node_id not in self._visited:
            self._visited.append(node_id)
        self._visible = {self.initial_id: None}
        self._reveal(path)
        logger.info("Focused career path of %s: %d position(s) on the path", node_id, len(path))
        return self.snapshot()

    def show_all(self) -> VisibilitySnapshot:
        """Reveal every position taking part in at least one scored edge."""

        participating: List[str] = []
        for position_id in self.catalog:
            edges = self._scorer(position_id)
            if not edges:
                continue
            participating.append(position_id)
            participating.extend(edge.target_id for edge in edges)
        added = self._reveal(participating)
        logger.info("Show all revealed %d position(s), %d visible in total", added, len(self._visible))
        return self.snapshot()

    def compatibility(self, target_id: str) -> Optional[int]:
        """Score of the edge from the current center to ``target_id``, if any."""

        if target_id == self._center:
            return None
        for edge in self._scorer(self._center):
            if edge.target_id == target_id:
                return edge.score
        return None

    def search(
        self,
        term: str,
        salary_range: Optional[Tuple[Optional[float], Optional[float]]] = None,
    ) -> List[Position]:
        """Case-insensitive substring search over the searchable position fields.

        Positions reachable from the current center come first by descending
        compatibility, the rest follow alphabetically by title.
        """

        needle = (term or "").strip().lower()
        if not needle:
            return []

        candidates = (
            self.catalog.filter_by_salary(*salary_range)
            if salary_range is not None
            else list(self.catalog.values())
        )
        matches = [
            position
            for position in candidates
            if any(needle in text.lower() for text in position.searchable_text())
        ]

        scores = {edge.target_id: edge.score for edge in self._scorer(self._center)}
        scores.pop(self._center, None)

        def _key(position: Position) -> Tuple[int, int, str]:
            compatibility = scores.get(position.id)
            if compatibility is None:
                return (1, 0, position.title.lower())
            return (0, -compatibility, position.title.lower())

        matches.sort(key=_key)
        logger.debug("Search %r matched %d position(s)", term, len(matches))
        return matches


apply_debug_logging(globals(), logger=logger)

__all__ = ["ScorerFn", "VisibilityManager", "VisibilitySnapshot", "career_path"]
