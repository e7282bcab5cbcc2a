"""Engine façade wiring catalog, scorer, visibility state and layout together."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .catalog import Catalog, MissingCatalogEntry, Position
from .layout import LayoutNode, LayoutOptions, LayoutResult, layout
from .scoring import ScoredEdge, ScoringConfig, get_scoring_config, score
from .visibility import VisibilityManager, VisibilitySnapshot

logger = logging.getLogger(__name__)

if not logging.getLogger().handlers:  # pragma: no cover - depends on host application
    logging.basicConfig(level=logging.INFO)

DEFAULT_INITIAL_ID = "dev-net"

STATUS_MISSING = "missing"
STATUS_TERMINAL = "terminal"
STATUS_CONNECTED = "connected"


class CareerGraphEngine:
    """Engine → presentation contract for one exploration session."""

    def __init__(
        self,
        catalog: Catalog,
        initial_id: Optional[str] = None,
        *,
        scoring: Optional[ScoringConfig] = None,
        layout_options: Optional[LayoutOptions] = None,
        canvas: Tuple[float, float] = (1000.0, 700.0),
        expand_limit: Optional[int] = None,
    ) -> None:
        self.catalog = catalog
        self.scoring = scoring or get_scoring_config()
        self.layout_options = layout_options or LayoutOptions()
        self.canvas = canvas
        self._edge_cache: Dict[Tuple[object, str], List[ScoredEdge]] = {}

        self.visibility: Optional[VisibilityManager] = None
        start = self._pick_initial(initial_id)
        if start is not None:
            self.visibility = VisibilityManager(
                catalog, start, self.get_scored_edges, expand_limit=expand_limit
            )
        logger.info(
            "Engine ready: %d position(s), start=%s, canvas=%sx%s",
            len(catalog),
            start,
            canvas[0],
            canvas[1],
        )

    def _pick_initial(self, initial_id: Optional[str]) -> Optional[str]:
        if not self.catalog:
            logger.warning("Empty catalog; the engine will serve an empty graph")
            return None
        if initial_id is None:
            initial_id = DEFAULT_INITIAL_ID if DEFAULT_INITIAL_ID in self.catalog else next(iter(self.catalog))
        # an explicit but unknown start is a caller error
        self.catalog.require(initial_id)
        return initial_id

    # -- scoring -------------------------------------------------------------

    def get_scored_edges(self, center_id: str) -> List[ScoredEdge]:
        key = (self.scoring.cache_key(), center_id)
        cached = self._edge_cache.get(key)
        if cached is None:
            cached = score(center_id, self.catalog, self.scoring)
            self._edge_cache[key] = cached
        return list(cached)

    def node_status(self, node_id: str) -> str:
        """Tell a missing id apart from a valid position without transitions."""

        if node_id not in self.catalog:
            return STATUS_MISSING
        return STATUS_CONNECTED if self.get_scored_edges(node_id) else STATUS_TERMINAL

    # -- visibility ----------------------------------------------------------

    def get_visibility_snapshot(self) -> VisibilitySnapshot:
        if self.visibility is None:
            return VisibilitySnapshot(center="", visible=(), visited=())
        return self.visibility.snapshot()

    def expand(self, node_id: str) -> VisibilitySnapshot:
        if self.visibility is None:
            logger.warning("Ignoring expand on empty graph: %s", MissingCatalogEntry(node_id))
            return self.get_visibility_snapshot()
        return self.visibility.expand(node_id)

    def reset(self) -> VisibilitySnapshot:
        if self.visibility is None:
            return self.get_visibility_snapshot()
        return self.visibility.reset()

    def show_all(self) -> VisibilitySnapshot:
        if self.visibility is None:
            return self.get_visibility_snapshot()
        return self.visibility.show_all()

    def focus_path(self, node_id: str) -> VisibilitySnapshot:
        if self.visibility is None:
            logger.warning("Ignoring focus on empty graph: %s", MissingCatalogEntry(node_id))
            return self.get_visibility_snapshot()
        return self.visibility.focus_path(node_id)

    def search(self, term: str, salary_range: Optional[Tuple[Optional[float], Optional[float]]] = None) -> List[Position]:
        if self.visibility is None:
            return []
        return self.visibility.search(term, salary_range)

    # -- layout --------------------------------------------------------------

    def layout_result(
        self, center_id: Optional[str] = None, visible_ids: Optional[Iterable[str]] = None
    ) -> LayoutResult:
        snapshot = self.get_visibility_snapshot()
        center = center_id if center_id is not None else snapshot.center
        visible = list(visible_ids) if visible_ids is not None else list(snapshot.visible)
        if not center and not visible:
            return LayoutResult()
        return layout(
            center,
            visible,
            self.catalog,
            self.get_scored_edges,
            self.canvas[0],
            self.canvas[1],
            self.layout_options,
        )

    def get_layout(
        self, center_id: Optional[str] = None, visible_ids: Optional[Iterable[str]] = None
    ) -> List[LayoutNode]:
        return self.layout_result(center_id, visible_ids).nodes

    def get_visible_edges(
        self, center_id: Optional[str] = None, visible_ids: Optional[Iterable[str]] = None
    ) -> List[ScoredEdge]:
        """Edges from the center whose targets are currently visible."""

        snapshot = self.get_visibility_snapshot()
        center = center_id if center_id is not None else snapshot.center
        visible = set(visible_ids) if visible_ids is not None else set(snapshot.visible)
        if not center:
            return []
        return [edge for edge in self.get_scored_edges(center) if edge.target_id in visible]


__all__ = [
    "CareerGraphEngine",
    "DEFAULT_INITIAL_ID",
    "STATUS_CONNECTED",
    "STATUS_MISSING",
    "STATUS_TERMINAL",
]
