from .catalog import Catalog, CatalogError, MissingCatalogEntry, Position, load_catalog
from .scoring import (
    CROSS_FUNCTIONAL,
    INTERNAL,
    ScoredEdge,
    ScoringConfig,
    get_scoring_config,
    score,
    set_scoring_config,
)
from .visibility import VisibilityManager, VisibilitySnapshot, career_path
from .layout import LayoutNode, LayoutOptions, LayoutResult, layout
from .engine import CareerGraphEngine, STATUS_CONNECTED, STATUS_MISSING, STATUS_TERMINAL
from .tikz_codegen import generate_tikz_code, generate_tikz_document, latex_escape

__all__ = [
    'Catalog',
    'CatalogError',
    'MissingCatalogEntry',
    'Position',
    'load_catalog',
    'CROSS_FUNCTIONAL',
    'INTERNAL',
    'ScoredEdge',
    'ScoringConfig',
    'get_scoring_config',
    'set_scoring_config',
    'score',
    'VisibilityManager',
    'VisibilitySnapshot',
    'career_path',
    'LayoutNode',
    'LayoutOptions',
    'LayoutResult',
    'layout',
    'CareerGraphEngine',
    'STATUS_CONNECTED',
    'STATUS_MISSING',
    'STATUS_TERMINAL',
    'generate_tikz_code',
    'generate_tikz_document',
    'latex_escape',
]
