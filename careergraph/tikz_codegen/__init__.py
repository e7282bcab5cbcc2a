"""Career graph → TikZ code generation helpers."""

from .generator import (
    PILLAR_COLORS,
    generate_tikz_code,
    generate_tikz_document,
)
from .utils import latex_escape

__all__ = [
    "PILLAR_COLORS",
    "generate_tikz_code",
    "generate_tikz_document",
    "latex_escape",
]
