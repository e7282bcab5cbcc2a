"""TikZ rendering of a laid-out career graph."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from ..catalog import Catalog
from ..layout import LayoutNode
from ..scoring import INTERNAL, ScoredEdge
from .utils import format_float, hex_to_rgb, latex_escape, tikz_name

PT_PER_UNIT = 0.5

PILLAR_COLORS: Dict[str, str] = {
    'Tecnologia': '#1E40AF',
    'Produto': '#7C3AED',
    'Dados': '#DC2626',
    'Gestão': '#059669',
    'Financeiro': '#D97706',
    'Recursos Humanos': '#BE185D',
}
FALLBACK_COLOR = '#6B7280'
CENTER_FILL = '#FBBF24'
INTERNAL_EDGE = '#60A5FA'
CROSS_EDGE = '#A78BFA'

standalone_tpl = r"""\documentclass[border=4pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage[T1]{fontenc}
\usepackage{tikz}
\usetikzlibrary{arrows.meta}
%s
\tikzset{
  cg/node/.style={draw, rounded corners=3pt, line width=0.8pt, align=center,
      font=\scriptsize, inner sep=2pt},
  cg/center/.style={cg/node, fill=cgCenter, line width=1.4pt, font=\footnotesize\bfseries},
  cg/internal/.style={-{Stealth[length=4pt]}, draw=cgInternal, line width=1pt},
  cg/cross/.style={-{Stealth[length=4pt]}, draw=cgCross, line width=1pt, dash pattern=on 4pt off 2pt},
}
\begin{document}
%s
\end{document}
"""


def _color_definitions(pillars: Sequence[str]) -> List[str]:
    lines = [
        f"\\definecolor{{cgCenter}}{{RGB}}{{{hex_to_rgb(CENTER_FILL)}}}",
        f"\\definecolor{{cgInternal}}{{RGB}}{{{hex_to_rgb(INTERNAL_EDGE)}}}",
        f"\\definecolor{{cgCross}}{{RGB}}{{{hex_to_rgb(CROSS_EDGE)}}}",
    ]
    for index, pillar in enumerate(pillars):
        color = PILLAR_COLORS.get(pillar, FALLBACK_COLOR)
        lines.append(f"\\definecolor{{cgPillar{index}}}{{RGB}}{{{hex_to_rgb(color)}}}")
    return lines


def _node_label(catalog: Catalog, node: LayoutNode) -> str:
    position = catalog.get(node.id)
    if position is None:
        return latex_escape(node.id)
    label = latex_escape(position.title)
    if node.score is not None:
        label += f"\\\\ {node.score}\\%"
    return label


def generate_tikz_code(
    nodes: Sequence[LayoutNode],
    edges: Sequence[ScoredEdge],
    catalog: Catalog,
    *,
    canvas_height: float = 700.0,
) -> str:
    """Emit a ``tikzpicture`` with one box per node and one arrow per edge.

    Screen coordinates grow downwards, so ``y`` is flipped against
    ``canvas_height``.
    """

    pillars = list(dict.fromkeys(node.pillar for node in nodes))
    pillar_index: Mapping[str, int] = {pillar: idx for idx, pillar in enumerate(pillars)}
    names = {node.id: tikz_name(node.id) for node in nodes}

    lines: List[str] = [f"\\begin{{tikzpicture}}[x={PT_PER_UNIT}pt, y={PT_PER_UNIT}pt]"]
    for node in nodes:
        style = "cg/center" if node.is_center else f"cg/node, draw=cgPillar{pillar_index[node.pillar]}"
        lines.append(
            f"  \\node[{style}, minimum width={format_float(node.width * PT_PER_UNIT)}pt, "
            f"minimum height={format_float(node.height * PT_PER_UNIT)}pt, "
            f"text width={format_float((node.width - 8.0) * PT_PER_UNIT)}pt] "
            f"({names[node.id]}) at ({format_float(node.center_x)}, "
            f"{format_float(canvas_height - node.center_y)}) {{{_node_label(catalog, node)}}};"
        )

    for edge in edges:
        if edge.source_id not in names or edge.target_id not in names:
            continue
        style = "cg/internal" if edge.transition_kind == INTERNAL else "cg/cross"
        lines.append(f"  \\draw[{style}] ({names[edge.source_id]}) -- ({names[edge.target_id]});")
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def generate_tikz_document(
    nodes: Sequence[LayoutNode],
    edges: Sequence[ScoredEdge],
    catalog: Catalog,
    *,
    canvas_height: float = 700.0,
) -> str:
    """Render a standalone LaTeX document for the given layout."""

    pillars = list(dict.fromkeys(node.pillar for node in nodes))
    colors = "\n".join(_color_definitions(pillars))
    body = generate_tikz_code(nodes, edges, catalog, canvas_height=canvas_height)
    return standalone_tpl % (colors, body)
