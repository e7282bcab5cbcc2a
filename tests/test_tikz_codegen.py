from __future__ import annotations

import pytest

from careergraph import CareerGraphEngine, Catalog, Position
from careergraph.layout import LayoutNode
from careergraph.scoring import CROSS_FUNCTIONAL, INTERNAL, ScoredEdge
from careergraph.tikz_codegen import generate_tikz_code, generate_tikz_document, latex_escape
from careergraph.tikz_codegen.utils import format_float, hex_to_rgb, tikz_name


def _catalog() -> Catalog:
    return Catalog.from_positions(
        [
            Position("dev-net", "Desenvolvedor .NET & C#", "Pleno", "Tecnologia", 8000, 12000),
            Position("analista_dados", "Analista de Dados", "Pleno", "Dados", 8000, 12000),
            Position("cfo", "Diretor Financeiro", "Diretor", "Financeiro", 25000, 40000),
        ]
    )


def _nodes() -> list:
    return [
        LayoutNode("dev-net", 420.0, 310.0, 160.0, 80.0, is_center=True, pillar="Tecnologia"),
        LayoutNode(
            "analista_dados",
            100.0,
            500.0,
            140.0,
            70.0,
            pillar="Dados",
            transition_kind=CROSS_FUNCTIONAL,
            score=73,
        ),
        LayoutNode("cfo", 700.0, 50.0, 140.0, 70.0, pillar="Financeiro"),
    ]


def _edges() -> list:
    return [
        ScoredEdge("dev-net", "analista_dados", 73, 73.0, ("Compatible salary",), 0, CROSS_FUNCTIONAL),
        ScoredEdge("dev-net", "ghost", 90, 90.0, (), 0, INTERNAL),
    ]


def test_generate_tikz_code_draws_nodes_and_edges() -> None:
    tikz = generate_tikz_code(_nodes(), _edges(), _catalog())

    assert tikz.startswith("\\begin{tikzpicture}")
    assert tikz.endswith("\\end{tikzpicture}")
    assert "\\node[cg/center" in tikz
    assert "(dev-net) at (500, 350)" in tikz
    # y axis flipped: screen centre y = 535 -> 700 - 535
    assert "(analista-dados) at (170, 165)" in tikz
    assert "\\draw[cg/cross] (dev-net) -- (analista-dados);" in tikz
    assert "ghost" not in tikz


def test_node_labels_are_escaped_and_show_scores() -> None:
    tikz = generate_tikz_code(_nodes(), _edges(), _catalog())

    assert "Desenvolvedor .NET \\& C\\#" in tikz
    assert "Analista de Dados\\\\ 73\\%" in tikz
    assert "{Diretor Financeiro};" in tikz


def test_generate_tikz_document_preamble() -> None:
    document = generate_tikz_document(_nodes(), _edges(), _catalog())

    assert document.startswith("\\documentclass[border=4pt]{standalone}")
    assert "\\tikzset{" in document
    assert "\\definecolor{cgCenter}{RGB}{251,191,36}" in document
    assert "\\definecolor{cgPillar0}{RGB}{30,64,175}" in document
    assert "\\begin{tikzpicture}" in document
    assert document.rstrip().endswith("\\end{document}")


def test_internal_edges_are_solid() -> None:
    nodes = [
        LayoutNode("a", 0.0, 0.0, 140.0, 70.0, is_center=True, pillar="Tecnologia"),
        LayoutNode("b", 300.0, 0.0, 140.0, 70.0, pillar="Tecnologia", transition_kind=INTERNAL, score=80),
    ]
    catalog = Catalog.from_positions(
        [
            Position("a", "A", "Pleno", "Tecnologia"),
            Position("b", "B", "Pleno", "Tecnologia"),
        ]
    )
    edges = [ScoredEdge("a", "b", 80, 80.0, (), 0, INTERNAL)]

    tikz = generate_tikz_code(nodes, edges, catalog)

    assert "\\draw[cg/internal] (a) -- (b);" in tikz


def test_engine_output_renders() -> None:
    engine = CareerGraphEngine(_catalog(), "dev-net")
    engine.expand("dev-net")

    document = generate_tikz_document(engine.get_layout(), engine.get_visible_edges(), engine.catalog)

    assert document.count("\\node[") == len(engine.get_layout())


@pytest.mark.parametrize(
    "text, expected",
    [
        ("R&D 100%", "R\\&D 100\\%"),
        ("a_b {c}", "a\\_b \\{c\\}"),
        ("Gestão", "Gestão"),
        ("~^", "\\textasciitilde{}\\textasciicircum{}"),
    ],
)
def test_latex_escape(text: str, expected: str) -> None:
    assert latex_escape(text) == expected


def test_helpers() -> None:
    assert tikz_name("dev.net/2") == "dev-net-2"
    assert format_float(1.50000) == "1.5"
    assert format_float(-0.00001) == "0"
    assert hex_to_rgb("#1E40AF") == "30,64,175"
    with pytest.raises(ValueError):
        format_float(float("nan"))
