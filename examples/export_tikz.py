"""Example: lay out every connected position and write a TikZ document."""

from pathlib import Path

from careergraph import CareerGraphEngine, ScoringConfig, generate_tikz_document, load_catalog


def main() -> None:
    catalog = load_catalog()
    engine = CareerGraphEngine(catalog, "analista-dados", scoring=ScoringConfig(enable_bonuses=True))
    engine.expand("analista-dados")
    engine.show_all()

    nodes = engine.get_layout()
    document = generate_tikz_document(nodes, engine.get_visible_edges(), catalog)

    output = Path("career_graph.tex")
    output.write_text(document, encoding="utf-8")
    print(f"Wrote {len(nodes)} nodes to {output}")


if __name__ == "__main__":
    main()
