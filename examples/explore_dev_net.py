"""Example session: expand a few positions and print edges and layout."""

from careergraph import CareerGraphEngine, load_catalog

PATH = ["dev-net", "dev-backend", "tech-lead"]


def main() -> None:
    catalog = load_catalog()
    engine = CareerGraphEngine(catalog, "dev-net", expand_limit=4)

    for node_id in PATH:
        snapshot = engine.expand(node_id)
        print(f"Expanded {node_id}: {len(snapshot.visible)} visible")
        for edge in engine.get_scored_edges(node_id)[:4]:
            print(f"  {edge.score:3d} -> {catalog[edge.target_id].title} ({', '.join(edge.reasons)})")

    result = engine.layout_result()
    print(f"\nLayout around {engine.get_visibility_snapshot().center}")
    print(f"Iterations: {result.iterations}, converged: {result.converged}")
    for node in result.nodes:
        print(f"{node.id}: ({node.x:.1f}, {node.y:.1f})")


if __name__ == "__main__":
    main()
