import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from careergraph import (
    CareerGraphEngine,
    CatalogError,
    LayoutOptions,
    MissingCatalogEntry,
    ScoringConfig,
    generate_tikz_document,
    load_catalog,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _format_salary_delta(delta: int) -> str:
    if delta == 0:
        return "same pay"
    return f"{delta:+,d}"


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Explore a career transition graph")
    parser.add_argument(
        "--catalog",
        help="Path to a JSON position catalog (default: bundled sample)",
    )
    parser.add_argument(
        "--start",
        help="Initial position id (default: dev-net or the first catalog entry)",
    )
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="ID",
        help="Expand a position; repeat to expand several in order",
    )
    parser.add_argument(
        "--focus",
        metavar="ID",
        help="Show only the start position plus the career path of ID (applied after --expand)",
    )
    parser.add_argument(
        "--show-all",
        action="store_true",
        help="Reveal every position with at least one transition",
    )
    parser.add_argument(
        "--search",
        help="Case-insensitive search across titles, pillars, levels and requirements",
    )
    parser.add_argument(
        "--expand-limit",
        type=int,
        default=None,
        help="Reveal at most N transitions per expansion (default: all)",
    )
    parser.add_argument(
        "--bonuses",
        action="store_true",
        help="Enable the skill/connection/demand bonus factors",
    )
    parser.add_argument("--width", type=float, default=1000.0, help="Canvas width (default: 1000)")
    parser.add_argument("--height", type=float, default=700.0, help="Canvas height (default: 700)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document of the final layout to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        catalog = load_catalog(args.catalog)
    except (OSError, CatalogError) as exc:
        logger.error("Cannot load catalog: %s", exc)
        raise SystemExit(1)

    try:
        engine = CareerGraphEngine(
            catalog,
            args.start,
            scoring=ScoringConfig(enable_bonuses=args.bonuses),
            layout_options=LayoutOptions(),
            canvas=(args.width, args.height),
            expand_limit=args.expand_limit,
        )
    except MissingCatalogEntry as exc:
        logger.error("Invalid start position: %s", exc)
        raise SystemExit(1)

    for node_id in args.expand:
        engine.expand(node_id)
    if args.focus:
        engine.focus_path(args.focus)
    if args.show_all:
        engine.show_all()

    snapshot = engine.get_visibility_snapshot()
    center = snapshot.center

    print(f"Center: {center}")
    edges = engine.get_scored_edges(center) if center else []
    status = engine.node_status(center) if center else "missing"
    print(f"Transitions ({len(edges)}):")
    if not edges:
        print("  (none - terminal position)" if status == "terminal" else "  (none)")
    for edge in edges:
        title = catalog[edge.target_id].title
        print(
            f"  {edge.score:3d}  {edge.target_id} ({title}) [{edge.transition_kind}] "
            f"{_format_salary_delta(edge.salary_delta)} - {', '.join(edge.reasons)}"
        )

    result = engine.layout_result()
    print(f"Layout ({len(result.nodes)} nodes, iterations={result.iterations}, converged={result.converged}):")
    for node in result.nodes:
        marker = "*" if node.is_center else " "
        print(f" {marker}{node.id}: ({node.x:.1f}, {node.y:.1f}) {node.width:.0f}x{node.height:.0f}")

    print(f"Visible: {', '.join(snapshot.visible)}")
    print(f"Visited: {', '.join(snapshot.visited)}")

    if args.search is not None:
        matches: List = engine.search(args.search)
        print(f"Search '{args.search}' ({len(matches)}):")
        for position in matches:
            print(f"  {position.id}: {position.title} ({position.level}, {position.pillar})")

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        document = generate_tikz_document(
            result.nodes,
            engine.get_visible_edges(),
            catalog,
            canvas_height=args.height,
        )
        output_path.write_text(document, encoding="utf-8")
        print(f"TikZ document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
