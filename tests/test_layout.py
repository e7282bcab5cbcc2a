import math

import pytest

from careergraph import CareerGraphEngine
from careergraph.catalog import Catalog, Position, load_catalog
from careergraph.layout import (
    LayoutNode,
    LayoutOptions,
    build_sector_table,
    clamp_box,
    find_overlaps,
    layout,
    place_nodes,
    resolve_collisions,
)
from careergraph.scoring import CROSS_FUNCTIONAL, INTERNAL, ScoringConfig, score

WIDTH, HEIGHT = 1000.0, 700.0


def _catalog() -> Catalog:
    return Catalog.from_positions(
        [
            Position("net", "Desenvolvedor .NET", "Pleno", "Tech", 8000, 12000),
            Position("back", "Backend Engineer", "Pleno", "Tech", 9000, 12000),
            Position("data", "Data Engineer", "Pleno", "Data", 8000, 12000),
            Position("zeta", "Zeta Engineer", "C-Level", "Other", 90000, 100000),
            Position("alpha", "Alpha Engineer", "C-Level", "Other", 90000, 100000),
        ]
    )


def _boxes_overlap(first: LayoutNode, second: LayoutNode) -> bool:
    left, top, right, bottom = first.bbox
    other_left, other_top, other_right, other_bottom = second.bbox
    return left < other_right and other_left < right and top < other_bottom and other_top < bottom


def _distance_from_canvas_center(node: LayoutNode) -> float:
    return math.hypot(node.center_x - WIDTH / 2.0, node.center_y - HEIGHT / 2.0)


def _assert_inside_canvas(nodes, width=WIDTH, height=HEIGHT):
    for node in nodes:
        assert node.x >= 0.0
        assert node.y >= 0.0
        assert node.x + node.width <= width
        assert node.y + node.height <= height


def test_center_node_is_anchored_at_canvas_center():
    catalog = load_catalog()
    visible = ["dev-net"] + [edge.target_id for edge in score("dev-net", catalog)[:4]]

    result = layout("dev-net", visible, catalog)

    center = result.node("dev-net")
    assert center is not None
    assert center.is_center
    assert (center.width, center.height) == (160.0, 80.0)
    assert center.center_x == pytest.approx(WIDTH / 2.0)
    assert center.center_y == pytest.approx(HEIGHT / 2.0)
    assert all(not node.is_center for node in result.nodes if node.id != "dev-net")
    assert all((node.width, node.height) == (140.0, 70.0) for node in result.nodes if not node.is_center)


def test_moderate_layout_has_no_overlaps():
    catalog = load_catalog()
    visible = ["dev-net"] + [edge.target_id for edge in score("dev-net", catalog)[:4]]

    result = layout("dev-net", visible, catalog)

    assert len(result.nodes) == 5
    assert result.converged
    for index, first in enumerate(result.nodes):
        for second in result.nodes[index + 1:]:
            assert not _boxes_overlap(first, second), (first.id, second.id)
    _assert_inside_canvas(result.nodes)


def test_dense_layout_stays_inside_canvas_and_terminates():
    catalog = load_catalog()

    result = layout("dev-net", list(catalog), catalog)

    assert len(result.nodes) == len(catalog)
    assert result.iterations <= LayoutOptions().max_iterations
    _assert_inside_canvas(result.nodes)


def test_bundled_show_all_layout_has_no_overlaps():
    catalog = load_catalog()
    engine = CareerGraphEngine(catalog)

    snapshot = engine.show_all()
    nodes = engine.get_layout()

    assert len(nodes) == len(snapshot.visible) == len(catalog)
    overlapping = [
        (first.id, second.id)
        for index, first in enumerate(nodes)
        for second in nodes[index + 1:]
        if _boxes_overlap(first, second)
    ]
    assert overlapping == []
    _assert_inside_canvas(nodes)


def test_layout_ignores_input_order():
    catalog = load_catalog()
    visible = list(catalog)[:10]

    forward = layout("dev-net", visible, catalog)
    backward = layout("dev-net", list(reversed(visible)), catalog)
    as_set = layout("dev-net", set(visible), catalog)

    assert forward.positions() == backward.positions()
    assert forward.positions() == as_set.positions()
    assert [node.id for node in forward.nodes] == [node.id for node in backward.nodes]


def test_nodes_follow_catalog_order():
    catalog = load_catalog()

    result = layout("tech-lead", ["cto", "dev-net", "tech-lead"], catalog)

    assert [node.id for node in result.nodes] == ["dev-net", "tech-lead", "cto"]


def test_unknown_ids_are_dropped():
    catalog = _catalog()

    result = layout("net", ["net", "ghost", "back"], catalog)

    assert [node.id for node in result.nodes] == ["net", "back"]
    assert result.dropped == ["ghost"]


def test_unknown_center_gives_centerless_layout():
    catalog = _catalog()

    result = layout("ghost", ["net", "back"], catalog)

    assert [node.id for node in result.nodes] == ["net", "back"]
    assert not any(node.is_center for node in result.nodes)
    assert "ghost" in result.dropped
    _assert_inside_canvas(result.nodes)


def test_empty_input_gives_empty_layout():
    result = layout("ghost", [], _catalog())

    assert result.nodes == []
    assert result.dropped == ["ghost"]


def test_center_is_always_included():
    result = layout("net", [], _catalog())

    assert [node.id for node in result.nodes] == ["net"]


def test_initial_placement_radii():
    catalog = _catalog()
    options = LayoutOptions()
    edges = score("net", catalog, ScoringConfig())

    nodes = place_nodes("net", list(catalog), catalog, edges, WIDTH, HEIGHT, options)
    by_id = {node.id: node for node in nodes}

    back, data = by_id["back"], by_id["data"]
    assert back.transition_kind == INTERNAL
    assert data.transition_kind == CROSS_FUNCTIONAL
    # base radius + score / 100 * gain
    assert _distance_from_canvas_center(back) == pytest.approx(200.0 + 0.79 * 40.0)
    assert _distance_from_canvas_center(data) == pytest.approx(280.0 + 0.60 * 40.0)
    assert _distance_from_canvas_center(back) < _distance_from_canvas_center(data)

    for fallback_id in ("zeta", "alpha"):
        node = by_id[fallback_id]
        assert node.score is None
        assert node.transition_kind is None
        assert _distance_from_canvas_center(node) == pytest.approx(options.fallback_radius)


def test_nodes_land_in_their_pillar_sector():
    catalog = _catalog()
    options = LayoutOptions()
    sectors = build_sector_table(catalog.pillars(), options.pillar_order)
    edges = score("net", catalog)

    nodes = place_nodes("net", list(catalog), catalog, edges, WIDTH, HEIGHT, options)

    for node in nodes:
        if node.score is None:
            continue
        angle = math.atan2(node.center_y - HEIGHT / 2.0, node.center_x - WIDTH / 2.0) % (2.0 * math.pi)
        start, end = sectors[node.pillar]
        assert start <= angle < end


def test_sector_table_partitions_full_turn():
    table = build_sector_table(["Tech", "Tecnologia", "Data"], LayoutOptions().pillar_order)

    pillars = list(table)
    assert pillars[:6] == list(LayoutOptions().pillar_order)
    assert pillars[6:] == ["Tech", "Data"]

    sectors = list(table.values())
    assert sectors[0][0] == 0.0
    assert sectors[-1][1] == pytest.approx(2.0 * math.pi)
    for (_, end), (start, _) in zip(sectors, sectors[1:]):
        assert end == pytest.approx(start)
    widths = [end - start for start, end in sectors]
    assert widths == pytest.approx([2.0 * math.pi / len(sectors)] * len(sectors))


def test_sector_table_empty():
    assert build_sector_table([], ()) == {}


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (-50.0, -50.0, (10.0, 10.0)),
        (950.0, 680.0, (850.0, 620.0)),
        (400.0, 300.0, (400.0, 300.0)),
    ],
)
def test_clamp_box(x, y, expected):
    assert clamp_box(x, y, 140.0, 70.0, WIDTH, HEIGHT, 10.0) == expected


def test_clamp_box_centres_when_canvas_is_too_small():
    assert clamp_box(5.0, 5.0, 140.0, 70.0, 100.0, 50.0, 10.0) == (0.0, 0.0)
    assert clamp_box(5.0, 5.0, 140.0, 70.0, 150.0, 200.0, 10.0) == (5.0, 10.0)


def test_find_overlaps_reports_sorted_pairs():
    nodes = [
        LayoutNode("a", 100.0, 100.0, 140.0, 70.0),
        LayoutNode("b", 600.0, 500.0, 140.0, 70.0),
        LayoutNode("c", 110.0, 105.0, 140.0, 70.0),
    ]

    assert find_overlaps(nodes, LayoutOptions()) == [(0, 2)]


def test_resolve_collisions_separates_coincident_nodes():
    nodes = [
        LayoutNode("a", 400.0, 300.0, 140.0, 70.0),
        LayoutNode("b", 400.0, 300.0, 140.0, 70.0),
    ]

    iterations, converged, nudged = resolve_collisions(nodes, WIDTH, HEIGHT, LayoutOptions())

    assert converged
    assert iterations == 1
    assert nudged == 0
    assert not _boxes_overlap(nodes[0], nodes[1])
    _assert_inside_canvas(nodes)


def test_resolve_collisions_keeps_center_fixed():
    center = LayoutNode("c", 420.0, 310.0, 160.0, 80.0, is_center=True)
    other = LayoutNode("o", 430.0, 315.0, 140.0, 70.0)

    resolve_collisions([center, other], WIDTH, HEIGHT, LayoutOptions())

    assert (center.x, center.y) == (420.0, 310.0)
    assert not _boxes_overlap(center, other)


def test_final_pass_nudges_remaining_stacks():
    options = LayoutOptions(max_iterations=0)
    nodes = [
        LayoutNode("a", 400.0, 300.0, 140.0, 70.0),
        LayoutNode("b", 400.0, 300.0, 140.0, 70.0),
    ]

    iterations, _, nudged = resolve_collisions(nodes, WIDTH, HEIGHT, options)

    assert iterations == 0
    assert nudged == 1
    # odd pair index moves along y
    assert nodes[1].x == pytest.approx(400.0)
    assert nodes[1].y == pytest.approx(380.0)


def test_single_node_needs_no_resolution():
    node = LayoutNode("a", 10.0, 10.0, 140.0, 70.0)

    assert resolve_collisions([node], WIDTH, HEIGHT, LayoutOptions()) == (0, True, 0)
