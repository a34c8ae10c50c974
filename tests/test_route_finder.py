import itertools

from routeforge.geometry.primitives import Point
from routeforge.graph.normalizer import normalize
from routeforge.graph.schema import CanonicalGraph, Edge, RawConnector, RawDiagram, Room, Vertex
from routeforge.routing.route_finder import (
    RouteStatus,
    build_adjacency,
    endpoint_position,
    find_route,
    resolve_room,
)


def rooms(*specs):
    return tuple(Room(id=rid, label=rid.upper(), anchor=Point(x, y)) for rid, x, y in specs)


def abc_graph(extra_edges=()):
    return CanonicalGraph(
        rooms=rooms(("a", 0, 0), ("b", 5, 0), ("c", 5, 12)),
        edges=(Edge("ab", "a", "b"), Edge("bc", "b", "c")) + tuple(extra_edges),
    )


def test_direct_edge_weight_is_euclidean():
    graph = CanonicalGraph(rooms=rooms(("a", 0, 0), ("b", 3, 4)), edges=(Edge("ab", "a", "b"),))
    adjacency = build_adjacency(graph)
    assert adjacency["a"][0].weight == 5.0
    assert adjacency["b"][0].node_id == "a"


def test_shortest_path_through_intermediate_room():
    result = find_route(abc_graph(), "A", "C")
    assert result.status is RouteStatus.FOUND
    assert result.found
    assert result.path == ["a", "b", "c"]
    assert result.distance == 17.0


def test_shorter_direct_edge_wins():
    graph = CanonicalGraph(
        rooms=rooms(("a", 0, 0), ("b", 6, 0), ("c", 6, 8)),
        edges=(Edge("ab", "a", "b"), Edge("bc", "b", "c"), Edge("ac", "a", "c")),
    )
    result = find_route(graph, "A", "C")
    assert result.path == ["a", "c"]
    assert result.distance == 10.0


def test_edges_are_undirected():
    result = find_route(abc_graph(), "C", "A")
    assert result.path == ["c", "b", "a"]
    assert result.distance == 17.0


def test_missing_room():
    graph = CanonicalGraph(
        rooms=(Room("r1", "Room-1", Point(0, 0)),),
    )
    result = find_route(graph, "Room-404", "Room-1")
    assert result.status is RouteStatus.ROOM_NOT_FOUND
    assert result.missing_labels == ["Room-404"]
    assert result.path == []


def test_label_lookup_is_exact_and_case_sensitive():
    graph = abc_graph()
    assert resolve_room(graph, "a") is None
    assert resolve_room(graph, "A ") is None
    assert resolve_room(graph, "A").id == "a"
    result = find_route(graph, "a", "c")
    assert result.status is RouteStatus.ROOM_NOT_FOUND
    assert result.missing_labels == ["a", "c"]


def test_first_room_wins_on_duplicate_labels():
    graph = CanonicalGraph(
        rooms=(
            Room("first", "Hall", Point(0, 0)),
            Room("second", "Hall", Point(100, 0)),
            Room("target", "Exit", Point(1, 0)),
        ),
        edges=(Edge("e1", "first", "target"), Edge("e2", "second", "target")),
    )
    result = find_route(graph, "Hall", "Exit")
    assert result.path == ["first", "target"]


def test_disconnected_graph_has_no_path():
    graph = CanonicalGraph(rooms=rooms(("a", 0, 0), ("b", 1, 1)))
    result = find_route(graph, "A", "B")
    assert result.status is RouteStatus.NO_PATH
    assert result.path == []
    assert result.to_dict()["distance"] is None


def test_same_start_and_end():
    result = find_route(abc_graph(), "B", "B")
    assert result.path == ["b"]
    assert result.distance == 0.0


def test_equal_cost_routes_break_ties_by_lowest_id():
    square = rooms(("a", 0, 0), ("b", 1, 0), ("c", 1, 1), ("d", 0, 1))
    edges = (Edge("ad", "a", "d"), Edge("dc", "d", "c"), Edge("ab", "a", "b"), Edge("bc", "b", "c"))
    forward = find_route(CanonicalGraph(rooms=square, edges=edges), "A", "C")
    backward = find_route(CanonicalGraph(rooms=square, edges=tuple(reversed(edges))), "A", "C")
    assert forward.path == ["a", "b", "c"]
    assert backward.path == ["a", "b", "c"]


def test_self_loops_and_zero_length_edges_terminate():
    graph = CanonicalGraph(
        rooms=rooms(("a", 0, 0), ("b", 4, 0)),
        vertices=(Vertex("v", Point(0, 0)),),
        edges=(Edge("loop", "v", "v"), Edge("zero", "a", "v"), Edge("vb", "v", "b")),
    )
    assert len(build_adjacency(graph)["v"]) == 3
    result = find_route(graph, "A", "B")
    assert result.path == ["a", "v", "b"]
    assert result.distance == 4.0


def test_route_through_normalized_bend_points():
    counter = itertools.count(1)
    diagram = RawDiagram(
        [
            Room("r1", "Room-1", Point(0, 0)),
            Room("r2", "Room-2", Point(10, 10)),
            RawConnector("c1", "r1", "r2", waypoints=(Point(10, 0),)),
        ]
    )
    graph = normalize(diagram, id_factory=lambda: f"n{next(counter)}").graph
    result = find_route(graph, "Room-1", "Room-2")
    assert result.path == ["r1", "n1", "r2"]
    assert result.distance == 20.0


def test_room_weights_use_anchor_not_drawn_point():
    diagram = RawDiagram(
        [
            Room("r1", "Room-1", Point(0, 0)),
            Room("r2", "Room-2", Point(3, 4)),
            RawConnector("c1", "r1", "r2", source_point=Point(-30, 0), target_point=Point(3, 40)),
        ]
    )
    normalized = normalize(diagram)
    assert len(normalized.anchor_divergences) == 2
    assert endpoint_position(normalized.graph, "r2") == Point(3, 4)
    assert find_route(normalized.graph, "Room-1", "Room-2").distance == 5.0


def test_grid_distance_matches_manhattan_length():
    size = 30
    vertices = []
    edges = []

    def nid(i, j):
        return f"v{i:02d}_{j:02d}"

    for i in range(size):
        for j in range(size):
            vertices.append(Vertex(nid(i, j), Point(i, j)))
            if i + 1 < size:
                edges.append(Edge(f"h{i}_{j}", nid(i, j), nid(i + 1, j)))
            if j + 1 < size:
                edges.append(Edge(f"v{i}_{j}", nid(i, j), nid(i, j + 1)))
    corner_rooms = (Room("start", "Start", Point(0, 0)), Room("end", "End", Point(size - 1, size - 1)))
    edges.append(Edge("in", "start", nid(0, 0)))
    edges.append(Edge("out", nid(size - 1, size - 1), "end"))
    graph = CanonicalGraph(vertices=tuple(vertices), rooms=corner_rooms, edges=tuple(edges))

    result = find_route(graph, "Start", "End")
    assert result.found
    assert result.distance == 2.0 * (size - 1)
    assert len(result.path) == 2 * (size - 1) + 3


def test_visit_cap_aborts_search():
    result = find_route(abc_graph(), "A", "C", max_visits=1)
    assert result.status is RouteStatus.LIMIT_EXCEEDED
    assert result.visited == 1


def test_visit_cap_allows_reaching_end_on_last_visit():
    result = find_route(abc_graph(), "A", "C", max_visits=3)
    assert result.found


def test_deadline_aborts_search():
    ticks = itertools.count(0, 10)
    result = find_route(abc_graph(), "A", "C", deadline_seconds=1.0, clock=lambda: next(ticks))
    assert result.status is RouteStatus.LIMIT_EXCEEDED
    assert result.visited == 0
