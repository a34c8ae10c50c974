import json
import os

import pytest

from routeforge.config import RouteforgeConfig
from routeforge.graph.builder import load_diagram
from routeforge.graph.exporter import from_json
from routeforge.pipeline.route_planner import RoutePlanner
from routeforge.routing.route_finder import RouteStatus

SAMPLE = os.path.join(os.path.dirname(os.path.dirname(__file__)), "examples", "sample_floor.json")


@pytest.fixture
def planner():
    return RoutePlanner(RouteforgeConfig(max_visits=None, deadline_seconds=None, log_level="WARNING"))


def test_normalize_reports_dangling_connector(planner):
    result = planner.normalize(load_diagram(SAMPLE))
    assert [d.connector_id for d in result.dangling] == ["l5"]
    assert result.minted_vertices == 5
    # l1 (1 bend) + l2 + l3 (2 bends) + l4 (2 bends)
    assert len(result.graph.edges) == 2 + 1 + 3 + 3


def test_export_json_is_canonical(planner):
    text = planner.export_json(load_diagram(SAMPLE))
    graph = from_json(text)
    assert len(graph.rooms) == 4
    assert all("vertices" not in cell for cell in json.loads(text)["cells"])


def test_find_route_on_diagram(planner):
    result = planner.find_route(load_diagram(SAMPLE), "Lobby", "Room-102")
    assert result.status is RouteStatus.FOUND
    assert result.path[0] == "lobby"
    assert result.path[-1] == "r102"
    assert "hall" in result.path
    assert "r101" in result.path
    assert len(result.path) == 7


def test_find_route_on_exported_graph_matches(planner):
    diagram = load_diagram(SAMPLE)
    graph = from_json(planner.export_json(diagram))
    direct = planner.find_route(diagram, "Lobby", "Room-103")
    exported = planner.find_route(graph, "Lobby", "Room-103")
    assert direct.found and exported.found
    assert direct.distance == pytest.approx(exported.distance)


def test_unknown_room(planner):
    result = planner.find_route(load_diagram(SAMPLE), "Lobby", "Room-404")
    assert result.status is RouteStatus.ROOM_NOT_FOUND
    assert result.missing_labels == ["Room-404"]


def test_configured_visit_cap_applies():
    planner = RoutePlanner(RouteforgeConfig(max_visits=2, log_level="WARNING"))
    result = planner.find_route(load_diagram(SAMPLE), "Lobby", "Room-102")
    assert result.status is RouteStatus.LIMIT_EXCEEDED
