import cv2  # type: ignore
import numpy as np
import pytest

from routeforge.geometry.primitives import Point
from routeforge.geometry.visualize import draw_graph
from routeforge.graph.schema import CanonicalGraph, Edge, Room, Vertex


def small_graph():
    return CanonicalGraph(
        rooms=(Room("r1", "Room-1", Point(0, 0)), Room("r2", "Room-2", Point(100, 50))),
        vertices=(Vertex("v1", Point(100, 0)),),
        edges=(Edge("e1", "r1", "v1"), Edge("e2", "v1", "r2")),
    )


def test_draw_graph_on_blank_canvas(tmp_path):
    out = draw_graph(small_graph(), str(tmp_path / "nested" / "route.png"), route=["r1", "v1", "r2"])
    img = cv2.imread(out)
    assert img is not None
    # 100x50 graph plus a 40px margin on each side
    assert img.shape == (130, 180, 3)
    assert (img != 255).any()


def test_draw_graph_over_background(tmp_path):
    background = str(tmp_path / "plan.png")
    cv2.imwrite(background, np.full((200, 300, 3), 240, dtype=np.uint8))
    out = draw_graph(small_graph(), str(tmp_path / "overlay.png"), image_path=background)
    assert cv2.imread(out).shape == (200, 300, 3)


def test_unreadable_background_raises(tmp_path):
    with pytest.raises(ValueError):
        draw_graph(small_graph(), str(tmp_path / "x.png"), image_path=str(tmp_path / "missing.png"))
