import os
from typing import Callable, List, Optional, Tuple

import cv2  # type: ignore
import numpy as np

from ..graph.schema import CanonicalGraph
from ..routing.route_finder import endpoint_position, route_points
from .primitives import Point, bounding_box


def _kind_color(kind: str) -> Tuple[int, int, int]:
    """
    BGR colors for visibility on light floor-plan backgrounds.
    """
    mapping = {
        "room": (0, 0, 220),       # red
        "vertex": (200, 120, 0),   # blue-ish
        "edge": (120, 120, 120),   # grey
        "route": (0, 160, 0),      # green
    }
    return mapping.get(kind, (0, 220, 220))


def _blank_canvas(graph: CanonicalGraph, scale: float, margin: int) -> Tuple[np.ndarray, Callable[[Point], Tuple[int, int]]]:
    points = [r.anchor for r in graph.rooms] + [v.position for v in graph.vertices]
    x1, y1, x2, y2 = bounding_box(points)
    ox, oy = min(x1, 0.0), min(y1, 0.0)
    width = int((x2 - ox) * scale) + 2 * margin
    height = int((y2 - oy) * scale) + 2 * margin
    img = np.full((max(height, 1), max(width, 1), 3), 255, dtype=np.uint8)

    def project(p: Point) -> Tuple[int, int]:
        return (int(round((p.x - ox) * scale)) + margin, int(round((p.y - oy) * scale)) + margin)

    return img, project


def draw_graph(
    graph: CanonicalGraph,
    output_path: str,
    route: Optional[List[str]] = None,
    image_path: Optional[str] = None,
    scale: float = 1.0,
    margin: int = 40,
) -> str:
    """
    Render edges, rooms, bend vertices and an optional route (list of node ids).

    Draws over `image_path` when given (coordinates are taken as pixels of that
    image), otherwise on a white canvas sized to the graph.
    """
    if image_path:
        img = cv2.imread(image_path)
        if img is None:
            raise ValueError(f"Cannot read image: {image_path}")

        def project(p: Point) -> Tuple[int, int]:
            return (int(round(p.x * scale)), int(round(p.y * scale)))

    else:
        img, project = _blank_canvas(graph, scale, margin)

    for edge in graph.edges:
        a = endpoint_position(graph, edge.source_id)
        b = endpoint_position(graph, edge.target_id)
        if a is None or b is None:
            continue
        cv2.line(img, project(a), project(b), _kind_color("edge"), 1, lineType=cv2.LINE_AA)

    for vertex in graph.vertices:
        cv2.circle(img, project(vertex.position), 3, _kind_color("vertex"), -1, lineType=cv2.LINE_AA)

    for room in graph.rooms:
        center = project(room.anchor)
        cv2.circle(img, center, 8, _kind_color("room"), 2, lineType=cv2.LINE_AA)
        if room.label:
            label = (room.label[:24] + "...") if len(room.label) > 24 else room.label
            cv2.putText(
                img,
                label,
                (center[0] + 10, max(0, center[1] - 10)),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.5,
                (50, 50, 50),
                1,
                lineType=cv2.LINE_AA,
            )

    if route:
        pts = [project(p) for p in route_points(graph, route)]
        if len(pts) >= 2:
            poly = np.array(pts, dtype=np.int32).reshape((-1, 1, 2))
            cv2.polylines(img, [poly], False, _kind_color("route"), 3, lineType=cv2.LINE_AA)
            cv2.arrowedLine(img, pts[-2], pts[-1], _kind_color("route"), 3, tipLength=0.2, line_type=cv2.LINE_AA)

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    cv2.imwrite(output_path, img)
    return output_path
