# routeforge/geometry/primitives.py

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class Point:
    """
    An immutable 2D position on the floor-plan canvas.
    """

    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y}

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def bounding_box(points: Iterable[Point]) -> Tuple[float, float, float, float]:
    """
    (x1, y1, x2, y2) covering all points; (0, 0, 0, 0) when empty.
    """
    xs = []
    ys = []
    for p in points:
        xs.append(p.x)
        ys.append(p.y)
    if not xs:
        return (0.0, 0.0, 0.0, 0.0)
    return (min(xs), min(ys), max(xs), max(ys))
