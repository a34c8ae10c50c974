from .priority_queue import PriorityQueue
from .route_finder import (
    Neighbor,
    RouteResult,
    RouteStatus,
    build_adjacency,
    endpoint_position,
    find_route,
    resolve_room,
    route_points,
)

__all__ = [
    "PriorityQueue",
    "Neighbor",
    "RouteResult",
    "RouteStatus",
    "build_adjacency",
    "endpoint_position",
    "find_route",
    "resolve_room",
    "route_points",
]
