"""
Shortest route between two labelled rooms of a canonical graph.

Edges are undirected and weighted by the Euclidean distance between their
endpoint positions (room anchor or vertex position). The search is Dijkstra
over a binary heap with lazy deletion of stale entries.
"""

import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..geometry.primitives import Point, euclidean_distance
from ..graph.schema import CanonicalGraph, Room, Vertex
from ..utils.logger import get_logger
from .priority_queue import PriorityQueue

logger = get_logger(__name__)

INFINITY = math.inf


class RouteStatus(str, Enum):
    FOUND = "found"
    NO_PATH = "no_path"
    ROOM_NOT_FOUND = "room_not_found"
    LIMIT_EXCEEDED = "limit_exceeded"


@dataclass
class RouteResult:
    status: RouteStatus
    path: List[str] = field(default_factory=list)
    distance: float = INFINITY
    missing_labels: List[str] = field(default_factory=list)
    visited: int = 0

    @property
    def found(self) -> bool:
        return self.status is RouteStatus.FOUND

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "path": list(self.path),
            "distance": self.distance if self.found else None,
            "missing_labels": list(self.missing_labels),
            "visited": self.visited,
        }


@dataclass(frozen=True)
class Neighbor:
    node_id: str
    weight: float
    edge_id: str


def resolve_room(graph: CanonicalGraph, label: str) -> Optional[Room]:
    """
    First room (in graph order) whose label matches exactly, case-sensitive.
    """
    for room in graph.rooms:
        if room.label == label:
            return room
    return None


def endpoint_position(graph: CanonicalGraph, node_id: str) -> Optional[Point]:
    node = graph.node(node_id)
    if isinstance(node, Room):
        return node.anchor
    if isinstance(node, Vertex):
        return node.position
    return None


def build_adjacency(graph: CanonicalGraph) -> Dict[str, List[Neighbor]]:
    adjacency: Dict[str, List[Neighbor]] = {node_id: [] for node_id in graph.node_ids()}
    for edge in graph.edges:
        a = endpoint_position(graph, edge.source_id)
        b = endpoint_position(graph, edge.target_id)
        if a is None or b is None:
            logger.warning("Skipping edge %s with an unknown endpoint", edge.id)
            continue
        weight = euclidean_distance(a, b)
        adjacency[edge.source_id].append(Neighbor(edge.target_id, weight, edge.id))
        if edge.target_id != edge.source_id:
            adjacency[edge.target_id].append(Neighbor(edge.source_id, weight, edge.id))
    return adjacency


def route_points(graph: CanonicalGraph, path: List[str]) -> List[Point]:
    points = []
    for node_id in path:
        p = endpoint_position(graph, node_id)
        if p is not None:
            points.append(p)
    return points


def find_route(
    graph: CanonicalGraph,
    start_label: str,
    end_label: str,
    *,
    max_visits: Optional[int] = None,
    deadline_seconds: Optional[float] = None,
    clock: Callable[[], float] = time.monotonic,
) -> RouteResult:
    """
    Shortest path from the room labelled `start_label` to the one labelled `end_label`.

    Returns a RouteResult tagged FOUND (path of node ids, start first),
    NO_PATH, ROOM_NOT_FOUND, or LIMIT_EXCEEDED when `max_visits` nodes were
    finalized or `deadline_seconds` elapsed before reaching the end room.
    """
    start = resolve_room(graph, start_label)
    end = resolve_room(graph, end_label)
    if start is None or end is None:
        missing = [label for label, room in ((start_label, start), (end_label, end)) if room is None]
        logger.info("Route query failed, no room labelled %s", missing)
        return RouteResult(status=RouteStatus.ROOM_NOT_FOUND, missing_labels=missing)

    adjacency = build_adjacency(graph)
    distance: Dict[str, float] = {node_id: INFINITY for node_id in adjacency}
    previous: Dict[str, Optional[str]] = {node_id: None for node_id in adjacency}
    distance[start.id] = 0.0

    queue: PriorityQueue[str] = PriorityQueue()
    for node_id in adjacency:
        queue.enqueue(node_id, distance[node_id])

    deadline_at = clock() + deadline_seconds if deadline_seconds is not None else None
    visited = set()
    while not queue.is_empty():
        current, current_distance = queue.dequeue_min()
        if current in visited:
            continue
        if current_distance == INFINITY:
            # everything left is unreachable from start
            break
        if deadline_at is not None and clock() > deadline_at:
            logger.warning("Route search %r -> %r hit its %.3fs deadline", start_label, end_label, deadline_seconds)
            return RouteResult(status=RouteStatus.LIMIT_EXCEEDED, visited=len(visited))

        visited.add(current)
        if current == end.id:
            path = []
            step: Optional[str] = end.id
            while step is not None:
                path.append(step)
                step = previous[step]
            path.reverse()
            return RouteResult(
                status=RouteStatus.FOUND,
                path=path,
                distance=current_distance,
                visited=len(visited),
            )
        if max_visits is not None and len(visited) >= max_visits:
            logger.warning("Route search %r -> %r gave up after %d nodes", start_label, end_label, len(visited))
            return RouteResult(status=RouteStatus.LIMIT_EXCEEDED, visited=len(visited))

        for neighbor in adjacency[current]:
            if neighbor.node_id in visited:
                continue
            tentative = current_distance + neighbor.weight
            if tentative < distance[neighbor.node_id]:
                distance[neighbor.node_id] = tentative
                previous[neighbor.node_id] = current
                queue.enqueue(neighbor.node_id, tentative)

    return RouteResult(status=RouteStatus.NO_PATH, visited=len(visited))
