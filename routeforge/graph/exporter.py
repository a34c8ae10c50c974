import json
from typing import Any, Dict, List, Union

from ..geometry.primitives import Point
from .schema import CanonicalGraph, Edge, Room, Vertex
from .schemas import EdgeRecord, RoomRecord, VertexRecord, validate_document_json


def to_records(graph: CanonicalGraph) -> List[Dict[str, Any]]:
    """
    Flat typed records: rooms, then vertices, then edges. Edges never carry waypoints.

    Room records carry `label` on top of {id, type, x, y} so an exported file
    can be routed over again.
    """
    records: List[Dict[str, Any]] = []
    for room in graph.rooms:
        records.append(
            {
                "id": room.id,
                "type": "Room",
                "x": float(room.anchor.x),
                "y": float(room.anchor.y),
                "label": room.label,
            }
        )
    for vertex in graph.vertices:
        records.append({"id": vertex.id, "type": "Vertex", "x": float(vertex.position.x), "y": float(vertex.position.y)})
    for edge in graph.edges:
        records.append(
            {
                "id": edge.id,
                "type": "Edge",
                "source": {"id": edge.source_id},
                "target": {"id": edge.target_id},
            }
        )
    return records


def to_json(graph: CanonicalGraph) -> str:
    return json.dumps({"cells": to_records(graph)}, indent=2, ensure_ascii=False)


def from_json(raw_json: Union[str, Dict[str, Any]]) -> CanonicalGraph:
    """
    Read an exported document back into a CanonicalGraph (validated with pydantic).
    """
    document = validate_document_json(raw_json)
    rooms = []
    vertices = []
    edges = []
    for cell in document.cells:
        if isinstance(cell, RoomRecord):
            rooms.append(Room(id=cell.id, label=cell.label, anchor=Point(cell.x, cell.y)))
        elif isinstance(cell, VertexRecord):
            vertices.append(Vertex(id=cell.id, position=Point(cell.x, cell.y)))
        elif isinstance(cell, EdgeRecord):
            edges.append(Edge(id=cell.id, source_id=cell.source.id, target_id=cell.target.id))
    return CanonicalGraph(vertices=tuple(vertices), rooms=tuple(rooms), edges=tuple(edges))


def write_graph(graph: CanonicalGraph, path: str) -> str:
    with open(path, "w", encoding="utf-8") as dest:
        dest.write(to_json(graph))
    return path


def load_graph(path: str) -> CanonicalGraph:
    with open(path, "r", encoding="utf-8") as f:
        return from_json(f.read())
