from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..geometry.primitives import Point


@dataclass(frozen=True)
class Vertex:
    id: str
    position: Point


@dataclass(frozen=True)
class Room:
    id: str
    label: str
    anchor: Point


@dataclass(frozen=True)
class RawConnector:
    """
    A user-drawn path between two cells, bent at `waypoints` (source -> target order).

    `source_point` / `target_point` are where the path was drawn attached to its
    endpoints on the canvas; they are diagnostics only and never used as weights.
    """

    id: str
    source_id: Optional[str]
    target_id: Optional[str]
    waypoints: Tuple[Point, ...] = ()
    source_point: Optional[Point] = None
    target_point: Optional[Point] = None


@dataclass(frozen=True)
class Edge:
    id: str
    source_id: str
    target_id: str


Node = Union[Room, Vertex]
Cell = Union[Room, Vertex, RawConnector]


class RawDiagram:
    """
    Read-only snapshot of the editable diagram.
    """

    def __init__(self, cells: Iterable[Cell]):
        self._cells: Tuple[Cell, ...] = tuple(cells)
        self._nodes: Dict[str, Node] = {}
        self._touching: Dict[str, List[RawConnector]] = {}
        self._shadowed: List[Node] = []
        for cell in self._cells:
            if isinstance(cell, RawConnector):
                for end_id in (cell.source_id, cell.target_id):
                    if end_id is None:
                        continue
                    bucket = self._touching.setdefault(end_id, [])
                    # self-loops touch their cell once
                    if not bucket or bucket[-1] is not cell:
                        bucket.append(cell)
            elif cell.id in self._nodes:
                self._shadowed.append(cell)
            else:
                self._nodes[cell.id] = cell

    def list_cells(self) -> Tuple[Cell, ...]:
        return self._cells

    def connected_connectors(self, cell_id: str) -> Tuple[RawConnector, ...]:
        return tuple(self._touching.get(cell_id, ()))

    def shadowed_nodes(self) -> List[Node]:
        """
        Rooms and vertices hidden by an earlier cell with the same id.
        """
        return list(self._shadowed)

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def connectors(self) -> List[RawConnector]:
        return [c for c in self._cells if isinstance(c, RawConnector)]

    def get_node(self, cell_id: Optional[str]) -> Optional[Node]:
        if cell_id is None:
            return None
        return self._nodes.get(cell_id)

    def __len__(self) -> int:
        return len(self._cells)


@dataclass(frozen=True, eq=False)
class CanonicalGraph:
    """
    Normalized graph of rooms, vertices and atomic edges; the only input to routing.

    Ordering of each collection is kept (rooms in diagram order, minted vertices
    last) but equality ignores it.
    """

    vertices: Tuple[Vertex, ...] = ()
    rooms: Tuple[Room, ...] = ()
    edges: Tuple[Edge, ...] = ()
    _index: Dict[str, Node] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        index: Dict[str, Node] = {}
        for node in list(self.rooms) + list(self.vertices):
            index.setdefault(node.id, node)
        object.__setattr__(self, "_index", index)

    def node(self, node_id: str) -> Optional[Node]:
        return self._index.get(node_id)

    def node_ids(self) -> List[str]:
        return list(self._index.keys())

    def duplicate_labels(self) -> Dict[str, List[str]]:
        """
        {label: [room ids]} for labels shared by more than one room.
        """
        seen: Dict[str, List[str]] = {}
        for room in self.rooms:
            seen.setdefault(room.label, []).append(room.id)
        return {label: ids for label, ids in seen.items() if len(ids) > 1}

    def _key(self):
        return (frozenset(self.vertices), frozenset(self.rooms), frozenset(self.edges))

    def __eq__(self, other):
        if not isinstance(other, CanonicalGraph):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())
