"""
Reduce a hand-drawn diagram to a canonical graph of atomic edges.

Every connector bent through waypoints w1..wn becomes the chain
source -> w1 -> ... -> wn -> target, with one fresh Vertex per waypoint.
Connectors whose endpoints do not resolve are dropped and reported.
"""

import uuid
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set, Tuple, Union

from ..geometry.primitives import Point, euclidean_distance
from ..utils.logger import get_logger
from .schema import CanonicalGraph, Edge, RawConnector, RawDiagram, Room, Vertex

logger = get_logger(__name__)

DEFAULT_ANCHOR_TOLERANCE = 0.5


@dataclass(frozen=True)
class DanglingConnector:
    connector_id: str
    source_id: Optional[str]
    target_id: Optional[str]
    missing_ids: Tuple[Optional[str], ...]


@dataclass(frozen=True)
class AnchorDivergence:
    """A connector drawn attached somewhere other than its room's anchor."""

    connector_id: str
    room_id: str
    anchor: Point
    drawn: Point
    offset: float


@dataclass
class NormalizationResult:
    graph: CanonicalGraph
    dangling: List[DanglingConnector] = field(default_factory=list)
    anchor_divergences: List[AnchorDivergence] = field(default_factory=list)
    duplicate_ids: List[str] = field(default_factory=list)
    minted_vertices: int = 0

    @property
    def dropped_count(self) -> int:
        return len(self.dangling)


def _uuid_factory() -> str:
    return str(uuid.uuid4())


def diagram_from_graph(graph: CanonicalGraph) -> RawDiagram:
    """
    View a canonical graph as a diagram whose connectors carry no waypoints.
    """
    cells = list(graph.rooms) + list(graph.vertices)
    cells += [RawConnector(id=e.id, source_id=e.source_id, target_id=e.target_id) for e in graph.edges]
    return RawDiagram(cells)


class _Normalizer:
    def __init__(self, diagram: RawDiagram, id_factory: Callable[[], str], anchor_tolerance: float):
        self.diagram = diagram
        self.id_factory = id_factory
        self.anchor_tolerance = anchor_tolerance
        self.used_ids: Set[str] = {c.id for c in diagram.list_cells()}
        self.seen: Set[int] = set()
        self.edges: List[Edge] = []
        self.minted: List[Vertex] = []
        self.dangling: List[DanglingConnector] = []
        self.divergences: List[AnchorDivergence] = []

    def fresh_id(self) -> str:
        new_id = self.id_factory()
        while new_id in self.used_ids:
            new_id = self.id_factory()
        self.used_ids.add(new_id)
        return new_id

    def run(self) -> NormalizationResult:
        for node in self.diagram.nodes():
            for conn in self.diagram.connected_connectors(node.id):
                self.process(conn)
        # connectors touching no known cell at all
        for conn in self.diagram.connectors():
            self.process(conn)

        duplicate_ids = []
        for shadowed in self.diagram.shadowed_nodes():
            duplicate_ids.append(shadowed.id)
            logger.warning("Dropping %s %s: id already used by an earlier cell", type(shadowed).__name__, shadowed.id)

        nodes = self.diagram.nodes()
        graph = CanonicalGraph(
            vertices=tuple(n for n in nodes if isinstance(n, Vertex)) + tuple(self.minted),
            rooms=tuple(n for n in nodes if isinstance(n, Room)),
            edges=tuple(self.edges),
        )
        logger.debug(
            "Normalized %d cells into %d rooms, %d vertices (%d minted), %d edges; %d dangling dropped",
            len(self.diagram),
            len(graph.rooms),
            len(graph.vertices),
            len(self.minted),
            len(graph.edges),
            len(self.dangling),
        )
        return NormalizationResult(
            graph=graph,
            dangling=self.dangling,
            anchor_divergences=self.divergences,
            duplicate_ids=duplicate_ids,
            minted_vertices=len(self.minted),
        )

    def process(self, conn: RawConnector) -> None:
        if id(conn) in self.seen:
            return
        self.seen.add(id(conn))

        source = self.diagram.get_node(conn.source_id)
        target = self.diagram.get_node(conn.target_id)
        if source is None or target is None:
            missing = tuple(
                end_id for end_id, node in ((conn.source_id, source), (conn.target_id, target)) if node is None
            )
            self.dangling.append(
                DanglingConnector(
                    connector_id=conn.id,
                    source_id=conn.source_id,
                    target_id=conn.target_id,
                    missing_ids=missing,
                )
            )
            logger.warning("Dropping connector %s: unresolved endpoint(s) %s", conn.id, list(missing))
            return

        self.check_anchor(conn, source, conn.source_point)
        self.check_anchor(conn, target, conn.target_point)

        if not conn.waypoints:
            self.edges.append(Edge(id=conn.id, source_id=source.id, target_id=target.id))
            return

        chain = [source.id]
        for waypoint in conn.waypoints:
            vertex = Vertex(id=self.fresh_id(), position=Point(waypoint.x, waypoint.y))
            self.minted.append(vertex)
            chain.append(vertex.id)
        chain.append(target.id)
        for a, b in zip(chain, chain[1:]):
            self.edges.append(Edge(id=self.fresh_id(), source_id=a, target_id=b))

    def check_anchor(self, conn: RawConnector, node, drawn: Optional[Point]) -> None:
        if drawn is None or not isinstance(node, Room):
            return
        offset = euclidean_distance(node.anchor, drawn)
        if offset > self.anchor_tolerance:
            self.divergences.append(
                AnchorDivergence(
                    connector_id=conn.id,
                    room_id=node.id,
                    anchor=node.anchor,
                    drawn=drawn,
                    offset=offset,
                )
            )
            logger.warning(
                "Connector %s is drawn %.2f away from the anchor of room %s (%r)",
                conn.id,
                offset,
                node.id,
                node.label,
            )


def normalize(
    diagram: Union[RawDiagram, CanonicalGraph],
    *,
    id_factory: Optional[Callable[[], str]] = None,
    anchor_tolerance: float = DEFAULT_ANCHOR_TOLERANCE,
) -> NormalizationResult:
    """
    Split every multi-waypoint connector into atomic edges.

    Never raises on diagram content: dangling connectors and anchor divergences
    are returned alongside the graph. Accepts an already-canonical graph, in
    which case the result is equal to the input.
    """
    if isinstance(diagram, CanonicalGraph):
        diagram = diagram_from_graph(diagram)
    return _Normalizer(diagram, id_factory or _uuid_factory, anchor_tolerance).run()
