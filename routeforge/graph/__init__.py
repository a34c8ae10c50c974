from .schema import CanonicalGraph, Edge, RawConnector, RawDiagram, Room, Vertex
from .normalizer import AnchorDivergence, DanglingConnector, NormalizationResult, normalize
from .builder import load_diagram, parse_diagram_json, room_label_from_tag
from .exporter import from_json, load_graph, to_json, to_records, write_graph

__all__ = [
    "CanonicalGraph",
    "Edge",
    "RawConnector",
    "RawDiagram",
    "Room",
    "Vertex",
    "AnchorDivergence",
    "DanglingConnector",
    "NormalizationResult",
    "normalize",
    "load_diagram",
    "parse_diagram_json",
    "room_label_from_tag",
    "from_json",
    "load_graph",
    "to_json",
    "to_records",
    "write_graph",
]
