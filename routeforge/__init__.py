from .config import RouteforgeConfig
from .graph import CanonicalGraph, NormalizationResult, RawDiagram, normalize, parse_diagram_json
from .pipeline import RoutePlanner
from .routing import RouteResult, RouteStatus, find_route

__all__ = [
    "RouteforgeConfig",
    "CanonicalGraph",
    "NormalizationResult",
    "RawDiagram",
    "normalize",
    "parse_diagram_json",
    "RoutePlanner",
    "RouteResult",
    "RouteStatus",
    "find_route",
]
