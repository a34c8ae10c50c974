from typing import Optional, Union

from ..config import RouteforgeConfig
from ..graph.exporter import to_json
from ..graph.normalizer import NormalizationResult, normalize
from ..graph.schema import CanonicalGraph, RawDiagram
from ..routing.route_finder import RouteResult, find_route
from ..utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


class RoutePlanner:
    """
    What the editor's "export" and "draw route" buttons call.
    """

    def __init__(self, config: Optional[RouteforgeConfig] = None):
        self.config = config or RouteforgeConfig()
        setup_logging(self.config.log_level)

    def normalize(self, diagram: Union[RawDiagram, CanonicalGraph]) -> NormalizationResult:
        result = normalize(diagram, anchor_tolerance=self.config.anchor_tolerance)
        if result.dangling:
            logger.warning("%d dangling connector(s) dropped during normalization", result.dropped_count)
        return result

    def export_json(self, diagram: Union[RawDiagram, CanonicalGraph]) -> str:
        return to_json(self.normalize(diagram).graph)

    def find_route(
        self,
        diagram: Union[RawDiagram, CanonicalGraph],
        start_label: str,
        end_label: str,
    ) -> RouteResult:
        graph = diagram if isinstance(diagram, CanonicalGraph) else self.normalize(diagram).graph
        result = find_route(
            graph,
            start_label,
            end_label,
            max_visits=self.config.max_visits,
            deadline_seconds=self.config.deadline_seconds,
        )
        logger.info("Route %r -> %r: %s", start_label, end_label, result.status.value)
        return result
