from .route_planner import RoutePlanner

__all__ = ["RoutePlanner"]
