from .primitives import Point, bounding_box, euclidean_distance

__all__ = [
    "Point",
    "bounding_box",
    "euclidean_distance",
]
