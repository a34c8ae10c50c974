"""
Exceptions raised by routeforge.

Normalization and routing report their outcomes as values; these are only for
input that cannot be read at all.
"""


class RouteforgeError(Exception):
    """Base exception for all routeforge errors."""
    pass


class ConfigurationError(RouteforgeError):
    """Raised when a configuration value cannot be interpreted."""
    pass


class DiagramFormatError(RouteforgeError, ValueError):
    """Raised when a diagram or export document is malformed."""
    pass
