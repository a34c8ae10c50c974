import os
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


def _env_number(name: str, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


class RouteforgeConfig:
    """
    Central configuration object.

    Search bounds default to unbounded; a server deployment should set
    ROUTEFORGE_MAX_VISITS and/or ROUTEFORGE_DEADLINE_SECONDS.
    """

    def __init__(
        self,
        max_visits: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
        anchor_tolerance: Optional[float] = None,
        log_level: Optional[str] = None,
    ):
        # Fallback to env if not provided
        self.max_visits = max_visits if max_visits is not None else _env_number("ROUTEFORGE_MAX_VISITS", int)
        self.deadline_seconds = (
            deadline_seconds if deadline_seconds is not None else _env_number("ROUTEFORGE_DEADLINE_SECONDS", float)
        )
        if anchor_tolerance is None:
            anchor_tolerance = _env_number("ROUTEFORGE_ANCHOR_TOLERANCE", float)
        self.anchor_tolerance = 0.5 if anchor_tolerance is None else anchor_tolerance
        self.log_level = log_level or os.getenv("ROUTEFORGE_LOG_LEVEL", "INFO")

        if self.max_visits is not None and self.max_visits <= 0:
            raise ConfigurationError("max_visits must be positive")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ConfigurationError("deadline_seconds must be positive")
        if self.anchor_tolerance < 0:
            raise ConfigurationError("anchor_tolerance must not be negative")
