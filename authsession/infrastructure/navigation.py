"""History Navigator — Navigator implementation that records route transitions.

Invariants:
    - navigate() appends to history; current_route is the last entry
    - history keeps at most max_history routes, oldest dropped first
    - Starts at the configured initial route (default "/")
"""

import logging
from collections import deque

logger = logging.getLogger(__name__)

MAX_HISTORY = 50


class HistoryNavigator:
    """In-process route history for hosts without their own router."""

    def __init__(self, initial_route: str = "/", max_history: int = MAX_HISTORY):
        self.history: deque[str] = deque([initial_route], maxlen=max_history)

    @property
    def current_route(self) -> str:
        return self.history[-1]

    def navigate(self, route: str) -> None:
        logger.info(f"Navigate {self.current_route} -> {route}", extra={"route": route})
        self.history.append(route)
