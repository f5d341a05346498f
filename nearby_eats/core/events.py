"""Minimal synchronous publish/subscribe used to chain location and search."""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

COORDINATES_SET = "coordinates-set"

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def publish(self, event: str, payload: Any = None) -> None:
        """Call every handler of ``event`` in subscription order, on the caller's thread."""
        handlers = list(self._handlers.get(event, ()))
        logger.debug("Publishing %s to %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(payload)
