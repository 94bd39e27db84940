"""
Sequential Id Generator

Hands out decimal counter strings ("1", "2", ...). The counter is guarded by
a lock so ids stay distinct when requests are served from worker threads.
"""

import itertools
import logging
import threading

from restaurant_api.services.ids.base import BaseIdGenerator

logger = logging.getLogger(__name__)


class SequentialIdGenerator(BaseIdGenerator):
    """
    Counter-backed id generator.

    Attributes:
        start: First id handed out
    """

    def __init__(self, start: int = 1):
        if start < 0:
            raise ValueError("start must be >= 0")
        self.start = start
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

        logger.debug(f"SequentialIdGenerator initialized (start={start})")

    @property
    def strategy_name(self) -> str:
        return "sequential"

    def next_id(self) -> str:
        with self._lock:
            return str(next(self._counter))
