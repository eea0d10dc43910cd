import logging
import threading
from datetime import datetime, timezone
from typing import Optional, Tuple

from ..models.resources import ClusterMetrics

logger = logging.getLogger(__name__)


class LastResultCache:
    """
    Holds the most recently computed ClusterMetrics, last write wins.

    A reader always gets either the previous or the new complete result,
    never a mix: the slot is replaced as a whole under a lock and the stored
    model is immutable.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[ClusterMetrics] = None
        self._updated_at: Optional[datetime] = None

    def set(self, metrics: ClusterMetrics) -> None:
        with self._lock:
            self._value = metrics
            self._updated_at = datetime.now(timezone.utc)
        logger.debug("Cached cluster metrics for %d node(s).", len(metrics.nodes))

    def get(self) -> Optional[ClusterMetrics]:
        with self._lock:
            return self._value

    def snapshot(self) -> Tuple[Optional[ClusterMetrics], Optional[datetime]]:
        """Return the cached result together with the time it was stored."""
        with self._lock:
            return self._value, self._updated_at
