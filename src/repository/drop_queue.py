"""
Deferred dropping of repository contexts.

Dropping large named graphs is expensive, so removed vocabulary contexts are
queued and dropped periodically in batches.
"""

import logging
import threading
from typing import Callable, List, Optional

from rdflib import URIRef

from .store import TripleStore


logger = logging.getLogger(__name__)


class DeferredGraphDropper:
    """Queue of named graphs to drop, flushed periodically by a timer."""

    def __init__(self, store: TripleStore, interval: float = 30.0, autostart: bool = True,
                 on_flush: Optional[Callable[[], None]] = None):
        """
        Initialize the dropper.

        Args:
            store: Triple store the graphs are dropped from
            interval: Seconds between flushes
            autostart: Whether to start the periodic timer on first enqueue
            on_flush: Called after queued contexts are dropped
        """
        self.store = store
        self.interval = interval
        self.autostart = autostart
        self.on_flush = on_flush
        self._queue: List[URIRef] = []
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._stopped = False

    def enqueue(self, context: URIRef) -> None:
        """Schedule a context for dropping."""
        context = URIRef(context)
        with self._lock:
            if context not in self._queue:
                self._queue.append(context)
            logger.debug(f"Context {context} scheduled for drop ({len(self._queue)} pending).")
            if self.autostart and not self._stopped and self._timer is None:
                self._schedule()

    def pending(self) -> List[URIRef]:
        with self._lock:
            return list(self._queue)

    def flush(self) -> int:
        """
        Drop all queued contexts.

        The queue is cleared before dropping. Failed drops are not re-queued.

        Returns:
            Number of contexts dropped
        """
        with self._lock:
            contexts, self._queue = self._queue, []
        if not contexts:
            return 0
        logger.info(f"Dropping {len(contexts)} queued context(s).")
        with self.store.transaction():
            for context in contexts:
                self.store.drop_graph(context)
        if self.on_flush is not None:
            self.on_flush()
        return len(contexts)

    def stop(self) -> None:
        """Cancel the timer and drop whatever is still queued."""
        with self._lock:
            self._stopped = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self.flush()

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._run)
        self._timer.daemon = True
        self._timer.start()

    def _run(self) -> None:
        with self._lock:
            self._timer = None
        try:
            self.flush()
        except Exception as e:
            logger.error(f"Deferred context drop failed: {e}")
        with self._lock:
            if self._queue and not self._stopped:
                self._schedule()
