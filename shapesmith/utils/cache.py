"""Bounded least-recently-used cache for assembled results."""

import logging
from collections import OrderedDict
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20


class ResultCache:
    """LRU memo of assembled results keyed by the original string source.

    Keys are the caller's source identity, never a hash of the fetched
    bytes. A file that changes behind the same URL keeps returning the
    first result until it is evicted.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._entries: "OrderedDict[str, Any]" = OrderedDict()

    def get(self, source: str) -> Optional[Any]:
        """Return the cached result for ``source`` or None, marking it recent."""
        if source not in self._entries:
            return None
        self._entries.move_to_end(source)
        return self._entries[source]

    def set(self, source: str, result: Any) -> None:
        """Store ``result`` for ``source``, evicting the oldest entry if full."""
        self._entries[source] = result
        self._entries.move_to_end(source)
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cached result for {evicted}")

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResultCache(capacity={self.capacity}, size={len(self)})"
