import logging
import threading

from .merger import BPEMerger

logger = logging.getLogger(__name__)


class MergeCache:
    """
    Memoizes BPEMerger results per byte-level chunk.

    Entries are immutable tuples and are never evicted; the merge table
    cannot change, so a stored result never goes stale. Lookups are plain
    dict reads. Inserts happen under a lock with setdefault, so when two
    threads race on the same chunk both compute and the first stored value
    is the one every caller gets back.
    """

    def __init__(self, merger: BPEMerger):
        self.merger = merger
        self._entries: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, chunk: str) -> tuple[str, ...]:
        symbols = self._entries.get(chunk)
        if symbols is not None:
            self.hits += 1
            return symbols

        self.misses += 1
        symbols = self.merger.merge(chunk)
        logger.debug("merge cache miss: %r -> %r", chunk, symbols)
        with self._lock:
            return self._entries.setdefault(chunk, symbols)

    def __contains__(self, chunk):
        return chunk in self._entries

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"MergeCache(entries={len(self)}, hits={self.hits}, misses={self.misses})"
