"""
Render cache for compiled PDFs.

Bounded, caller-owned store keyed by a hash of the template source and the
serialized resume data. When full, the oldest inserted entry is evicted;
lookups do not refresh an entry's position.
"""

import hashlib
import os
import threading
from collections import OrderedDict
from typing import Optional

from dotenv import load_dotenv

from scribe.contexts.rendering.compiler import CompilationResult

load_dotenv()
RENDER_CACHE_SIZE = int(os.getenv("RENDER_CACHE_SIZE", "10"))


def cache_key(template_source: str, serialized_data: str) -> str:
    """Stable key for a (template, data) pair."""
    digest = hashlib.sha256()
    digest.update(template_source.encode("utf-8"))
    # Separator keeps ("ab", "c") and ("a", "bc") apart
    digest.update(b"\x00")
    digest.update(serialized_data.encode("utf-8"))
    return digest.hexdigest()


class RenderCache:
    """
    Insertion-ordered cache of successful compilation results.

    Example:
        cache = RenderCache(capacity=10)
        result = render_resume(data, compiler=compiler, cache=cache)
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            capacity = RENDER_CACHE_SIZE
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._entries: "OrderedDict[str, CompilationResult]" = OrderedDict()
        # Sessions compile in worker threads
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CompilationResult]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, result: CompilationResult) -> None:
        """Store a result, evicting the oldest entry if the cache is full."""
        with self._lock:
            if key in self._entries:
                self._entries[key] = result
                return
            if len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)
            self._entries[key] = result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
