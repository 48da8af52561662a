"""In-process cache of rendered page fragments, invalidated by route path.

Keys are ``(path, variant)`` where ``variant`` distinguishes renderings of
the same route (e.g. the listing table for a given query and page).
``expire_path`` drops every variant of a path so the next request
recomputes it.

The cache lives in the worker process: with several uvicorn workers, an
``expire_path`` only reaches the worker that handled the mutation.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_MAXSIZE = 128


class PageCache:
    """Bounded LRU of rendered fragments with per-path generations.

    A render is stored only if its path was not expired while it ran, so a
    table rendered from pre-mutation rows never outlives the mutation.
    """

    def __init__(self, maxsize: int = DEFAULT_MAXSIZE) -> None:
        self.maxsize = maxsize
        self._entries: OrderedDict[tuple[str, str], str] = OrderedDict()
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def get_or_render(self, path: str, variant: str, render: Callable[[], str]) -> str:
        key = (path, variant)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                return cached
            generation = self._generations.get(path, 0)

        rendered = render()

        with self._lock:
            if self._generations.get(path, 0) == generation:
                self._entries[key] = rendered
                self._entries.move_to_end(key)
                while len(self._entries) > self.maxsize:
                    self._entries.popitem(last=False)
        return rendered

    def expire_path(self, path: str) -> int:
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            stale = [key for key in self._entries if key[0] == path]
            for key in stale:
                del self._entries[key]
        logger.debug(
            "page_cache.expired",
            extra={"event": "page_cache.expired", "path": path, "entries": len(stale)},
        )
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._generations.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


page_cache = PageCache()


def expire_path(path: str) -> None:
    """Tell the render cache that everything under ``path`` is stale."""
    page_cache.expire_path(path)
