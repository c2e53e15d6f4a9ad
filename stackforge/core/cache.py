"""Memoization of rendered artifacts keyed by configuration subsets."""

import hashlib
import json
from collections import OrderedDict
from functools import lru_cache
from typing import Any, Callable

from stackforge.config import settings
from stackforge.utils.logging import get_logger

logger = get_logger(__name__)


class TemplateCache:
    """Bounded LRU store of rendered text.

    Keys are derived from an artifact name plus exactly the configuration
    fields the artifact depends on, so two configurations that agree on those
    fields share one entry.
    """

    def __init__(self, max_entries: int = 256):
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._max_entries = max_entries
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(name: str, fields: dict[str, Any]) -> str:
        payload = json.dumps(fields, sort_keys=True, separators=(",", ":"))
        digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]
        return f"{name}:{digest}"

    def get(self, key: str) -> str | None:
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def get_or_render(
        self, name: str, fields: dict[str, Any], render: Callable[[], str]
    ) -> str:
        """Return the cached text for ``name``/``fields`` or render and store it."""
        key = self.make_key(name, fields)
        cached = self.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        value = render()
        self.set(key, value)
        logger.debug("template_cache.stored", artifact=name, key=key)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


@lru_cache
def get_template_cache() -> TemplateCache:
    """Get the process-wide template cache used by the API."""
    return TemplateCache(max_entries=settings.template_cache_size)
