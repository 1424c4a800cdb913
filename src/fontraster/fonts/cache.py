"""Font Cache
==========

Thread-safe, append-only store of loaded fonts keyed by family name:
- At most one loaded resource per family
- Loading serialized under a single lock; waiting is unbounded unless a
  lock timeout is configured
- Resources are ordinary references and stay valid after removal
- A lazily created process-wide default instance
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

from ..core.config import FontRasterConfig
from ..core.exceptions import FontError, FontLoadError, FontNotFoundError, LockFailureError
from ..core.models import FontFamily
from .models import FontResource
from .system import FontProvider, SystemFontProvider

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Statistics for font cache usage."""

    hits: int = 0
    misses: int = 0
    loads: int = 0
    failures: int = 0
    load_time_s: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return (self.hits / total * 100.0) if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "loads": self.loads,
            "failures": self.failures,
            "hit_rate_percent": self.hit_rate,
            "load_time_s": self.load_time_s,
        }


class FontCache:
    """Memoizes font resolution: family name to loaded :class:`FontResource`."""

    def __init__(
        self,
        provider: FontProvider | None = None,
        config: FontRasterConfig | None = None,
    ):
        self.config = config or FontRasterConfig()
        self.provider = provider or SystemFontProvider(self.config)
        self.lock_timeout = self.config.lock_timeout

        self._fonts: dict[str, FontResource] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def resolve(self, family: FontFamily | str) -> FontResource:
        """Get a loaded font for ``family``, loading it on first use.

        Args:
            family: Family to resolve

        Returns:
            The cached FontResource; repeated calls return the same object

        Raises:
            LockFailureError: If a configured lock timeout expired first
            FontNotFoundError: If the provider has no font for the family
            FontLoadError: If the font data could not be parsed
        """
        name = family.as_str() if isinstance(family, FontFamily) else str(family)

        if not self._acquire():
            logger.warning(f"Timed out after {self.lock_timeout}s waiting for font cache lock")
            raise LockFailureError(name)

        try:
            resource = self._fonts.get(name)
            if resource is not None:
                self._stats.hits += 1
                logger.debug(f"Font cache hit for {name!r}")
                return resource

            self._stats.misses += 1
            try:
                resource = self._load(name)
            except FontError:
                self._stats.failures += 1
                raise

            self._fonts[name] = resource
            return resource
        finally:
            self._lock.release()

    def _acquire(self) -> bool:
        if self.lock_timeout is None:
            return self._lock.acquire()
        return self._lock.acquire(timeout=self.lock_timeout)

    def _load(self, name: str) -> FontResource:
        logger.info(f"Font cache miss for {name!r}, loading...")
        start_time = time.perf_counter()

        data = self.provider.load_font_data(name)
        if data is None:
            logger.warning(f"No font found for family {name!r}")
            raise FontNotFoundError(name)

        try:
            resource = FontResource.from_bytes(name, data, source=self._source_of(name))
        except FontLoadError as e:
            logger.warning(f"Failed to load font {name!r}: {e.cause}")
            raise

        load_time = time.perf_counter() - start_time
        self._stats.loads += 1
        self._stats.load_time_s += load_time
        logger.info(f"Loaded font {resource} in {load_time * 1000:.1f}ms")
        return resource

    def _source_of(self, name: str) -> str | None:
        font_path = getattr(self.provider, "resolved_paths", {}).get(name)
        return str(font_path) if font_path else None

    def clear(self) -> int:
        """Drop every cached font and return how many were dropped.

        Resources already handed out remain usable; later resolutions load
        fresh instances.
        """
        if not self._acquire():
            raise LockFailureError("*")
        try:
            dropped = len(self._fonts)
            self._fonts = {}
        finally:
            self._lock.release()

        logger.info(f"Cleared font cache ({dropped} fonts)")
        return dropped

    def families(self) -> list[str]:
        """List the family names currently cached."""
        with self._lock:
            return sorted(self._fonts)

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def __contains__(self, family: object) -> bool:
        name = family.as_str() if isinstance(family, FontFamily) else family
        with self._lock:
            return name in self._fonts

    def __len__(self) -> int:
        with self._lock:
            return len(self._fonts)


_default_cache: FontCache | None = None
_default_cache_lock = threading.Lock()


def get_default_cache() -> FontCache:
    """Return the process-wide font cache, creating it on first access."""
    global _default_cache
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = FontCache()
            logger.debug("Created process-wide font cache")
        return _default_cache


def set_default_cache(cache: FontCache | None) -> FontCache | None:
    """Replace the process-wide font cache; returns the previous one.

    Passing None makes the next :func:`get_default_cache` build a fresh cache.
    """
    global _default_cache
    with _default_cache_lock:
        previous = _default_cache
        _default_cache = cache
        return previous
