"""Font Management Module
======================

Font resolution and caching: maps a family name to a loaded, shared font
resource, loading each family at most once per cache.
"""

from .cache import CacheStats, FontCache, get_default_cache, set_default_cache
from .models import FontResource
from .system import FontProvider, SystemFontProvider, normalize_font_name

__all__ = [
    "CacheStats",
    "FontCache",
    "FontProvider",
    "FontResource",
    "SystemFontProvider",
    "get_default_cache",
    "normalize_font_name",
    "set_default_cache",
]
