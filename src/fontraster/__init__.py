"""fontraster
==========

Text layout and glyph rasterization for 2D drawing toolkits.

Fonts are resolved once per family through a shared, thread-safe cache;
descriptors measure text and stream anti-aliased pixel coverage to a
caller-supplied callback, optionally rotated by multiples of 90 degrees.
"""

__version__ = "0.1.0"

from .core.config import FontRasterConfig
from .core.exceptions import (
    DrawCallbackError,
    FontError,
    FontLoadError,
    FontNotFoundError,
    FontRasterError,
    LockFailureError,
    ValidationError,
)
from .core.models import FontFamily, LayoutBox
from .core.transform import FontTransform
from .fonts import FontCache, FontResource, SystemFontProvider, get_default_cache
from .rendering import FontDesc, TextStyle

__all__ = [
    "DrawCallbackError",
    "FontCache",
    "FontDesc",
    "FontError",
    "FontFamily",
    "FontLoadError",
    "FontNotFoundError",
    "FontRasterConfig",
    "FontRasterError",
    "FontResource",
    "FontTransform",
    "LayoutBox",
    "LockFailureError",
    "SystemFontProvider",
    "TextStyle",
    "ValidationError",
    "get_default_cache",
]
