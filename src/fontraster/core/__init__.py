"""Core components for font layout and rasterization."""

from .config import FontRasterConfig
from .exceptions import (
    ConfigurationError,
    DrawCallbackError,
    FontError,
    FontLoadError,
    FontNotFoundError,
    FontRasterError,
    LockFailureError,
    ValidationError,
)
from .models import FontFamily, LayoutBox
from .transform import FontTransform

__all__ = [
    "ConfigurationError",
    "DrawCallbackError",
    "FontError",
    "FontFamily",
    "FontLoadError",
    "FontNotFoundError",
    "FontRasterConfig",
    "FontRasterError",
    "FontTransform",
    "LayoutBox",
    "LockFailureError",
    "ValidationError",
]
