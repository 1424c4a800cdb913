"""Font descriptors: the public entry point for layout and draw requests."""

import copy
import logging
import math
from dataclasses import dataclass
from typing import Any

from PIL import ImageColor

from ..core.exceptions import (
    FontError,
    InvalidColorError,
    InvalidFontSizeError,
    InvalidFontSourceError,
)
from ..core.models import FontFamily, LayoutBox
from ..core.transform import FontTransform
from ..fonts.cache import FontCache, get_default_cache
from ..fonts.models import FontResource
from . import engine
from .engine import DrawCallback

logger = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]


def _validate_size(size: Any) -> float:
    if isinstance(size, bool):
        raise InvalidFontSizeError(size)
    try:
        value = float(size)
    except (TypeError, ValueError) as e:
        raise InvalidFontSizeError(size) from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidFontSizeError(size)
    return value


class FontDesc:
    """
    Describes a font: family, size and rotation.

    The family is resolved through the font cache when the descriptor is
    built. A resolution failure does not raise here; it is kept and raised
    again by every layout and draw call.
    """

    def __init__(
        self,
        family: FontFamily | str,
        size: float = 1.0,
        *,
        transform: FontTransform = FontTransform.NONE,
        cache: FontCache | None = None,
    ):
        """
        Initialize and resolve a font descriptor.

        Args:
            family: Font family, or a family name
            size: Size in pixels per em
            transform: Rotation applied to rendered text
            cache: Font cache to resolve through (default: process-wide cache)
        """
        self._family = family if isinstance(family, FontFamily) else FontFamily.from_str(family)
        self._size = _validate_size(size)
        self._transform = transform
        self._cache = cache if cache is not None else get_default_cache()

        self._resource: FontResource | None = None
        self._error: FontError | None = None
        try:
            self._resource = self._cache.resolve(self._family)
        except FontError as e:
            logger.debug(f"Font {self._family} unavailable: {e}")
            self._error = e

    @classmethod
    def coerce(cls, value: Any, *, cache: FontCache | None = None) -> "FontDesc":
        """Build a descriptor from a descriptor, family, family name or (family, size)."""
        if isinstance(value, FontDesc):
            return value
        if isinstance(value, (str, FontFamily)):
            return cls(value, cache=cache)
        if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], (str, FontFamily)):
            return cls(value[0], value[1], cache=cache)
        raise InvalidFontSourceError(value)

    def _derive(self, **changes: Any) -> "FontDesc":
        twin = copy.copy(self)
        for name, value in changes.items():
            setattr(twin, f"_{name}", value)
        return twin

    def resize(self, size: float) -> "FontDesc":
        """Create a new font desc with the same font but different size."""
        return self._derive(size=_validate_size(size))

    def with_transform(self, transform: FontTransform) -> "FontDesc":
        """Create a new font desc with the same font but a different rotation."""
        return self._derive(transform=transform)

    def color(self, color: str | tuple[int, ...]) -> "TextStyle":
        """Combine this font with a color into a text style."""
        return TextStyle(font=self, color=to_rgba(color))

    @property
    def family(self) -> FontFamily:
        return self._family

    @property
    def name(self) -> str:
        return self._family.as_str()

    @property
    def size(self) -> float:
        return self._size

    @property
    def transform(self) -> FontTransform:
        return self._transform

    @property
    def is_resolved(self) -> bool:
        return self._resource is not None

    @property
    def error(self) -> FontError | None:
        """The resolution failure captured at construction, if any."""
        return self._error

    @property
    def resource(self) -> FontResource:
        """The resolved font; raises the captured error if resolution failed."""
        if self._error is not None:
            error = self._error.clone()
            raise error from getattr(error, "cause", None)
        return self._resource

    def layout_box(self, text: str) -> LayoutBox:
        """Get the ink box of the text if rendered in this font, ignoring rotation."""
        return engine.estimate_layout(self.resource, self._size, text)

    def box_size(self, text: str) -> tuple[int, int]:
        """Get the ``(width, height)`` the text occupies once rotated."""
        layout = self.layout_box(text)
        width, height = self._transform.apply(layout.width, layout.height)
        return abs(width), abs(height)

    def draw(self, text: str, origin: tuple[int, int], callback: DrawCallback) -> None:
        """
        Rasterize text, delivering each pixel to ``callback(x, y, coverage)``.

        Args:
            text: Text to draw
            origin: Pixel position of the text's top-left corner
            callback: Receives integer coordinates and a coverage in [0, 1]

        Raises:
            FontError: If the font could not be resolved
            DrawCallbackError: If the callback raised; drawing stops there and
                the callback's exception is kept as ``cause``
        """
        engine.draw(self.resource, origin, self._size, text, self._transform, callback)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FontDesc):
            return NotImplemented
        return (
            self._family == other._family
            and self._size == other._size
            and self._transform is other._transform
            and self._resource is other._resource
        )

    def __hash__(self) -> int:
        return hash((self._family, self._size, self._transform))

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else type(self._error).__name__
        return (
            f"FontDesc(family={self.name!r}, size={self._size}, "
            f"transform={self._transform.name}, {state})"
        )


@dataclass(frozen=True)
class TextStyle:
    """A font paired with the color text is drawn in."""

    font: FontDesc
    color: RGBA


def to_rgba(color: str | tuple[int, ...]) -> RGBA:
    """Convert a Pillow color name/string or an RGB(A) tuple to RGBA."""
    if isinstance(color, str):
        try:
            return ImageColor.getcolor(color, "RGBA")
        except ValueError as e:
            raise InvalidColorError(color) from e

    if isinstance(color, tuple) and len(color) in (3, 4):
        if all(isinstance(c, int) and 0 <= c <= 255 for c in color):
            return tuple(color) + (255,) * (4 - len(color))
    raise InvalidColorError(color)
