"""Text layout and rasterization on top of the font cache."""

from .descriptor import FontDesc, TextStyle, to_rgba
from .engine import DrawCallback, PositionedGlyph, estimate_layout, iter_pixels, layout_glyphs

__all__ = [
    "DrawCallback",
    "FontDesc",
    "PositionedGlyph",
    "TextStyle",
    "estimate_layout",
    "iter_pixels",
    "layout_glyphs",
    "to_rgba",
]
