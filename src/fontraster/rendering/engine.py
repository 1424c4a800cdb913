"""Text layout and glyph rasterization.

Glyphs are laid out left to right on a baseline at ``y = 0``; pixel boxes are
truncated to integers. Rasterization renders each glyph's anti-aliased
coverage mask with Pillow and streams it pixel by pixel to a callback.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..core.exceptions import DrawCallbackError
from ..core.models import LayoutBox
from ..core.transform import FontTransform
from ..fonts.models import FontResource

logger = logging.getLogger(__name__)

DrawCallback = Callable[[int, int, float], None]


@dataclass(frozen=True)
class PositionedGlyph:
    """A character placed on the layout line.

    ``left``/``top``/``right``/``bottom`` is the glyph's ink box in layout
    pixels; ``bearing`` is the ink box origin relative to the glyph's own
    caret position on the baseline.
    """

    char: str
    left: int
    top: int
    right: int
    bottom: int
    bearing: tuple[int, int]

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def has_ink(self) -> bool:
        return self.width > 0 and self.height > 0


def layout_glyphs(face: ImageFont.FreeTypeFont, text: str) -> list[PositionedGlyph]:
    """Place every character of ``text`` on a single line."""
    glyphs = []
    for index, char in enumerate(text):
        caret = face.getlength(text[:index])
        x0, y0, x1, y1 = face.getbbox(char, anchor="ls")
        left = int(caret + x0)
        glyphs.append(
            PositionedGlyph(
                char=char,
                left=left,
                top=y0,
                right=left + (x1 - x0),
                bottom=y1,
                bearing=(x0, y0),
            )
        )
    return glyphs


def _bounds(glyphs: list[PositionedGlyph]) -> LayoutBox:
    inked = [g for g in glyphs if g.has_ink]
    if not inked:
        return LayoutBox.empty()

    return LayoutBox(
        min_x=min(g.left for g in inked),
        min_y=min(g.top for g in inked),
        max_x=max(g.right for g in inked),
        max_y=max(g.bottom for g in inked),
    )


def estimate_layout(resource: FontResource, size: float, text: str) -> LayoutBox:
    """Compute the ink bounding box of ``text`` at ``size``.

    Text without visible ink (empty or all whitespace) yields the degenerate
    ``((0, 0), (0, 0))`` box.
    """
    face = resource.open(size)
    return _bounds(layout_glyphs(face, text))


def glyph_coverage(face: ImageFont.FreeTypeFont, glyph: PositionedGlyph) -> np.ndarray:
    """Render a glyph's anti-aliased coverage mask, values in ``[0, 1]``."""
    mask = Image.new("L", (glyph.width, glyph.height), 0)
    bearing_x, bearing_y = glyph.bearing
    ImageDraw.Draw(mask).text(
        (-bearing_x, -bearing_y), glyph.char, font=face, fill=255, anchor="ls"
    )
    return np.asarray(mask, dtype=np.float32) / 255.0


def iter_pixels(
    resource: FontResource,
    origin: tuple[int, int],
    size: float,
    text: str,
    transform: FontTransform,
) -> Iterator[tuple[int, int, float]]:
    """Yield ``(x, y, coverage)`` for every on-canvas pixel of rendered text.

    All glyphs share the layout's top edge as vertical reference, so glyphs
    with different ascent and descent stay on one baseline.
    """
    face = resource.open(size)
    glyphs = layout_glyphs(face, text)
    layout = _bounds(glyphs)

    offset_x, offset_y = transform.offset(layout)
    base_x = origin[0] + offset_x
    base_y = origin[1] + offset_y

    for glyph in glyphs:
        if not glyph.has_ink:
            continue

        x0 = glyph.left
        y0 = glyph.top - layout.min_y
        coverage = glyph_coverage(face, glyph)
        for py, row in enumerate(coverage):
            for px, value in enumerate(row):
                dx, dy = transform.apply(px + x0, py + y0)
                x, y = dx + base_x, dy + base_y
                if x < 0 or y < 0:
                    continue
                yield x, y, float(value)


def draw(
    resource: FontResource,
    origin: tuple[int, int],
    size: float,
    text: str,
    transform: FontTransform,
    callback: DrawCallback,
) -> None:
    """Rasterize ``text`` and feed each pixel to ``callback``.

    The callback refuses a pixel by raising. No further pixels are delivered
    and the exception is raised again wrapped in :class:`DrawCallbackError`.
    """
    count = 0
    for x, y, coverage in iter_pixels(resource, origin, size, text, transform):
        try:
            callback(x, y, coverage)
        except Exception as e:
            logger.debug(f"Draw callback refused pixel ({x}, {y}) after {count} pixels")
            raise DrawCallbackError(e) from e
        count += 1
    logger.debug(f"Rasterized {len(text)} chars of {resource.name!r} into {count} pixels")
