"""Axis-aligned text rotations.

Rotating by multiples of 90 degrees keeps pixel coordinates integral, so the
rasterizer never has to resample a glyph.
"""

from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import InvalidRotationError

if TYPE_CHECKING:
    from .models import LayoutBox


class FontTransform(Enum):
    """Rotation applied to rendered text output."""

    NONE = 0
    ROTATE90 = 90
    ROTATE180 = 180
    ROTATE270 = 270

    @classmethod
    def from_degrees(cls, degrees: int | float) -> "FontTransform":
        """Parse a rotation in degrees; any multiple of 90 is accepted."""
        try:
            turns, remainder = divmod(float(degrees), 90)
        except (TypeError, ValueError) as e:
            raise InvalidRotationError(degrees) from e
        if isinstance(degrees, bool) or remainder != 0:
            raise InvalidRotationError(degrees)
        return cls(int(turns) % 4 * 90)

    @property
    def degrees(self) -> int:
        return self.value

    def offset(self, layout: "LayoutBox") -> tuple[int, int]:
        """Offset of the first glyph's reading-orientation top-left corner.

        The offset is measured in rotated output space, from the origin of the
        rotated bounding box.
        """
        width = layout.max_x - layout.min_x
        height = layout.max_y - layout.min_y
        if self is FontTransform.ROTATE90:
            return height, 0
        if self is FontTransform.ROTATE180:
            return width, height
        if self is FontTransform.ROTATE270:
            return 0, width
        return 0, 0

    def apply(self, x: int, y: int) -> tuple[int, int]:
        """Map an unrotated glyph-space coordinate into rotated output space."""
        if self is FontTransform.ROTATE90:
            return -y, x
        if self is FontTransform.ROTATE180:
            return -x, -y
        if self is FontTransform.ROTATE270:
            return y, -x
        return x, y
