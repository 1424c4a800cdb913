"""
Font Resources
==============

A loaded font: the raw font binary plus the metadata read from it.
"""

import io
import logging
import os
from dataclasses import dataclass, field

from PIL import ImageFont

from ..core.exceptions import FontLoadError

logger = logging.getLogger(__name__)

# Size used to validate font data when a resource is created
PROBE_SIZE = 16


@dataclass(frozen=True, eq=False)
class FontResource:
    """A parsed font owning its raw bytes.

    Faces are rebuilt from ``data`` on every :meth:`open`; each face keeps its
    own reference to the bytes, so a resource can be shared freely between
    threads and outlives any cache it was stored in.
    """

    name: str
    data: bytes = field(repr=False)
    family_name: str = "Unknown"
    style_name: str = "Regular"
    source: str | None = None

    @classmethod
    def from_bytes(cls, name: str, data: bytes, source: str | None = None) -> "FontResource":
        """
        Parse font data into a resource.

        Args:
            name: Canonical family name the resource is cached under
            data: Raw TrueType/OpenType font binary
            source: Optional file the data was read from

        Returns:
            The loaded FontResource

        Raises:
            FontLoadError: If the data is not a font FreeType can parse
        """
        data = bytes(data)
        try:
            face = _parse(data, PROBE_SIZE)
            family_name, style_name = face.getname()
        except (OSError, ValueError) as e:
            raise FontLoadError(name, e) from e

        logger.debug(f"Parsed font {name!r}: {family_name} {style_name} ({len(data)} bytes)")
        return cls(
            name=name,
            data=data,
            family_name=family_name or "Unknown",
            style_name=style_name or "Regular",
            source=source,
        )

    @property
    def filename(self) -> str | None:
        """Get the font filename."""
        return os.path.basename(self.source) if self.source else None

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def open(self, size: float) -> ImageFont.FreeTypeFont:
        """Build a face at ``size`` pixels per em from the owned bytes."""
        return _parse(self.data, size)

    def __str__(self) -> str:
        return f"{self.family_name} {self.style_name} ({self.name})"


def _parse(data: bytes, size: float) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(io.BytesIO(data), size, layout_engine=ImageFont.Layout.BASIC)
