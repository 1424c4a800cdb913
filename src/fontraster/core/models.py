"""Value types shared by the font cache and the layout engine."""

from dataclasses import dataclass
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class FontFamily:
    """A font family: one of the generic families or a named face.

    Generic families are spelled with their canonical names, anything else is
    kept verbatim as a named family.
    """

    name: str

    SANS: ClassVar["FontFamily"]
    SANS_SERIF: ClassVar["FontFamily"]
    SERIF: ClassVar["FontFamily"]
    MONOSPACE: ClassVar["FontFamily"]

    GENERIC_NAMES: ClassVar[frozenset[str]] = frozenset(
        {"sans", "sans-serif", "serif", "monospace"}
    )

    @classmethod
    def from_str(cls, name: str) -> "FontFamily":
        """Convert a family name; the canonical generic spellings map to generics."""
        if name == "sans":
            return cls.SANS
        if name == "sans-serif":
            return cls.SANS_SERIF
        if name == "serif":
            return cls.SERIF
        if name == "monospace":
            return cls.MONOSPACE
        return cls(name)

    @property
    def is_generic(self) -> bool:
        return self.name in self.GENERIC_NAMES

    def as_str(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


FontFamily.SANS = FontFamily("sans")
FontFamily.SANS_SERIF = FontFamily("sans-serif")
FontFamily.SERIF = FontFamily("serif")
FontFamily.MONOSPACE = FontFamily("monospace")


class LayoutBox(BaseModel):
    """Ink bounding box of laid-out text in unrotated glyph space.

    ``((0, 0), (0, 0))`` is the sentinel for text without visible ink.
    """

    model_config = ConfigDict(frozen=True)

    min_x: int = Field(0, description="Left edge")
    min_y: int = Field(0, description="Top edge, relative to the baseline")
    max_x: int = Field(0, description="Right edge")
    max_y: int = Field(0, description="Bottom edge, relative to the baseline")

    @classmethod
    def empty(cls) -> "LayoutBox":
        return cls()

    @classmethod
    def from_points(cls, min_point: tuple[int, int], max_point: tuple[int, int]) -> "LayoutBox":
        return cls(min_x=min_point[0], min_y=min_point[1], max_x=max_point[0], max_y=max_point[1])

    @property
    def min(self) -> tuple[int, int]:
        return self.min_x, self.min_y

    @property
    def max(self) -> tuple[int, int]:
        return self.max_x, self.max_y

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_tuple(self) -> tuple[tuple[int, int], tuple[int, int]]:
        return self.min, self.max
