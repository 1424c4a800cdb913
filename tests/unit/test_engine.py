"""Tests for text layout and rasterization."""

import numpy as np
import pytest

from fontraster.core.exceptions import DrawCallbackError, FontError, FontNotFoundError
from fontraster.core.models import LayoutBox
from fontraster.core.transform import FontTransform
from fontraster.rendering import engine


class Refused(Exception):
    """Raised by test callbacks to stop drawing."""


def collect(resource, text, origin=(0, 0), size=16.0, transform=FontTransform.NONE):
    pixels = []
    engine.draw(resource, origin, size, text, transform, lambda x, y, c: pixels.append((x, y, c)))
    return pixels


class TestLayout:
    """Test glyph placement and layout boxes."""

    @pytest.mark.parametrize("text", ["", " ", "    "])
    def test_no_ink_gives_empty_box(self, font_resource, text):
        """Test text without ink lays out as the degenerate box."""
        assert engine.estimate_layout(font_resource, 16.0, text) == LayoutBox.empty()

    def test_box_covers_text(self, font_resource):
        """Test visible text yields a non-degenerate box above the baseline."""
        box = engine.estimate_layout(font_resource, 16.0, "Hi")

        assert box.width > 0
        assert box.height > 0
        assert box.min_y < 0

    def test_glyphs_advance_left_to_right(self, font_resource):
        """Test each glyph starts to the right of the previous one."""
        glyphs = engine.layout_glyphs(font_resource.open(16.0), "HHH")

        assert [g.char for g in glyphs] == ["H", "H", "H"]
        assert glyphs[0].left < glyphs[1].left < glyphs[2].left

    def test_space_has_no_ink(self, font_resource):
        """Test whitespace glyphs are placed but carry no ink."""
        glyphs = engine.layout_glyphs(font_resource.open(16.0), "a b")

        assert glyphs[0].has_ink
        assert not glyphs[1].has_ink
        assert glyphs[2].has_ink

    def test_spaces_widen_box(self, font_resource):
        """Test interior whitespace still contributes advance."""
        tight = engine.estimate_layout(font_resource, 16.0, "ab")
        loose = engine.estimate_layout(font_resource, 16.0, "a   b")

        assert loose.width > tight.width

    def test_larger_size_larger_box(self, font_resource):
        """Test layout scales with the font size."""
        small = engine.estimate_layout(font_resource, 10.0, "Hi")
        large = engine.estimate_layout(font_resource, 40.0, "Hi")

        assert large.width > small.width
        assert large.height > small.height


class TestCoverage:
    """Test glyph coverage masks."""

    def test_mask_matches_glyph_box(self, font_resource):
        """Test the mask has the glyph's size and values in [0, 1]."""
        face = font_resource.open(24.0)
        glyph = engine.layout_glyphs(face, "W")[0]

        mask = engine.glyph_coverage(face, glyph)

        assert mask.shape == (glyph.height, glyph.width)
        assert mask.dtype == np.float32
        assert mask.min() >= 0.0
        assert mask.max() <= 1.0
        assert mask.max() > 0.5


class TestDraw:
    """Test per-pixel drawing."""

    def test_upright_pixels_inside_layout(self, font_resource):
        """Test upright pixels land in the layout box moved below the origin."""
        origin = (5, 7)
        layout = engine.estimate_layout(font_resource, 16.0, "Hi")
        pixels = collect(font_resource, "Hi", origin=origin)

        assert pixels
        for x, y, coverage in pixels:
            assert 0.0 <= coverage <= 1.0
            assert origin[0] + layout.min_x <= x < origin[0] + layout.max_x
            assert origin[1] <= y < origin[1] + layout.height

    def test_quarter_turn_swaps_extent(self, font_resource):
        """Test a quarter turn spreads the text along the vertical axis."""
        upright = collect(font_resource, "HHHH", origin=(50, 50))
        turned = collect(font_resource, "HHHH", origin=(50, 50), transform=FontTransform.ROTATE90)

        def extent(pixels):
            xs = [x for x, _, _ in pixels]
            ys = [y for _, y, _ in pixels]
            return max(xs) - min(xs), max(ys) - min(ys)

        assert extent(turned) == tuple(reversed(extent(upright)))

    def test_integer_coordinates(self, font_resource):
        """Test callbacks receive ints and a float coverage."""
        x, y, coverage = collect(font_resource, "H")[0]

        assert type(x) is int
        assert type(y) is int
        assert type(coverage) is float

    def test_empty_text_draws_nothing(self, font_resource):
        """Test drawing text without ink never calls back."""
        assert collect(font_resource, "") == []
        assert collect(font_resource, "  ") == []

    def test_ink_is_delivered(self, font_resource):
        """Test a visible glyph produces covered pixels."""
        pixels = collect(font_resource, "H", size=24.0)

        assert any(coverage > 0.5 for _, _, coverage in pixels)

    def test_negative_coordinates_are_clipped(self, font_resource):
        """Test pixels left of or above the canvas are dropped."""
        full = collect(font_resource, "Hi")
        clipped = collect(font_resource, "Hi", origin=(-4, -4))

        assert clipped
        assert len(clipped) < len(full)
        assert all(x >= 0 and y >= 0 for x, y, _ in clipped)

    def test_fully_off_canvas(self, font_resource):
        """Test text far off canvas draws nothing."""
        assert collect(font_resource, "Hi", origin=(-1000, -1000)) == []

    def test_rotation_preserves_pixel_count(self, font_resource):
        """Test rotating does not lose or duplicate pixels."""
        counts = {
            transform: len(collect(font_resource, "Hi", origin=(50, 50), transform=transform))
            for transform in FontTransform
        }

        assert len(set(counts.values())) == 1

    def test_rotate180_mirrors_pixels(self, font_resource):
        """Test a half turn maps the text onto its reflected position."""
        ox, oy = origin = (40, 40)
        layout = engine.estimate_layout(font_resource, 16.0, "L")
        upright = {(x, y): c for x, y, c in collect(font_resource, "L", origin=origin)}
        flipped = {
            (x, y): c
            for x, y, c in collect(
                font_resource, "L", origin=origin, transform=FontTransform.ROTATE180
            )
        }

        assert len(flipped) == len(upright)
        for (x, y), coverage in upright.items():
            assert flipped[(2 * ox + layout.width - x, 2 * oy + layout.height - y)] == coverage

    def test_callback_error_stops_drawing(self, font_resource):
        """Test a callback failure halts drawing and keeps the original exception."""
        refusal = Refused("canvas full")
        seen = []

        def callback(x, y, coverage):
            seen.append((x, y))
            if len(seen) == 3:
                raise refusal

        with pytest.raises(DrawCallbackError) as exc_info:
            engine.draw(font_resource, (0, 0), 16.0, "Hi", FontTransform.NONE, callback)

        assert exc_info.value.cause is refusal
        assert exc_info.value.__cause__ is refusal
        assert len(seen) == 3

    def test_callback_font_error_is_not_a_font_failure(self, font_resource):
        """Test a FontError raised by the callback stays a callback failure."""
        refusal = FontNotFoundError("nested")

        def callback(x, y, coverage):
            raise refusal

        with pytest.raises(DrawCallbackError) as exc_info:
            engine.draw(font_resource, (0, 0), 16.0, "Hi", FontTransform.NONE, callback)

        assert not isinstance(exc_info.value, FontError)
        assert exc_info.value.cause is refusal
