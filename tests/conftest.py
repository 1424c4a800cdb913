"""
Pytest configuration and fixtures for fontraster tests.
"""

import pytest
from PIL import ImageFont

from fontraster.core.config import FontRasterConfig
from fontraster.fonts.cache import FontCache
from fontraster.fonts.models import FontResource
from fontraster.rendering.descriptor import FontDesc

TEST_FAMILY = "testsans"


class StubFontProvider:
    """In-memory font provider that records every lookup."""

    def __init__(self, fonts: dict[str, bytes]):
        self.fonts = fonts
        self.calls: list[str] = []

    def load_font_data(self, family: str) -> bytes | None:
        self.calls.append(family)
        return self.fonts.get(family)


@pytest.fixture(scope="session")
def font_bytes():
    """Raw bytes of Pillow's embedded FreeType font."""
    face = ImageFont.load_default(size=16)
    data = getattr(face, "font_bytes", None)
    if not isinstance(face, ImageFont.FreeTypeFont) or not data:
        pytest.skip("Pillow built without FreeType support")
    return data


@pytest.fixture
def stub_provider(font_bytes):
    """Provider that knows the test family, the generic families and a broken font."""
    return StubFontProvider(
        {
            TEST_FAMILY: font_bytes,
            "sans": font_bytes,
            "monospace": font_bytes,
            "broken": b"definitely not a font",
        }
    )


@pytest.fixture
def font_cache(stub_provider):
    """Isolated font cache backed by the stub provider."""
    return FontCache(provider=stub_provider, config=FontRasterConfig())


@pytest.fixture
def font_resource(font_bytes):
    """Loaded resource for the test font."""
    return FontResource.from_bytes(TEST_FAMILY, font_bytes)


@pytest.fixture
def font_desc(font_cache):
    """Descriptor for the test font at 16px."""
    return FontDesc(TEST_FAMILY, 16.0, cache=font_cache)


@pytest.fixture
def font_file(tmp_path, font_bytes):
    """The test font written to disk."""
    path = tmp_path / "TestSans-Regular.ttf"
    path.write_bytes(font_bytes)
    return path
