import os

import pytest
from PIL import Image

from fontatlas.raster import Glyph, draw_glyph

FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/Library/Fonts/DejaVuSansMono.ttf",
]

INK_LEVEL = 200


class FakeRasterizer:
    """Stamps a solid rectangle per character, sized from its code.

    Characters in `blank` render nothing. Every glyph sits on the baseline,
    one pixel right of the pen.
    """

    family = "Fake Mono"
    subfamily = "Regular"

    def __init__(self, descent=2, blank=" "):
        self.descent = descent
        self.blank = blank

    @staticmethod
    def ink_size(char):
        code = ord(char)
        return 2 + code % 4, 5 + code % 7

    def baseline(self, pen_y):
        return pen_y + self.descent

    def load(self, char):
        if char in self.blank:
            return Glyph(char, None, 0, 0, 8, 12)
        width, height = self.ink_size(char)
        mask = Image.new("L", (width, height), INK_LEVEL)
        return Glyph(char, mask, 1, height, 8, 12)

    def draw(self, surface, glyph, pen):
        draw_glyph(surface, glyph, pen)


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()


@pytest.fixture
def mono_font():
    for path in FONT_CANDIDATES:
        if os.path.isfile(path):
            return path
    pytest.skip("no DejaVu Sans Mono font installed")
