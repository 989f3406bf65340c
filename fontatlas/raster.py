"""
Glyph rasterization on top of FreeType.

The font engine is driven with full hinting at a single pixel scale per run.
Metrics come back in FreeType fixed point (16.16 for linear advances, 26.6
for size metrics) and are converted to whole pixels here.
"""

import os
from collections import namedtuple

import freetype
from PIL import Image

# Solid black, composited through the glyph coverage mask
INK = (0, 0, 0, 255)

Glyph = namedtuple("Glyph", ["char", "mask", "left", "top", "advance_width", "advance_height"])
Glyph.__doc__ = """A rendered glyph.

mask is an 'L' image of alpha coverage (None when the glyph has no ink),
left/top are the bitmap offsets from the pen position (top measured upward
from the baseline), advances are whole pixels.
"""


def ceil_16_16(value):
    """Whole pixels from a 16.16 advance, rounded up."""
    return -(-value // 0x10000)


def floor_26_6(value):
    """Whole pixel row from a 26.6 coordinate, rounded down."""
    return value >> 6


def pixel_scale(font_size, dpi):
    """Pixels per em for a point size at a resolution, in 26.6 fixed point.

    Truncated, this is the scale glyph outlines are rendered at.
    """
    return int(font_size * dpi * 64 / 72.0)


def face_scale(font_size, dpi):
    """Pixels per em rounded to the nearest 26.6 unit, used for face-wide metrics."""
    return int(0.5 + font_size * dpi * 64 / 72.0)


def scaled_descent(descender, units_per_em, scale):
    """Face descent in 26.6, ceiled to the next 1/64 pixel but not to a whole pixel."""
    return -(-(scale * -descender) // units_per_em)


class GlyphRasterizer:
    """Loads a TrueType font and renders single characters at a fixed scale."""

    def __init__(self, font_path, font_size, dpi):
        if not os.path.isfile(font_path):
            raise FileNotFoundError(f"Font file not found: {font_path}")

        try:
            self.face = freetype.Face(font_path)
        except freetype.FT_Exception as e:
            raise RuntimeError(f"Failed to load font: {e}") from e

        self.font_size = font_size
        self.dpi = dpi
        self.scale = pixel_scale(font_size, dpi)
        try:
            self.face.set_char_size(self.scale, self.scale, 72, 72)
        except freetype.FT_Exception as e:
            raise RuntimeError(f"Failed to size font: {e}") from e

        # size.descender is already rounded to whole pixels; scale the
        # font-unit descender instead so baseline() does the flooring
        self.descent = scaled_descent(self.face.descender, self.face.units_per_EM,
                                      face_scale(font_size, dpi))

    @property
    def family(self):
        return _decode_name(self.face.family_name)

    @property
    def subfamily(self):
        return _decode_name(self.face.style_name)

    def baseline(self, pen_y):
        """Pixel row of a glyph's bottom edge when drawn with its pen at pen_y."""
        return floor_26_6((pen_y << 6) + self.descent)

    def load(self, char):
        glyph_index = self.face.get_char_index(ord(char))
        if glyph_index == 0:
            # No outline for this character: keep the .notdef advances, draw nothing
            self.face.load_glyph(0, freetype.FT_LOAD_DEFAULT)
            slot = self.face.glyph
            return Glyph(char, None, 0, 0,
                         ceil_16_16(slot.linearHoriAdvance),
                         ceil_16_16(slot.linearVertAdvance))

        self.face.load_glyph(glyph_index, freetype.FT_LOAD_RENDER | freetype.FT_LOAD_TARGET_NORMAL)
        slot = self.face.glyph
        bitmap = slot.bitmap

        mask = None
        if bitmap.width > 0 and bitmap.rows > 0:
            mask = Image.frombytes("L", (bitmap.width, bitmap.rows), bytes(bitmap.buffer),
                                   "raw", "L", bitmap.pitch, 1)

        return Glyph(char, mask, slot.bitmap_left, slot.bitmap_top,
                     ceil_16_16(slot.linearHoriAdvance),
                     ceil_16_16(slot.linearVertAdvance))

    def draw(self, surface, glyph, pen):
        draw_glyph(surface, glyph, pen)


def draw_glyph(surface, glyph, pen):
    """Composite a glyph onto an RGBA surface with its origin at pen (x, y).

    Anything outside the surface is clipped; overlapping neighbours are
    painted over, not reflowed.
    """
    if glyph.mask is None:
        return
    x, y = pen
    surface.paste(INK, (x + glyph.left, y - glyph.top), glyph.mask)


def _decode_name(name):
    if name is None:
        return ""
    if isinstance(name, bytes):
        return name.decode("utf-8", errors="replace")
    return name
