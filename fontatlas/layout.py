"""
Atlas layout strategies.

GridLayout draws every glyph onto one shared canvas, one fixed cell per
character. StreamLayout renders each glyph on its own surface, trims it and
appends a header plus inverted alpha samples to a packed stream indexed by
byte offset.

Both keep their running state (pen position, byte offset) on the layout
object and update it strictly in the order glyphs are placed.
"""

import os
import sys
from collections import namedtuple

from PIL import Image

from .trim import EMPTY, alpha_accessor, trim_image

CANVAS_SIZE = (512, 256)
CELL_SIZE = (32, 32)

# left, top, width, height, advance width, advance height
HEADER_SIZE = 6

TRANSPARENT = (0, 0, 0, 0)

Pen = namedtuple("Pen", ["x", "y"])
GlyphRecord = namedtuple("GlyphRecord", ["char", "header", "rows"])


class GlyphMetricsTable:
    """Advance metrics per character code."""

    def __init__(self):
        self._metrics = {}

    def record(self, glyph):
        self._metrics[ord(glyph.char)] = (glyph.advance_width, glyph.advance_height)

    def sorted(self):
        """(code, advance_width, advance_height) in ascending code order."""
        return [(code, width, height) for code, (width, height) in sorted(self._metrics.items())]

    def __len__(self):
        return len(self._metrics)


def advance_pen(pen, count, row_size, cell_width, cell_height):
    """Pen position for the next cell after `count` glyphs have been drawn."""
    if count % row_size == 0:
        return Pen(0, pen.y + cell_height)
    return Pen(pen.x + cell_width, pen.y)


class GridLayout:
    """Fixed-cell atlas on one shared canvas.

    placements records (code, pen) for every glyph drawn, in draw order.
    """

    def __init__(self, rasterizer, font_size, canvas_size=CANVAS_SIZE, cell_size=CELL_SIZE):
        self.rasterizer = rasterizer
        self.canvas = Image.new("RGBA", canvas_size, TRANSPARENT)
        self.cell_width, self.cell_height = cell_size
        # Fixed before the first glyph and never changed mid-run
        self.row_size = canvas_size[0] // self.cell_width
        self.pen = Pen(0, font_size)
        self.count = 0
        self.placements = []
        self.metrics = GlyphMetricsTable()

    def place(self, glyph):
        # Oversized glyphs spill into neighbouring cells
        self.rasterizer.draw(self.canvas, glyph, self.pen)
        self.placements.append((ord(glyph.char), self.pen))
        self.metrics.record(glyph)

        self.count += 1
        self.pen = advance_pen(self.pen, self.count, self.row_size, self.cell_width, self.cell_height)


def pack_glyph(glyph, box, alpha):
    """Build the stream record for a glyph from its trimmed box."""
    if box.width <= 0:
        return GlyphRecord(glyph.char, (0,) * HEADER_SIZE, [])

    header = (box.left, box.top, box.width, box.height, glyph.advance_width, glyph.advance_height)
    rows = []
    for y in range(box.top, box.top + box.height):
        rows.append([255 - alpha(x, y) for x in range(box.left, box.left + box.width)])
    return GlyphRecord(glyph.char, header, rows)


def record_size(record):
    """Bytes a record occupies in the packed stream."""
    return HEADER_SIZE + sum(len(row) for row in record.rows)


class StreamLayout:
    def __init__(self, rasterizer, font_size, debug_dir=None, verbose=False):
        self.rasterizer = rasterizer
        self.pen = Pen(0, font_size)
        self.debug_dir = debug_dir
        self.verbose = verbose
        self.offset = 0
        self.indexes = []
        self.records = []
        self.metrics = GlyphMetricsTable()

    def place(self, glyph):
        baseline = self.rasterizer.baseline(self.pen.y)
        surface = Image.new("RGBA", (glyph.advance_width, baseline), TRANSPARENT)
        self.rasterizer.draw(surface, glyph, self.pen)

        if self.debug_dir is not None:
            write_debug_image(self.debug_dir, glyph, surface)

        box = trim_image(surface)
        record = pack_glyph(glyph, box, alpha_accessor(surface) if box != EMPTY else None)

        self.indexes.append(self.offset)
        self.records.append(record)
        self.offset += record_size(record)
        self.metrics.record(glyph)

        if self.verbose:
            if box.width > 0:
                print(f"{ord(glyph.char)} box: ({box.left}, {box.top}, {box.width}, {box.height})",
                      file=sys.stderr)
            else:
                print(f"{ord(glyph.char)} skip", file=sys.stderr)
        return box

    def data(self):
        """The packed stream as a flat list of integers."""
        values = []
        for record in self.records:
            values.extend(record.header)
            for row in record.rows:
                values.extend(row)
        return values


def write_debug_image(debug_dir, glyph, surface):
    """Save a glyph surface as <debug_dir>/<code>.png; zero-area surfaces are skipped."""
    width, height = surface.size
    if width == 0 or height == 0:
        return
    surface.save(os.path.join(debug_dir, f"{ord(glyph.char)}.png"))
