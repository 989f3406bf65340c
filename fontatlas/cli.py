import argparse
import os
import sys
from collections import namedtuple

from . import CHAR_RANGE
from .emit import ImageEmitter, SourceTableEmitter
from .layout import GridLayout, StreamLayout
from .raster import GlyphRasterizer

OUTPUT_FORMAT_PNG = "png"
OUTPUT_FORMAT_C = "c"

DEBUG_DIR = "debug"

FontInfo = namedtuple("FontInfo", ["family", "subfamily", "font_size"])


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="fontatlas",
        description="Rasterize printable ASCII from a TrueType font into a glyph atlas.")
    p.add_argument("--font-path", required=True,
                   help="The path to the TrueType font to use.")
    p.add_argument("--font-size", type=int, default=16,
                   help="The size, in points, of the font. (default: 16)")
    p.add_argument("--dpi", type=float, default=72,
                   help="The screen resolution to use, in dots per inch. (default: 72)")
    p.add_argument("--output-format", default=OUTPUT_FORMAT_PNG,
                   choices=[OUTPUT_FORMAT_PNG, OUTPUT_FORMAT_C],
                   help="The output format. (default: png)")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Report the trimmed box of every glyph.")
    return p.parse_args(argv)


def select_strategy(output_format, rasterizer, font_size, verbose=False):
    """Pick the layout and emitter pair for an output format."""
    if output_format == OUTPUT_FORMAT_PNG:
        return GridLayout(rasterizer, font_size), ImageEmitter()
    if output_format == OUTPUT_FORMAT_C:
        os.makedirs(DEBUG_DIR, exist_ok=True)
        layout = StreamLayout(rasterizer, font_size, debug_dir=DEBUG_DIR, verbose=verbose)
        return layout, SourceTableEmitter()
    raise ValueError(f"Invalid output format: {output_format}")


def build_atlas(rasterizer, layout, chars=CHAR_RANGE):
    """Rasterize and place every character, strictly in the given order."""
    for char in chars:
        layout.place(rasterizer.load(char))
    return layout


def generate_atlas(font_path, font_size, dpi, output_format, verbose=False, chars=CHAR_RANGE):
    """Build the atlas for one font and write it in the requested format."""
    rasterizer = GlyphRasterizer(font_path, font_size, dpi)
    print(f"Creating font atlas for '{rasterizer.family}' ({rasterizer.subfamily})", file=sys.stderr)

    layout, emitter = select_strategy(output_format, rasterizer, font_size, verbose)
    build_atlas(rasterizer, layout, chars)
    print(f"Rendered {len(layout.metrics)} glyphs", file=sys.stderr)

    path = emitter.emit(layout, FontInfo(rasterizer.family, rasterizer.subfamily, font_size))
    print(f"Atlas written to: {path}", file=sys.stderr)
    return path


def main(argv=None):
    args = parse_args(argv)
    try:
        generate_atlas(args.font_path, args.font_size, args.dpi, args.output_format, args.verbose)
    except (OSError, RuntimeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
