"""Output sinks: the PNG grid atlas and the embedded C table."""

import sys

IMAGE_PATH = "atlas.png"
SOURCE_PATH = "atlas.h"


def format_metrics_line(code, advance_width, advance_height):
    """One CharMetrics initializer line for the metrics table."""
    return f"{{{code}, CharMetrics{{{advance_width}, {advance_height}}}}},"


class ImageEmitter:
    def __init__(self, path=IMAGE_PATH, out=None):
        self.path = path
        self.out = out

    def emit(self, layout, font):
        out = self.out if self.out is not None else sys.stdout
        for code, advance_width, advance_height in layout.metrics.sorted():
            print(format_metrics_line(code, advance_width, advance_height), file=out)

        layout.canvas.save(self.path, "PNG")
        return self.path


def char_comment(char):
    """Comment text naming a character; a trailing backslash would splice lines."""
    if char == "\\":
        return "backslash"
    return char


def format_row(values, hexadecimal):
    """Comma-join a row of values, as 0x.. literals when hexadecimal."""
    if hexadecimal:
        return ", ".join(f"0x{v:x}" for v in values)
    return ", ".join(str(v) for v in values)


def render_source(family, subfamily, font_size, indexes, records):
    """Render the index table and packed stream as a C font_t literal."""
    lines = [
        "#include <stdint.h>",
        "",
        '#include "font/font.h"',
        "",
    ]
    if subfamily:
        lines.append(f"// font: {family} ({subfamily})")
    else:
        lines.append(f"// font: {family}")
    lines.append(f"// size: {font_size}")
    lines.append("const font_t font = {")
    lines.append("\t.indexes = {" + ", ".join(str(i) for i in indexes) + "},")
    lines.append("\t.data = {")

    for i, record in enumerate(records):
        lines.append(f"\t\t// character: {char_comment(record.char)}")
        lines.append("\t\t" + format_row(record.header, False) + ",")
        for row in record.rows:
            lines.append("\t\t" + format_row(row, True) + ",")
        if i != len(records) - 1:
            lines.append("")

    lines.append("\t}")
    lines.append("};")
    return "\n".join(lines) + "\n"


class SourceTableEmitter:
    def __init__(self, path=SOURCE_PATH):
        self.path = path

    def emit(self, layout, font):
        text = render_source(font.family, font.subfamily, font.font_size,
                             layout.indexes, layout.records)
        with open(self.path, "w") as f:
            f.write(text)
        return self.path
