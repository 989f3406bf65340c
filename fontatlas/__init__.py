"""Offline glyph atlas builder for TrueType fonts."""

__version__ = "0.1.0"

FIRST_CHAR = "!"
LAST_CHAR = "~"
# Older firmware tables stop at '|' (92 glyphs)
LEGACY_LAST_CHAR = "|"


def char_range(first=FIRST_CHAR, last=LAST_CHAR):
    return [chr(code) for code in range(ord(first), ord(last) + 1)]


CHAR_RANGE = char_range()
