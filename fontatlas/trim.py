"""
Content bounds detection for rendered glyph surfaces.

Every scan works on an alpha accessor ``alpha(x, y) -> int`` plus the
surface size, so the edges can be found on anything that can be indexed,
not just Pillow images.
"""

from collections import namedtuple

Box = namedtuple("Box", ["left", "top", "width", "height"])

# No visible ink (e.g. space)
EMPTY = Box(0, 0, 0, 0)


def row_has_ink(alpha, y, width):
    """True when any sample in row y is non-zero."""
    return any(alpha(x, y) != 0 for x in range(width))


def column_has_ink(alpha, x, height):
    """True when any sample in column x is non-zero."""
    return any(alpha(x, y) != 0 for y in range(height))


def find_top(alpha, width, height):
    """First row from the top holding ink, or None."""
    for y in range(height):
        if row_has_ink(alpha, y, width):
            return y
    return None


def find_bottom(alpha, width, height):
    """First row from the bottom holding ink, or None."""
    for y in range(height - 1, -1, -1):
        if row_has_ink(alpha, y, width):
            return y
    return None


def find_left(alpha, width, height):
    """First column from the left holding ink, or None."""
    for x in range(width):
        if column_has_ink(alpha, x, height):
            return x
    return None


def find_right(alpha, width, height):
    """First column from the right holding ink, or None."""
    for x in range(width - 1, -1, -1):
        if column_has_ink(alpha, x, height):
            return x
    return None


def trim(alpha, width, height):
    """Return the minimal Box holding every non-zero alpha sample, or EMPTY."""
    top = find_top(alpha, width, height)
    if top is None:
        return EMPTY

    bottom = find_bottom(alpha, width, height)
    left = find_left(alpha, width, height)
    right = find_right(alpha, width, height)
    return Box(left, top, right - left + 1, bottom - top + 1)


def alpha_accessor(image):
    """Alpha sampler for a Pillow image (RGBA or single-channel 'L')."""
    if image.mode != "L":
        image = image.getchannel("A")
    pixels = image.load()
    return lambda x, y: pixels[x, y]


def trim_image(image):
    """Trim a Pillow image by its alpha channel."""
    width, height = image.size
    if width == 0 or height == 0:
        return EMPTY
    return trim(alpha_accessor(image), width, height)
