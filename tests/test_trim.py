from PIL import Image

from fontatlas.trim import (
    EMPTY, Box, find_bottom, find_left, find_right, find_top, trim, trim_image,
)


def accessor(rows):
    return lambda x, y: rows[y][x]


def blank(width, height):
    return [[0] * width for _ in range(height)]


def test_blank_bitmap_is_empty():
    rows = blank(6, 4)
    assert trim(accessor(rows), 6, 4) == EMPTY
    assert find_top(accessor(rows), 6, 4) is None
    assert find_bottom(accessor(rows), 6, 4) is None
    assert find_left(accessor(rows), 6, 4) is None
    assert find_right(accessor(rows), 6, 4) is None


def test_single_sample():
    rows = blank(5, 5)
    rows[3][2] = 1
    assert trim(accessor(rows), 5, 5) == Box(2, 3, 1, 1)


def test_edges_scanned_independently():
    rows = blank(8, 6)
    rows[1][5] = 255
    rows[4][2] = 17
    alpha = accessor(rows)
    assert find_top(alpha, 8, 6) == 1
    assert find_bottom(alpha, 8, 6) == 4
    assert find_left(alpha, 8, 6) == 2
    assert find_right(alpha, 8, 6) == 5
    assert trim(alpha, 8, 6) == Box(2, 1, 4, 4)


def test_ink_touching_every_border():
    rows = blank(3, 3)
    rows[0][1] = 9
    rows[2][0] = 9
    rows[1][2] = 9
    assert trim(accessor(rows), 3, 3) == Box(0, 0, 3, 3)


def test_trimmed_box_is_minimal():
    rows = blank(10, 9)
    for x, y in [(3, 2), (4, 2), (6, 5), (3, 7), (5, 4)]:
        rows[y][x] = 128
    alpha = accessor(rows)
    box = trim(alpha, 10, 9)

    for y in range(9):
        for x in range(10):
            inside = box.left <= x < box.left + box.width and box.top <= y < box.top + box.height
            if not inside:
                assert alpha(x, y) == 0

    right = box.left + box.width - 1
    bottom = box.top + box.height - 1
    assert any(alpha(x, box.top) for x in range(10))
    assert any(alpha(x, bottom) for x in range(10))
    assert any(alpha(box.left, y) for y in range(9))
    assert any(alpha(right, y) for y in range(9))


def test_trim_image_reads_alpha_channel():
    image = Image.new("RGBA", (12, 10), (0, 0, 0, 0))
    image.paste((0, 0, 0, 255), (4, 3), Image.new("L", (3, 5), 90))
    assert trim_image(image) == Box(4, 3, 3, 5)


def test_trim_image_ignores_colour_without_alpha():
    image = Image.new("RGBA", (4, 4), (255, 255, 255, 0))
    assert trim_image(image) == EMPTY


def test_trim_zero_area_image():
    assert trim_image(Image.new("RGBA", (0, 7))) == EMPTY
