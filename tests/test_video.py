import struct

import pytest

from wolfmac.video import Color, Font, Screen, TextRenderer


def plain_shape(width, height, data):
    return struct.pack(">HH", width, height) + bytes(data)


def draw_masked(width, height, pixels, mask):
    return bytes([0, width, 0, height]) + bytes(pixels) + bytes(mask)


def collision_shape(width, height, pixels, mask):
    return bytes([width, height]) + bytes(pixels) + bytes(mask)


def at(screen, x, y):
    return screen.pixels[y * screen.stride + x]


def test_clear_with_named_colours():
    screen = Screen(2, 2)
    screen.clear(Color.BLACK)
    assert bytes(screen.pixels[0:2]) == bytes([255, 255])
    screen.clear(Color.RED)
    assert at(screen, 1, 1) == 216
    screen.clear(Color.WHITE)
    assert at(screen, 0, 0) == 0


def test_clear_fills_visible_area_only():
    screen = Screen(4, 3, stride=6)
    screen.clear(7)
    for y in range(3):
        assert bytes(screen.pixels[y * 6:y * 6 + 4]) == bytes([7] * 4)
        assert bytes(screen.pixels[y * 6 + 4:y * 6 + 6]) == bytes(2)


def test_clear_rejects_bad_colour():
    with pytest.raises(ValueError):
        Screen(4, 4).clear(256)


def test_draw_shape_copies_rows():
    screen = Screen(8, 8)
    screen.draw_shape(2, 3, plain_shape(2, 2, [1, 2, 3, 4]))
    assert [at(screen, 2, 3), at(screen, 3, 3)] == [1, 2]
    assert [at(screen, 2, 4), at(screen, 3, 4)] == [3, 4]
    assert at(screen, 1, 3) == 0


def test_draw_shape_out_of_bounds():
    with pytest.raises(ValueError):
        Screen(4, 4).draw_shape(3, 0, plain_shape(2, 1, [1, 2]))


def test_draw_shape_truncated():
    with pytest.raises(ValueError):
        Screen(4, 4).draw_shape(0, 0, plain_shape(2, 2, [1]))


def test_draw_masked_shape_combines_mask_and_pixels():
    screen = Screen(4, 4)
    screen.clear(0xF0)
    shape = draw_masked(2, 1, [0x05, 0x00], [0x00, 0xFF])
    screen.draw_masked_shape(0, 0, shape)
    assert at(screen, 0, 0) == 0x05
    assert at(screen, 1, 0) == 0xF0


def test_offset_masked_shape_matches_shifted_draw():
    inner = draw_masked(2, 2, [1, 2, 3, 4], [0, 0, 0xFF, 0])
    a = Screen(8, 8)
    b = Screen(8, 8)
    a.draw_offset_masked_shape(1, 1, struct.pack(">HH", 2, 3) + inner)
    b.draw_masked_shape(3, 4, inner)
    assert a.pixels == b.pixels


def test_erase_restores_background_under_opaque_pixels():
    screen = Screen(4, 2)
    background = bytes(range(8))
    shape = draw_masked(2, 2, [9, 9, 9, 9], [0, 0xFF, 0, 0])
    screen.draw_masked_shape(1, 0, draw_masked(2, 2, [9, 9, 9, 9], [0, 0, 0, 0]))
    screen.erase_masked_shape(1, 0, shape, background)
    assert at(screen, 1, 0) == background[1]
    assert at(screen, 2, 0) == 9
    assert at(screen, 1, 1) == background[5]
    assert at(screen, 2, 1) == background[6]


def test_erase_rejects_small_background():
    with pytest.raises(ValueError):
        Screen(4, 2).erase_masked_shape(0, 0, draw_masked(1, 1, [1], [0]), bytes(3))


def test_test_masked_shape_detects_difference():
    screen = Screen(4, 4)
    shape = collision_shape(2, 1, [3, 4], [0, 0xFF])
    screen.draw_masked_shape(1, 1, draw_masked(2, 1, [3, 4], [0, 0]))
    assert screen.test_masked_shape(1, 1, shape) is False
    screen.pixels[1 * 4 + 2] = 99  # transparent pixel: ignored
    assert screen.test_masked_shape(1, 1, shape) is False
    screen.pixels[1 * 4 + 1] = 99
    assert screen.test_masked_shape(1, 1, shape) is True


def test_test_masked_background():
    screen = Screen(4, 2)
    background = bytes([5] * 8)
    screen.clear(5)
    shape = collision_shape(2, 2, [0, 0, 0, 0], [0, 0, 0xFF, 0])
    assert screen.test_masked_background(0, 0, shape, background) is False
    screen.pixels[4] = 1  # masked-out position
    assert screen.test_masked_background(0, 0, shape, background) is False
    screen.pixels[5] = 1
    assert screen.test_masked_background(0, 0, shape, background) is True


def make_font():
    header = struct.pack("<HHH", 2, 1, ord("A"))
    widths = bytes([4])
    offsets = bytes([2, 0])
    rows = bytes([0x12, 0x30, 0x01, 0x23])
    return Font.from_bytes(header + widths + offsets + rows)


def test_font_from_bytes():
    font = make_font()
    assert font.height == 2
    assert font.first == ord("A")
    assert font.widths == bytes([4])


def test_font_truncated():
    with pytest.raises(ValueError):
        Font.from_bytes(b"\x01\x00")


def prepared_renderer():
    screen = Screen(8, 4)
    screen.clear(99)
    text = TextRenderer(screen)
    text.install_font(make_font())
    for index, color in ((1, 10), (2, 20), (3, 30)):
        text.set_color(index, color)
    return screen, text


def test_draw_char_with_mask():
    screen, text = prepared_renderer()
    text.use_mask()
    text.set_position(1, 1)
    text.draw_char("A")
    assert bytes(screen.pixels[9:13]) == bytes([10, 20, 30, 99])
    assert bytes(screen.pixels[17:21]) == bytes([99, 10, 20, 30])
    assert text.x == 5


def test_draw_char_with_zero_colour():
    screen, text = prepared_renderer()
    text.use_zero()
    text.draw_char(ord("A"))
    assert bytes(screen.pixels[0:4]) == bytes([10, 20, 30, Color.BLACK])


def test_unknown_char_is_skipped():
    screen, text = prepared_renderer()
    before = bytes(screen.pixels)
    text.draw_string("B@")
    assert bytes(screen.pixels) == before
    assert text.x == 0


def test_draw_string_stops_at_nul():
    screen, text = prepared_renderer()
    text.draw_string("A\0A")
    assert text.x == 4


def test_draw_char_without_font():
    with pytest.raises(RuntimeError):
        TextRenderer(Screen(4, 4)).draw_char("A")


def test_set_color_index_range():
    with pytest.raises(IndexError):
        TextRenderer(Screen(4, 4)).set_color(16, 1)