"""Software frame buffer: shapes, masked sprites and bitmap fonts."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Iterable, Optional, Union

SCREEN_WIDTH = 320
SCREEN_HEIGHT = 200
FONT_COLORS = 16


class Color(enum.IntEnum):
    """Named entries of the game's 256 colour palette."""

    BLACK = 255
    DARKGREY = 250
    BROWN = 101
    PURPLE = 133
    BLUE = 210
    DARKGREEN = 229
    ORANGE = 23
    RED = 216
    BEIGE = 14
    YELLOW = 5
    GREEN = 225
    LIGHTBLUE = 150
    LILAC = 48
    PERIWINKLE = 120
    LIGHTGREY = 43
    WHITE = 0


def _byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError("colour must be in the range 0-255")
    return int(value)


def _masked_parts(shape: bytes, wide_header: bool) -> tuple[int, int, bytes, bytes]:
    """Split a masked shape into width, height, pixel rows and mask rows.

    Drawing shapes carry two 16-bit big-endian dimensions (only the low
    bytes are used); collision shapes carry two single bytes.
    """
    header = 4 if wide_header else 2
    if len(shape) < header:
        raise ValueError("shape header is truncated")
    if wide_header:
        width, height = shape[1], shape[3]
    else:
        width, height = shape[0], shape[1]
    size = width * height
    if len(shape) < header + 2 * size:
        raise ValueError("shape data is truncated")
    pixels = bytes(shape[header:header + size])
    mask = bytes(shape[header + size:header + 2 * size])
    return width, height, pixels, mask


class Screen:
    """An 8-bit indexed frame buffer with a row stride."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT,
                 stride: Optional[int] = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen dimensions must be positive")
        stride = width if stride is None else stride
        if stride < width:
            raise ValueError("stride must be at least the screen width")
        self.width = width
        self.height = height
        self.stride = stride
        self.pixels = bytearray(stride * height)

    def _locate(self, x: int, y: int, width: int, height: int) -> int:
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValueError("area does not fit on the screen")
        return y * self.stride + x

    def _row_offsets(self, x: int, y: int, width: int, height: int) -> Iterable[int]:
        base = self._locate(x, y, width, height)
        return (base + row * self.stride for row in range(height))

    def _check_background(self, background: bytes) -> None:
        if len(background) < self.width * self.height:
            raise ValueError("background buffer is smaller than the screen")

    def clear(self, color: int) -> None:
        """Fill the visible area with one colour."""
        fill = bytes([_byte(color)]) * self.width
        for row in range(self.height):
            start = row * self.stride
            self.pixels[start:start + self.width] = fill

    def draw_shape(self, x: int, y: int, shape: bytes) -> None:
        """Copy an opaque shape (big-endian width, height, then pixels)."""
        if len(shape) < 4:
            raise ValueError("shape header is truncated")
        width, height = struct.unpack_from(">HH", shape)
        size = width * height
        if len(shape) < 4 + size:
            raise ValueError("shape data is truncated")
        data = bytes(shape[4:4 + size])
        for row, offset in enumerate(self._row_offsets(x, y, width, height)):
            self.pixels[offset:offset + width] = data[row * width:(row + 1) * width]

    def draw_masked_shape(self, x: int, y: int, shape: bytes) -> None:
        """AND the mask into the screen, then OR the shape's pixels on top."""
        width, height, pixels, mask = _masked_parts(shape, wide_header=True)
        for row, offset in enumerate(self._row_offsets(x, y, width, height)):
            src = slice(row * width, (row + 1) * width)
            line = self.pixels[offset:offset + width]
            self.pixels[offset:offset + width] = bytes(
                (s & m) | p for s, m, p in zip(line, mask[src], pixels[src]))

    def draw_offset_masked_shape(self, x: int, y: int, shape: bytes) -> None:
        """Draw a masked shape preceded by a big-endian x, y offset."""
        if len(shape) < 4:
            raise ValueError("shape header is truncated")
        dx, dy = struct.unpack_from(">HH", shape)
        self.draw_masked_shape(x + dx, y + dy, shape[4:])

    def erase_masked_shape(self, x: int, y: int, shape: bytes, background: bytes) -> None:
        """Restore background pixels wherever the shape's mask is zero.

        The background buffer is laid out with the screen width as its stride.
        """
        self._check_background(background)
        width, height, _, mask = _masked_parts(shape, wide_header=True)
        for row, offset in enumerate(self._row_offsets(x, y, width, height)):
            src = slice(row * width, (row + 1) * width)
            back = (y + row) * self.width + x
            line = self.pixels[offset:offset + width]
            self.pixels[offset:offset + width] = bytes(
                s if m else b
                for s, m, b in zip(line, mask[src], background[back:back + width]))

    def test_masked_shape(self, x: int, y: int, shape: bytes) -> bool:
        """Whether any opaque pixel of the shape differs from the screen."""
        width, height, pixels, mask = _masked_parts(shape, wide_header=False)
        for row, offset in enumerate(self._row_offsets(x, y, width, height)):
            src = slice(row * width, (row + 1) * width)
            line = self.pixels[offset:offset + width]
            if any(not m and s != p for s, m, p in zip(line, mask[src], pixels[src])):
                return True
        return False

    def test_masked_background(self, x: int, y: int, shape: bytes, background: bytes) -> bool:
        """Whether the screen differs from the background under the shape's opaque pixels."""
        self._check_background(background)
        width, height, _, mask = _masked_parts(shape, wide_header=False)
        for row, offset in enumerate(self._row_offsets(x, y, width, height)):
            src = slice(row * width, (row + 1) * width)
            back = (y + row) * self.width + x
            line = self.pixels[offset:offset + width]
            if any(not m and s != b
                   for s, m, b in zip(line, mask[src], background[back:back + width])):
                return True
        return False


@dataclass(frozen=True)
class Font:
    """A 4-bit bitmap font: per-glyph widths plus an offset table and glyph rows."""

    height: int
    first: int
    widths: bytes
    glyphs: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "Font":
        """Parse a font resource: little-endian height, count and first code."""
        if len(data) < 6:
            raise ValueError("font header is truncated")
        height, count, first = struct.unpack_from("<HHH", data)
        if len(data) < 6 + count + 2 * count:
            raise ValueError("font tables are truncated")
        return cls(height=height, first=first,
                   widths=bytes(data[6:6 + count]), glyphs=bytes(data[6 + count:]))


class TextRenderer:
    """Draws text with an installed font onto a screen."""

    def __init__(self, screen: Screen) -> None:
        self.screen = screen
        self.font: Optional[Font] = None
        self.x = 0
        self.y = 0
        self.invisible: Optional[int] = 0
        self.colors = [0] * FONT_COLORS

    def install_font(self, font: Font) -> None:
        """Make ``font`` the one used for drawing."""
        self.font = font

    def set_position(self, x: int, y: int) -> None:
        """Move the pen to x, y."""
        self.x = x
        self.y = y

    def use_mask(self) -> None:
        """Treat colour index zero as transparent."""
        self.invisible = 0
        self.set_color(0, 0)

    def use_zero(self) -> None:
        """Draw colour index zero as black."""
        self.invisible = None
        self.set_color(0, Color.BLACK)

    def set_color(self, index: int, color: int) -> None:
        """Map one of the sixteen font colour indices to a palette entry."""
        if not 0 <= index < FONT_COLORS:
            raise IndexError("font colour index out of range")
        self.colors[index] = _byte(color)

    def draw_char(self, letter: Union[int, str]) -> None:
        """Draw one character and advance the pen; unknown characters are skipped."""
        if self.font is None:
            raise RuntimeError("no font installed")
        font = self.font
        code = ord(letter) if isinstance(letter, str) else letter
        index = code - font.first
        if not 0 <= index < len(font.widths):
            return
        advance = font.widths[index]
        pairs = max(advance - 1, 0) // 2 + 1
        glyphs = font.glyphs
        offset = glyphs[index * 2] | (glyphs[index * 2 + 1] << 8)
        if offset + pairs * font.height > len(glyphs):
            raise ValueError("glyph data is truncated")
        rows = list(self.screen._row_offsets(self.x, self.y, pairs * 2, font.height))
        self.x += advance
        pixels = self.screen.pixels
        source = iter(glyphs[offset:offset + pairs * font.height])
        for start in rows:
            for col in range(pairs):
                packed = next(source)
                for nibble, pos in ((packed >> 4, start + 2 * col),
                                    (packed & 0x0F, start + 2 * col + 1)):
                    if nibble != self.invisible:
                        pixels[pos] = self.colors[nibble]

    def draw_string(self, text: Union[str, bytes]) -> None:
        """Draw characters in order, stopping at a NUL."""
        for letter in text:
            code = ord(letter) if isinstance(letter, str) else letter
            if not code:
                break
            self.draw_char(code)