"""Low-level data helpers: LZSS unpacking, byte swapping and number text."""

from __future__ import annotations

_WINDOW = 0x1000
_MIN_RUN = 3
_MAX_LONG = 0xFFFFFFFF


def decompress_lzss(data: bytes, length: int) -> bytes:
    """Unpack ``length`` bytes from an LZSS stream.

    Each flag byte covers eight tokens, least significant bit first. A set
    bit is a literal byte; a clear bit is a two-byte little-endian back
    reference whose low twelve bits encode ``0x1000 - distance`` and whose
    high four bits encode ``run - 3``.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    out = bytearray()
    source = iter(data)

    def next_byte() -> int:
        try:
            return next(source)
        except StopIteration:
            raise ValueError("compressed data ended early") from None

    flags = 1
    while len(out) < length:
        if flags <= 1:
            flags = next_byte() | 0x100
        if flags & 1:
            out.append(next_byte())
        else:
            token = next_byte() | (next_byte() << 8)
            distance = _WINDOW - (token & 0xFFF)
            run = ((token >> 12) & 0x0F) + _MIN_RUN
            start = len(out) - distance
            if start < 0:
                raise ValueError("back reference points before the output start")
            for offset in range(run):
                out.append(out[start + offset])
        flags >>= 1
    return bytes(out[:length])


def swap_ushort(value: int) -> int:
    """Exchange the two bytes of a 16-bit unsigned value."""
    if not 0 <= value <= 0xFFFF:
        raise ValueError("value must fit in 16 bits unsigned")
    return ((value << 8) | (value >> 8)) & 0xFFFF


def format_unsigned(value: int) -> str:
    """Render a 32-bit unsigned value as decimal text without leading zeros."""
    if not 0 <= value <= _MAX_LONG:
        raise ValueError("value must fit in 32 bits unsigned")
    return str(value)