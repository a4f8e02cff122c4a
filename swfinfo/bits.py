from __future__ import annotations

from dataclasses import dataclass

TWIPS_PER_PIXEL = 20
RECT_NBITS_WIDTH = 5
MAX_FIELD_BITS = 32


class BitReader:
    """
    Read bit fields most-significant-bit first out of a byte buffer.

    Movie files store multi-byte integers little endian, but packed bit fields
    (the stage RECT, shape records) fill each byte from bit 7 down to bit 0.
    Reads past the end of ``data`` return zero bits instead of raising, so a
    truncated prefix decodes to whatever was actually present.
    """

    def __init__(self, data: bytes, start: int = 0) -> None:
        self._data = data
        self._bitpos = max(0, start) * 8

    @property
    def bit_position(self) -> int:
        return self._bitpos

    @property
    def byte_position(self) -> int:
        return self._bitpos >> 3

    def read_unsigned(self, nbits: int) -> int:
        if not 0 <= nbits <= MAX_FIELD_BITS:
            raise ValueError(f"bit field width must be 0..{MAX_FIELD_BITS}, got {nbits}")
        data = self._data
        size = len(data)
        value = 0
        for _ in range(nbits):
            byte_idx = self._bitpos >> 3
            shift = 7 - (self._bitpos & 7)
            self._bitpos += 1
            byte = data[byte_idx] if byte_idx < size else 0
            value = (value << 1) | ((byte >> shift) & 1)
        return value

    def read_signed(self, nbits: int) -> int:
        value = self.read_unsigned(nbits)
        if nbits and value & (1 << (nbits - 1)):
            value -= 1 << nbits
        return value

    def align_to_byte(self) -> None:
        rem = self._bitpos & 7
        if rem:
            self._bitpos += 8 - rem


def _twips_to_pixels(twips: int) -> int:
    # Truncates toward zero.
    pixels = abs(twips) // TWIPS_PER_PIXEL
    return -pixels if twips < 0 else pixels


@dataclass(frozen=True)
class Rect:
    nbits: int
    xmin: int
    xmax: int
    ymin: int
    ymax: int

    @property
    def width_twips(self) -> int:
        return self.xmax - self.xmin

    @property
    def height_twips(self) -> int:
        return self.ymax - self.ymin

    @property
    def width_px(self) -> int:
        return _twips_to_pixels(self.width_twips)

    @property
    def height_px(self) -> int:
        return _twips_to_pixels(self.height_twips)


def read_rect(reader: BitReader) -> Rect:
    """Decode a RECT record and leave ``reader`` on the following byte boundary."""

    nbits = reader.read_unsigned(RECT_NBITS_WIDTH)
    xmin = reader.read_signed(nbits)
    xmax = reader.read_signed(nbits)
    ymin = reader.read_signed(nbits)
    ymax = reader.read_signed(nbits)
    reader.align_to_byte()
    return Rect(nbits=nbits, xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def rect_byte_length(data: bytes, start: int = 0) -> int:
    """Number of bytes a RECT starting at ``start`` occupies, padding included."""

    reader = BitReader(data, start)
    nbits = reader.read_unsigned(RECT_NBITS_WIDTH)
    total_bits = RECT_NBITS_WIDTH + 4 * nbits
    return (total_bits + 7) // 8
