"""Tests for the MSB-first bit reader and RECT decoding."""

from __future__ import annotations

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

from swfinfo import BitReader, Rect, read_rect, rect_byte_length
from swf_samples import STAGE_550x400, rect_bytes


class TestBitReader(unittest.TestCase):
    def test_fields_cross_byte_boundaries(self):
        reader = BitReader(b"\xA5\x0F")
        self.assertEqual(reader.read_unsigned(4), 0xA)
        self.assertEqual(reader.read_unsigned(8), 0x50)
        self.assertEqual(reader.read_unsigned(4), 0xF)
        self.assertEqual(reader.bit_position, 16)

    def test_full_32_bit_field(self):
        reader = BitReader(b"\xDE\xAD\xBE\xEF")
        self.assertEqual(reader.read_unsigned(32), 0xDEADBEEF)

    def test_bits_past_end_read_as_zero(self):
        reader = BitReader(b"\xFF")
        self.assertEqual(reader.read_unsigned(12), 0xFF0)
        self.assertEqual(reader.read_unsigned(32), 0)

    def test_zero_width_reads(self):
        reader = BitReader(b"\xFF")
        self.assertEqual(reader.read_unsigned(0), 0)
        self.assertEqual(reader.read_signed(0), 0)
        self.assertEqual(reader.bit_position, 0)

    def test_width_out_of_range(self):
        with self.assertRaises(ValueError):
            BitReader(b"\x00").read_unsigned(33)
        with self.assertRaises(ValueError):
            BitReader(b"\x00").read_unsigned(-1)

    def test_signed_extension(self):
        reader = BitReader(b"\xF0")
        self.assertEqual(reader.read_signed(4), -1)
        self.assertEqual(reader.read_signed(4), 0)

        reader = BitReader(b"\x80")
        self.assertEqual(reader.read_signed(8), -128)

        reader = BitReader(b"\x70")
        self.assertEqual(reader.read_signed(4), 7)

    def test_align_to_byte(self):
        reader = BitReader(b"\xFF\x81")
        reader.read_unsigned(3)
        reader.align_to_byte()
        self.assertEqual(reader.byte_position, 1)
        reader.align_to_byte()  # already aligned
        self.assertEqual(reader.bit_position, 8)
        self.assertEqual(reader.read_unsigned(8), 0x81)

    def test_start_offset(self):
        reader = BitReader(b"\x00\x00\xC0", start=2)
        self.assertEqual(reader.read_unsigned(2), 3)


class TestRect(unittest.TestCase):
    def test_standard_stage(self):
        rect = read_rect(BitReader(rect_bytes(*STAGE_550x400)))
        self.assertEqual(rect.nbits, 15)
        self.assertEqual((rect.xmin, rect.xmax, rect.ymin, rect.ymax), (0, 11000, 0, 8000))
        self.assertEqual(rect.width_px, 550)
        self.assertEqual(rect.height_px, 400)

    def test_negative_origin(self):
        rect = read_rect(BitReader(rect_bytes(-200, 200, -100, 100)))
        self.assertEqual(rect.xmin, -200)
        self.assertEqual(rect.ymin, -100)
        self.assertEqual(rect.width_px, 20)
        self.assertEqual(rect.height_px, 10)

    def test_pixels_truncate_toward_zero(self):
        self.assertEqual(Rect(nbits=8, xmin=0, xmax=39, ymin=0, ymax=-39).width_px, 1)
        self.assertEqual(Rect(nbits=8, xmin=0, xmax=39, ymin=0, ymax=-39).height_px, -1)

    def test_reader_left_byte_aligned(self):
        data = rect_bytes(*STAGE_550x400) + b"\x00\x0C"
        reader = BitReader(data)
        read_rect(reader)
        self.assertEqual(reader.byte_position, 9)
        self.assertEqual(reader.read_unsigned(8), 0x00)
        self.assertEqual(reader.read_unsigned(8), 0x0C)

    def test_byte_length(self):
        # 5 + 4 * 15 = 65 bits -> 9 bytes.
        self.assertEqual(rect_byte_length(rect_bytes(*STAGE_550x400)), 9)
        # nbits = 0 still occupies the 5-bit width field.
        self.assertEqual(rect_byte_length(b"\x00"), 1)
        self.assertEqual(rect_byte_length(b"XXXX" + rect_bytes(*STAGE_550x400), start=4), 9)


if __name__ == "__main__":
    unittest.main()
