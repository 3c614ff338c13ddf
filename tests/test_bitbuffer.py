import unittest

from demo_builders import BitWriter, encode_varint

from demo_loader.bitbuffer import BitBuffer
from demo_loader.exceptions import BitBufferOverflowError


class BitBufferTests(unittest.TestCase):
    def test_read_bits_lsb_first_across_bytes(self):
        buf = BitBuffer(b"\xab\xcd")
        self.assertEqual(buf.read_bits(4), 0xB)
        self.assertEqual(buf.read_bits(8), 0xDA)
        self.assertEqual(buf.read_bits(4), 0xC)
        self.assertEqual(buf.remaining_bits(), 0)

    def test_remaining_counts(self):
        buf = BitBuffer(b"\x00\x00\x00")
        self.assertEqual(buf.remaining_bytes(), 3)
        buf.read_bits(3)
        self.assertEqual(buf.remaining_bits(), 21)
        self.assertEqual(buf.remaining_bytes(), 2)

    def test_ubitvar_widths(self):
        for value in (0, 7, 15, 16, 200, 255, 256, 4000, 4096, 123456):
            writer = BitWriter().write_ubitvar(value)
            buf = BitBuffer(writer.to_bytes())
            self.assertEqual(buf.read_ubitvar(), value, value)
            self.assertEqual(buf.cursor, writer.bit_length)

    def test_uvarint32_unaligned(self):
        writer = BitWriter().write_bits(0b101, 3).write_varint(300).write_varint(2 ** 32 - 1)
        buf = BitBuffer(writer.to_bytes())
        self.assertEqual(buf.read_bits(3), 0b101)
        self.assertEqual(buf.read_uvarint32(), 300)
        self.assertEqual(buf.read_uvarint32(), 2 ** 32 - 1)

    def test_uvarint64(self):
        buf = BitBuffer(encode_varint(2 ** 40 + 5))
        self.assertEqual(buf.read_uvarint64(), 2 ** 40 + 5)

    def test_read_bytes_aligned_and_unaligned(self):
        buf = BitBuffer(b"\x01\x02\x03")
        self.assertEqual(buf.read_bytes(2), b"\x01\x02")

        writer = BitWriter().write_bits(1, 1).write_bytes(b"\xde\xad")
        buf = BitBuffer(writer.to_bytes())
        buf.read_bits(1)
        self.assertEqual(buf.read_bytes(2), b"\xde\xad")

    def test_overflow_raises_and_keeps_cursor(self):
        buf = BitBuffer(b"\xff")
        buf.read_bits(2)
        with self.assertRaises(BitBufferOverflowError):
            buf.read_bits(7)
        self.assertEqual(buf.cursor, 2)
        with self.assertRaises(EOFError):
            buf.read_bytes(1)
        self.assertEqual(buf.cursor, 2)

    def test_ubitvar_overflow_restores_cursor(self):
        # 0x3F selects a 28-bit extension that is not there
        buf = BitBuffer(b"\xff")
        with self.assertRaises(BitBufferOverflowError):
            buf.read_ubitvar()
        self.assertEqual(buf.cursor, 0)

    def test_truncated_varint(self):
        buf = BitBuffer(b"\x80\x80")
        with self.assertRaises(BitBufferOverflowError):
            buf.read_uvarint32()
        self.assertEqual(buf.cursor, 0)


if __name__ == "__main__":
    unittest.main()
