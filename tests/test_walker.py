import random
import unittest
from enum import IntEnum

from demo_builders import BitWriter, field_len, field_varint

from demo_analysis.config import AnalyzerConfig
from demo_analysis.dispatcher import TypeDispatcher
from demo_analysis.walker import PacketWalker
from demo_loader.exceptions import BitBufferOverflowError
from demo_models.values import Scalar
from demo_registry import MessageRegistry, NET_Messages, SVC_Messages
from demo_registry.tables import EDemoCommands


class _Overlap(IntEnum):
    shared = 5


class _CountingRegistry(MessageRegistry):
    def __init__(self, name, *enums, fail=False):
        super().__init__(name, *enums)
        self.calls = 0
        self.fail = fail

    def decode(self, code, data):
        self.calls += 1
        if self.fail:
            raise RuntimeError("boom")
        return super().decode(code, data)


class TypeDispatcherTests(unittest.TestCase):
    def test_resolve_name(self):
        dispatcher = TypeDispatcher()
        self.assertEqual(dispatcher.resolve_name(0), "net_NOP")
        self.assertEqual(dispatcher.resolve_name(55), "svc_PacketEntities")
        self.assertEqual(dispatcher.resolve_name(117), "UM_SayText")
        self.assertEqual(dispatcher.resolve_name(99), "unknown")

    def test_unknown_type_fails_decode(self):
        result = TypeDispatcher().decode(99, b"\x08\x01")
        self.assertFalse(result.success)
        self.assertEqual(result.error, "Unknown message type: 99")
        self.assertIsNone(result.data)

    def test_first_owner_wins_without_fallback(self):
        first = _CountingRegistry("First", _Overlap, fail=True)
        second = _CountingRegistry("Second", _Overlap)
        dispatcher = TypeDispatcher(registries=[first, second])

        self.assertEqual(dispatcher.resolve_name(5), "shared")
        self.assertIs(dispatcher.owner_of(5), first)
        result = dispatcher.decode(5, b"")
        self.assertFalse(result.success)
        self.assertEqual(result.error, "boom")
        self.assertEqual((first.calls, second.calls), (1, 0))

    def test_order_decides_owner(self):
        first = _CountingRegistry("First", _Overlap)
        second = _CountingRegistry("Second", _Overlap)
        result = TypeDispatcher(registries=[second, first]).decode(5, field_varint(1, 2))
        self.assertTrue(result.success)
        self.assertEqual((first.calls, second.calls), (0, 1))

    def test_decode_command(self):
        dispatcher = TypeDispatcher()
        ok = dispatcher.decode_command(EDemoCommands.DEM_FileInfo, field_varint(1, 3))
        self.assertTrue(ok.success)
        self.assertEqual(ok.data.type_name, "DEM_FileInfo")

        bad = dispatcher.decode_command(42, b"\x08\x01")
        self.assertFalse(bad.success)
        self.assertIn("42", bad.error)


class PacketWalkerTests(unittest.TestCase):
    def setUp(self):
        self.walker = PacketWalker()

    def test_single_nop(self):
        packets = self.walker.walk(BitWriter().packet(NET_Messages.net_NOP).to_bytes())
        self.assertEqual(len(packets), 1)
        nop = packets[0]
        self.assertEqual((nop.type, nop.type_name, nop.size, nop.success), (0, "net_NOP", 0, True))
        self.assertIsNone(nop.error)
        self.assertIsNone(nop.raw_sample)
        self.assertIsNone(nop.decode_success)

    def test_nop_does_not_end_walk(self):
        payload = (
            BitWriter()
            .packet(NET_Messages.net_NOP)
            .packet(NET_Messages.net_NOP)
            .packet(NET_Messages.net_Tick, field_varint(1, 150))
            .to_bytes()
        )
        packets = self.walker.walk(payload)
        self.assertEqual([p.type for p in packets], [0, 0, 4])
        self.assertEqual([p.cursor_at_start for p in packets], [0, 6, 12])
        tick = packets[2]
        self.assertTrue(tick.success)
        self.assertEqual(tick.size, 3)
        self.assertEqual(tick.raw_sample, "08 96 01")
        self.assertTrue(tick.decode_success)
        self.assertEqual(tick.decoded_data.type_name, "net_Tick")
        self.assertEqual(tick.decoded_data.get(1), Scalar(150))
        self.assertEqual(tick.remaining_bytes_after, 0)

    def test_raw_sample_is_first_ten_bytes(self):
        payload = BitWriter().packet(SVC_Messages.svc_Print, field_len(1, b"abcdefghijklmnop")).to_bytes()
        packet = self.walker.walk(payload)[0]
        self.assertEqual(packet.raw_sample, "0a 10 61 62 63 64 65 66 67 68")
        self.assertEqual(packet.decoded_data.get(1), Scalar("abcdefghijklmnop"))

    def test_size_overrun_ends_walk(self):
        writer = BitWriter().packet(NET_Messages.net_NOP)
        writer.write_ubitvar(NET_Messages.net_Tick).write_varint(50).write_bytes(b"\x01\x02")
        packets = self.walker.walk(writer.to_bytes())
        self.assertEqual(len(packets), 2)
        last = packets[-1]
        self.assertFalse(last.success)
        self.assertIn("exceeds remaining bytes", last.error)
        self.assertEqual(last.size, 50)
        self.assertEqual(last.type_name, "net_Tick")

    def test_unknown_type_is_still_a_good_packet(self):
        payload = (
            BitWriter()
            .packet(99, b"\x08\x01")
            .packet(NET_Messages.net_Tick, field_varint(1, 1))
            .to_bytes()
        )
        packets = self.walker.walk(payload)
        self.assertEqual(len(packets), 2)
        unknown = packets[0]
        self.assertTrue(unknown.success)
        self.assertEqual(unknown.type_name, "unknown")
        self.assertFalse(unknown.decode_success)
        self.assertEqual(unknown.decode_error, "Unknown message type: 99")

    def test_decode_failure_does_not_end_walk(self):
        payload = (
            BitWriter()
            .packet(SVC_Messages.svc_Print, b"\x0a\x05ab")
            .packet(NET_Messages.net_Tick, field_varint(1, 1))
            .to_bytes()
        )
        packets = self.walker.walk(payload)
        self.assertEqual(len(packets), 2)
        self.assertTrue(packets[0].success)
        self.assertFalse(packets[0].decode_success)
        self.assertIn("exceeds", packets[0].decode_error)
        self.assertTrue(packets[1].decode_success)

    def test_read_error_is_recorded_and_ends_walk(self):
        with self.assertLogs("demo_analysis.walker", level="WARNING"):
            packets = self.walker.walk(b"\xff")
        self.assertEqual(len(packets), 1)
        self.assertFalse(packets[0].success)
        self.assertTrue(packets[0].error)
        self.assertEqual(packets[0].remaining_bytes_after, 1)

    def test_insufficient_bits(self):
        walker = PacketWalker(config=AnalyzerConfig(min_type_bits=9))
        packets = walker.walk(b"\x00")
        self.assertEqual(len(packets), 1)
        self.assertIn("insufficient bits for packet type", packets[0].error.lower())
        self.assertFalse(packets[0].success)

    def test_empty_payload_yields_nothing(self):
        self.assertEqual(self.walker.walk(b""), [])

    def test_spawn_groups_skip_sequence(self):
        payload = BitWriter().write_ubitvar(5).packet(NET_Messages.net_NOP).to_bytes()
        packets = self.walker.walk(payload, EDemoCommands.DEM_SpawnGroups)
        self.assertEqual(len(packets), 1)
        self.assertEqual(packets[0].cursor_at_start, 6)

    def test_spawn_groups_sequence_failure_raises(self):
        with self.assertRaises(BitBufferOverflowError):
            self.walker.walk(b"\xff", EDemoCommands.DEM_SpawnGroups)

    def test_index_and_cursor_invariants_on_noise(self):
        rng = random.Random(1234)
        for _ in range(200):
            payload = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 40)))
            packets = self.walker.walk(payload)
            self.assertTrue(packets)
            self.assertEqual([p.packet_index for p in packets], list(range(len(packets))))
            cursors = [p.cursor_at_start for p in packets]
            self.assertEqual(cursors, sorted(cursors))
            for packet in packets[:-1]:
                self.assertTrue(packet.success)
                self.assertIsNone(packet.error)
            for packet in packets:
                if packet.type == NET_Messages.net_NOP and packet.success:
                    self.assertEqual(packet.size, 0)


if __name__ == "__main__":
    unittest.main()
