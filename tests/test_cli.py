import json
import os
import tempfile
import unittest

from click.testing import CliRunner

from demo_builders import BitWriter, build_fragment, field_varint

from demo_analysis.engine import analyze_fragment
from demo_analysis.formatter import to_console_lines, to_json
from demo_cli.main import cli
from demo_registry import NET_Messages
from demo_registry.tables import EDemoCommands


def _sample_fragment() -> bytes:
    return build_fragment(
        (EDemoCommands.DEM_FileHeader, b""),
        (EDemoCommands.DEM_Packet, BitWriter()
            .packet(NET_Messages.net_Tick, field_varint(1, 5))
            .packet(77, b"\x00")
            .to_bytes()),
    )


class FormatterTests(unittest.TestCase):
    def test_console_lines(self):
        lines = to_console_lines(analyze_fragment(_sample_fragment()))
        self.assertEqual(lines[0], "=== DEMO ANALYSIS REPORT ===")
        self.assertIn("Total Chunks: 2", lines)
        self.assertIn("Total Network Packets: 2", lines)
        self.assertIn("Packet Decode Errors: 1", lines)
        self.assertIn("Chunk 1: DEM_Packet (7)", lines)
        self.assertIn("  Success: False | Error: No data available", lines)
        self.assertIn("    0: net_Tick (4) - 2 bytes", lines)
        self.assertIn("    1: unknown (77) - 1 bytes | Decode: Unknown message type: 77", lines)

    def test_console_without_packets(self):
        lines = to_console_lines(analyze_fragment(_sample_fragment()), show_packets=False)
        self.assertFalse(any("net_Tick" in line for line in lines))

    def test_json(self):
        report = analyze_fragment(_sample_fragment())
        data = json.loads(to_json(report))
        self.assertEqual(data["total_chunks"], 2)
        self.assertEqual(data["chunks"][0]["analysis_type"], "protobuf")
        packet = data["chunks"][1]["network_packets"][0]
        self.assertEqual(packet["decoded_data"], {"type": "net_Tick", "fields": {"1": 5}})
        compact = to_json(report, pretty=False, include_timing=False)
        self.assertNotIn("\n", compact)
        self.assertNotIn("parse_time_ms", compact)


class CliTests(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "fragment.bin")
        with open(self.path, "wb") as f:
            f.write(_sample_fragment())

    def tearDown(self):
        self.tmp.cleanup()

    def test_analyze_table(self):
        result = self.runner.invoke(cli, ["analyze", self.path])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Total Chunks: 2", result.output)
        self.assertIn("net_Tick", result.output)

    def test_analyze_json_to_file(self):
        out = os.path.join(self.tmp.name, "report.json")
        result = self.runner.invoke(cli, ["analyze", self.path, "--format", "json", "--output", out, "--head", "4"])
        self.assertEqual(result.exit_code, 0, result.output)
        with open(out, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["summary"]["total_network_packets"], 2)
        self.assertEqual(len(data["chunks"][1]["raw_sample"]["first_20_bytes"].split()), 4)

    def test_analyze_bad_framing(self):
        with open(self.path, "wb") as f:
            f.write(b"\x07\x00")
        result = self.runner.invoke(cli, ["analyze", self.path])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("truncated", result.output)

    def test_chunks(self):
        result = self.runner.invoke(cli, ["chunks", self.path])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("DEM_FileHeader", result.output)
        self.assertIn("DEM_Packet", result.output)
        self.assertIn("2 chunks", result.output)


if __name__ == "__main__":
    unittest.main()
