"""Report output: JSON and console text."""
import json
from typing import List

from demo_models.report import FragmentReport


def to_json(report: FragmentReport, pretty: bool = True, include_timing: bool = True) -> str:
    data = report.to_dict(include_timing=include_timing)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=True)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=True)


def to_console_lines(report: FragmentReport, show_packets: bool = True) -> List[str]:
    summary = report.summary
    lines = [
        "=== DEMO ANALYSIS REPORT ===",
        f"Fragment Size: {report.fragment_size} bytes",
        f"Total Chunks: {report.total_chunks}",
        f"Network Packet Chunks: {summary.network_packet_chunks}",
        f"Protobuf Chunks: {summary.protobuf_chunks}",
        f"Unknown Chunks: {summary.unknown_chunks}",
        f"Total Network Packets: {summary.total_network_packets}",
        f"Chunk Errors: {summary.errors}",
        f"Packet Parse Errors: {summary.packet_errors}",
        f"Packet Decode Errors: {summary.packet_decode_errors}",
        f"Parse Time: {report.total_parse_time_ms:.3f} ms "
        f"(avg chunk {report.performance.average_chunk_parse_time_ms:.3f} ms)",
        "",
        "=== DETAILED ANALYSIS ===",
    ]

    for chunk in report.chunks:
        lines.append("")
        lines.append(f"Chunk {chunk.index}: {chunk.command_name} ({chunk.command})")
        lines.append(
            f"  Size: {chunk.size} bytes | Compressed: {chunk.is_compressed} | "
            f"Type: {chunk.analysis_type.value}"
        )
        status = f"  Success: {chunk.success}"
        if chunk.error:
            status += f" | Error: {chunk.error}"
        lines.append(status)

        if show_packets and chunk.packets:
            lines.append(f"  Network Packets ({len(chunk.packets)}):")
            for packet in chunk.packets:
                line = f"    {packet.packet_index}: {packet.type_name} ({packet.type}) - {packet.size} bytes"
                if packet.error:
                    line += f" | Error: {packet.error}"
                elif packet.decode_error:
                    line += f" | Decode: {packet.decode_error}"
                lines.append(line)

    return lines
