"""
Analysis report models.

Reports are built bottom-up (packet -> chunk -> fragment) and are frozen once
constructed. `to_dict()` produces JSON-compatible data; pass
include_timing=False to drop wall-clock fields when comparing runs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .values import DecodedValue, to_plain

_TIMING_KEYS = ("parse_time_ms", "total_parse_time_ms", "performance")


class AnalysisCategory(str, Enum):
    NETWORK_PACKETS = "network_packets"
    PROTOBUF = "protobuf"
    UNKNOWN = "unknown"


def _strip_timing(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in _TIMING_KEYS}


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of one decode attempt against a registry."""
    success: bool
    data: Optional[DecodedValue] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PacketReport:
    # POSITION
    packet_index: int
    """0-based position among the chunk's recorded packets"""

    cursor_at_start: int
    """Bit offset of the packet's type field within the chunk payload"""

    # STRUCTURE
    type: int = 0
    """Packet type code read from the bit stream"""

    type_name: str = "unknown"
    """Name from the first registry owning the type, or "unknown\""""

    size: int = 0
    """Declared payload length in bytes"""

    success: bool = False
    """True when the packet's structure was read"""

    error: Optional[str] = None
    """Structural failure that ended the walk"""

    parse_time_ms: float = 0.0
    """Wall-clock time spent on this packet"""

    remaining_bytes_after: int = 0
    """Whole bytes left in the payload after this packet"""

    # PAYLOAD
    raw_sample: Optional[str] = None
    """Hex of the first payload bytes"""

    decode_success: Optional[bool] = None
    """Registry decode outcome; None when no decode was attempted"""

    decoded_data: Optional[DecodedValue] = None
    """Decoded message tree"""

    decode_error: Optional[str] = None
    """Registry decode failure message"""

    @property
    def has_parse_error(self) -> bool:
        return not self.success or bool(self.error)

    @property
    def has_decode_error(self) -> bool:
        return not self.decode_success and bool(self.decode_error)

    def to_dict(self, include_timing: bool = True) -> Dict[str, Any]:
        data = {
            "packet_index": self.packet_index,
            "cursor_at_start": self.cursor_at_start,
            "type": self.type,
            "type_name": self.type_name,
            "size": self.size,
            "success": self.success,
            "error": self.error,
            "parse_time_ms": self.parse_time_ms,
            "remaining_bytes_after": self.remaining_bytes_after,
            "raw_sample": self.raw_sample,
            "decode_success": self.decode_success,
            "decoded_data": to_plain(self.decoded_data) if self.decoded_data is not None else None,
            "decode_error": self.decode_error,
        }
        return data if include_timing else _strip_timing(data)


@dataclass(frozen=True)
class RawSample:
    first_bytes: str = ""
    last_bytes: str = ""


@dataclass(frozen=True)
class ChunkReport:
    index: int
    command: int
    command_name: str
    size: int
    is_compressed: bool
    raw_command: int
    analysis_type: AnalysisCategory
    success: bool
    raw_sample: RawSample
    error: Optional[str] = None
    parse_time_ms: float = 0.0
    network_packets: Optional[Tuple[PacketReport, ...]] = None
    protobuf_data: Optional[DecodedValue] = None

    def __post_init__(self):
        if self.network_packets is not None and not isinstance(self.network_packets, tuple):
            object.__setattr__(self, 'network_packets', tuple(self.network_packets))

    @property
    def packets(self) -> Tuple[PacketReport, ...]:
        return self.network_packets or ()

    def to_dict(self, include_timing: bool = True) -> Dict[str, Any]:
        data = {
            "index": self.index,
            "command": self.command,
            "command_name": self.command_name,
            "size": self.size,
            "is_compressed": self.is_compressed,
            "raw_command": self.raw_command,
            "analysis_type": self.analysis_type.value,
            "success": self.success,
            "error": self.error,
            "parse_time_ms": self.parse_time_ms,
            "network_packets": (
                [p.to_dict(include_timing) for p in self.network_packets]
                if self.network_packets is not None else None
            ),
            "protobuf_data": to_plain(self.protobuf_data) if self.protobuf_data is not None else None,
            "raw_sample": {
                "first_20_bytes": self.raw_sample.first_bytes,
                "last_10_bytes": self.raw_sample.last_bytes,
            },
        }
        return data if include_timing else _strip_timing(data)


@dataclass(frozen=True)
class FragmentSummary:
    network_packet_chunks: int = 0
    protobuf_chunks: int = 0
    unknown_chunks: int = 0
    total_network_packets: int = 0
    errors: int = 0
    packet_errors: int = 0
    packet_decode_errors: int = 0


@dataclass(frozen=True)
class ChunkTiming:
    index: int = 0
    time_ms: float = 0.0


@dataclass(frozen=True)
class PerformanceStats:
    average_chunk_parse_time_ms: float = 0.0
    slowest_chunk: ChunkTiming = field(default_factory=ChunkTiming)
    fastest_chunk: ChunkTiming = field(default_factory=ChunkTiming)


@dataclass(frozen=True)
class FragmentReport:
    fragment_size: int
    total_chunks: int
    total_parse_time_ms: float
    chunks: Tuple[ChunkReport, ...]
    summary: FragmentSummary
    performance: PerformanceStats

    def __post_init__(self):
        if not isinstance(self.chunks, tuple):
            object.__setattr__(self, 'chunks', tuple(self.chunks))

    def to_dict(self, include_timing: bool = True) -> Dict[str, Any]:
        perf = self.performance
        data = {
            "fragment_size": self.fragment_size,
            "total_chunks": self.total_chunks,
            "total_parse_time_ms": self.total_parse_time_ms,
            "chunks": [c.to_dict(include_timing) for c in self.chunks],
            "summary": {
                "network_packet_chunks": self.summary.network_packet_chunks,
                "protobuf_chunks": self.summary.protobuf_chunks,
                "unknown_chunks": self.summary.unknown_chunks,
                "total_network_packets": self.summary.total_network_packets,
                "errors": self.summary.errors,
                "packet_errors": self.summary.packet_errors,
                "packet_decode_errors": self.summary.packet_decode_errors,
            },
            "performance": {
                "average_chunk_parse_time_ms": perf.average_chunk_parse_time_ms,
                "slowest_chunk": {"index": perf.slowest_chunk.index, "time_ms": perf.slowest_chunk.time_ms},
                "fastest_chunk": {"index": perf.fastest_chunk.index, "time_ms": perf.fastest_chunk.time_ms},
            },
        }
        return data if include_timing else _strip_timing(data)
