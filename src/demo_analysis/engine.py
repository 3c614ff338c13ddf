"""
Fragment analysis engine.

Runs the chunk analyzer over every chunk of a fragment, in order, and folds
the chunk reports into summary counts and timing extremes.
"""
import dataclasses
import logging
import time
from typing import List, Optional, Sequence

from demo_loader.fragment import parse_fragment
from demo_models.chunk import Fragment
from demo_models.report import (
    AnalysisCategory,
    ChunkReport,
    ChunkTiming,
    FragmentReport,
    FragmentSummary,
    PerformanceStats,
)

from .chunk_analyzer import ChunkAnalyzer
from .config import DEFAULT_CONFIG, AnalyzerConfig

logger = logging.getLogger(__name__)

_CATEGORY_COUNTERS = {
    AnalysisCategory.NETWORK_PACKETS: "network_packet_chunks",
    AnalysisCategory.PROTOBUF: "protobuf_chunks",
    AnalysisCategory.UNKNOWN: "unknown_chunks",
}


def summarize(chunks: Sequence[ChunkReport]) -> FragmentSummary:
    counts = {name: 0 for name in _CATEGORY_COUNTERS.values()}
    total_packets = 0
    errors = 0
    packet_errors = 0
    decode_errors = 0

    for chunk in chunks:
        counts[_CATEGORY_COUNTERS[chunk.analysis_type]] += 1
        if chunk.analysis_type is AnalysisCategory.NETWORK_PACKETS:
            total_packets += len(chunk.packets)
            for packet in chunk.packets:
                if packet.has_parse_error:
                    packet_errors += 1
                if packet.has_decode_error:
                    decode_errors += 1
        if not chunk.success:
            errors += 1

    return FragmentSummary(
        total_network_packets=total_packets,
        errors=errors,
        packet_errors=packet_errors,
        packet_decode_errors=decode_errors,
        **counts,
    )


def measure_performance(chunks: Sequence[ChunkReport]) -> PerformanceStats:
    """Average, slowest and fastest chunk parse times. Ties go to the lowest index."""
    if not chunks:
        return PerformanceStats()

    slowest = fastest = chunks[0]
    total = 0.0
    for chunk in chunks:
        total += chunk.parse_time_ms
        if chunk.parse_time_ms > slowest.parse_time_ms:
            slowest = chunk
        if chunk.parse_time_ms < fastest.parse_time_ms:
            fastest = chunk

    return PerformanceStats(
        average_chunk_parse_time_ms=total / len(chunks),
        slowest_chunk=ChunkTiming(index=slowest.index, time_ms=slowest.parse_time_ms),
        fastest_chunk=ChunkTiming(index=fastest.index, time_ms=fastest.parse_time_ms),
    )


class FragmentAggregator:

    def __init__(self, chunk_analyzer: Optional[ChunkAnalyzer] = None,
                 config: AnalyzerConfig = DEFAULT_CONFIG):
        self.config = config
        self.chunk_analyzer = chunk_analyzer or ChunkAnalyzer(config=config)

    def aggregate(self, fragment: Fragment) -> FragmentReport:
        started = time.perf_counter()
        reports: List[ChunkReport] = []
        for chunk in fragment.chunks:
            reports.append(self.chunk_analyzer.analyze(chunk))

        summary = summarize(reports)
        logger.info("Analyzed %d chunks (%d packets, %d chunk errors)",
                    len(reports), summary.total_network_packets, summary.errors)

        return FragmentReport(
            fragment_size=fragment.size,
            total_chunks=len(reports),
            total_parse_time_ms=(time.perf_counter() - started) * 1000.0,
            chunks=tuple(reports),
            summary=summary,
            performance=measure_performance(reports),
        )


def analyze_fragment(buffer: bytes, config: AnalyzerConfig = DEFAULT_CONFIG) -> FragmentReport:
    """
    Analyze a raw fragment buffer.

    Chunk and packet failures are reported inside the result. Only a framing
    failure (FragmentFormatError) is raised.
    """
    started = time.perf_counter()
    fragment = parse_fragment(buffer)
    report = FragmentAggregator(config=config).aggregate(fragment)
    return dataclasses.replace(report, total_parse_time_ms=(time.perf_counter() - started) * 1000.0)
