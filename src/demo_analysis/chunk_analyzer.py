"""Per-chunk analysis."""
import logging
import time
from typing import Optional

from demo_models.chunk import Chunk
from demo_models.report import AnalysisCategory, ChunkReport
from demo_registry.tables import command_name

from .classifier import classify
from .config import DEFAULT_CONFIG, AnalyzerConfig
from .dispatcher import TypeDispatcher
from .hexdump import raw_sample
from .walker import PacketWalker

logger = logging.getLogger(__name__)

NO_DATA_ERROR = "No data available"


class ChunkAnalyzer:
    """
    Classifies a chunk and analyzes its payload.

    Network-packet chunks are walked packet by packet; every other chunk is
    decoded whole against the command registry. Failures are recorded on the
    returned report, never raised.

    A packet chunk succeeds when at least one of its packets parsed
    successfully; a chunk whose only packets are errors is a failure.
    """

    def __init__(self, dispatcher: Optional[TypeDispatcher] = None,
                 config: AnalyzerConfig = DEFAULT_CONFIG,
                 walker: Optional[PacketWalker] = None):
        self.dispatcher = dispatcher or TypeDispatcher()
        self.config = config
        self.walker = walker or PacketWalker(self.dispatcher, config)

    def analyze(self, chunk: Chunk) -> ChunkReport:
        started = time.perf_counter()
        payload = chunk.payload
        category = classify(chunk.command, self.config.network_commands)

        shell = dict(
            index=chunk.index,
            command=chunk.command,
            command_name=command_name(chunk.command),
            size=chunk.size,
            is_compressed=chunk.is_compressed,
            raw_command=chunk.raw_command,
            analysis_type=category,
            raw_sample=raw_sample(payload, self.config.chunk_head_sample, self.config.chunk_tail_sample),
        )

        def elapsed_ms() -> float:
            return (time.perf_counter() - started) * 1000.0

        if not chunk.has_data:
            return ChunkReport(success=False, error=NO_DATA_ERROR, parse_time_ms=elapsed_ms(), **shell)

        if chunk.error:
            return ChunkReport(success=False, error=chunk.error, parse_time_ms=elapsed_ms(), **shell)

        if category is AnalysisCategory.NETWORK_PACKETS:
            try:
                packets = tuple(self.walker.walk(payload, chunk.command))
            except Exception as e:
                logger.warning("chunk %d: packet walk failed: %s", chunk.index, e)
                return ChunkReport(success=False, error=str(e) or type(e).__name__,
                                   parse_time_ms=elapsed_ms(), **shell)
            success = any(p.success for p in packets)
            logger.debug("chunk %d: %d packets, success=%s", chunk.index, len(packets), success)
            return ChunkReport(success=success, network_packets=packets,
                               parse_time_ms=elapsed_ms(), **shell)

        result = self.dispatcher.decode_command(chunk.command, payload)
        logger.debug("chunk %d: %s decode success=%s", chunk.index, shell["command_name"], result.success)
        return ChunkReport(success=result.success, protobuf_data=result.data, error=result.error,
                           parse_time_ms=elapsed_ms(), **shell)
