"""
Packet walker for network-packet chunks.

A chunk payload is a bit-packed stream of messages:
- type   (uvarbit)
- size   (varint32), absent for NOP
- data   (size bytes)

Each packet becomes one PacketReport. Decode failures stay on the packet and
the walk continues; structural failures (too few bits, a size running past
the buffer, any read error) end the walk because the cursor can no longer be
trusted.
"""
import logging
import time
from enum import Enum
from typing import List, Optional, Tuple

from demo_loader.bitbuffer import BitBuffer
from demo_models.report import PacketReport
from demo_registry.tables import EDemoCommands

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .dispatcher import TypeDispatcher
from .hexdump import hex_bytes

logger = logging.getLogger(__name__)


class WalkState(Enum):
    READING = "reading"
    EMITTED_OK = "emitted_ok"
    EMITTED_ERROR = "emitted_error"
    DONE = "done"


class PacketWalker:

    def __init__(self, dispatcher: Optional[TypeDispatcher] = None,
                 config: AnalyzerConfig = DEFAULT_CONFIG):
        self.dispatcher = dispatcher or TypeDispatcher()
        self.config = config

    def walk(self, payload: bytes, command: Optional[int] = None) -> List[PacketReport]:
        """
        Walk every packet in `payload`.

        Spawn-group chunks start with a uvarbit sequence number ahead of the
        packets; a failure reading it propagates to the caller.
        """
        buffer = BitBuffer(payload)
        if command == EDemoCommands.DEM_SpawnGroups:
            sequence = buffer.read_ubitvar()
            logger.debug("spawn group sequence %d", sequence)

        packets: List[PacketReport] = []
        state = WalkState.READING
        while state is not WalkState.DONE:
            if state is WalkState.READING:
                if buffer.remaining_bytes() == 0:
                    state = WalkState.DONE
                    continue
                report, state = self._read_packet(buffer, len(packets))
                packets.append(report)
            elif state is WalkState.EMITTED_OK:
                state = WalkState.READING
            else:
                state = WalkState.DONE

        return packets

    def _read_packet(self, buffer: BitBuffer, packet_index: int) -> Tuple[PacketReport, WalkState]:
        started = time.perf_counter()
        fields = {"packet_index": packet_index, "cursor_at_start": buffer.cursor}

        def emit(state: WalkState) -> Tuple[PacketReport, WalkState]:
            report = PacketReport(
                parse_time_ms=(time.perf_counter() - started) * 1000.0,
                remaining_bytes_after=buffer.remaining_bytes(),
                **fields,
            )
            if state is WalkState.EMITTED_ERROR:
                logger.warning("packet %d at bit %d: %s", packet_index, report.cursor_at_start, report.error)
            return report, state

        try:
            if buffer.remaining_bits() < self.config.min_type_bits:
                fields["error"] = (
                    f"Insufficient bits for packet type "
                    f"({buffer.remaining_bits()} < {self.config.min_type_bits})"
                )
                return emit(WalkState.EMITTED_ERROR)

            packet_type = buffer.read_ubitvar()
            fields["type"] = packet_type
            fields["type_name"] = self.dispatcher.resolve_name(packet_type)

            # NOP has no size or payload
            if packet_type == self.config.nop_type:
                fields["success"] = True
                return emit(WalkState.EMITTED_OK)

            size = buffer.read_uvarint32()
            fields["size"] = size
            if size > buffer.remaining_bytes():
                fields["error"] = (
                    f"Declared size {size} exceeds remaining bytes {buffer.remaining_bytes()}"
                )
                return emit(WalkState.EMITTED_ERROR)

            data = buffer.read_bytes(size)
            fields["raw_sample"] = hex_bytes(data[:self.config.packet_sample])

            result = self.dispatcher.decode(packet_type, data)
            fields["decode_success"] = result.success
            fields["decoded_data"] = result.data
            fields["decode_error"] = result.error

            fields["success"] = True
            return emit(WalkState.EMITTED_OK)
        except Exception as e:
            fields["error"] = str(e) or type(e).__name__
            return emit(WalkState.EMITTED_ERROR)
