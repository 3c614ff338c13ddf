"""
Analyzer configuration.
"""
from dataclasses import dataclass, field
from typing import FrozenSet

from demo_registry.tables import EDemoCommands, NET_Messages

NETWORK_PACKET_COMMANDS = frozenset({
    EDemoCommands.DEM_Packet,
    EDemoCommands.DEM_SignonPacket,
    EDemoCommands.DEM_FullPacket,
    EDemoCommands.DEM_SpawnGroups,
})


@dataclass(frozen=True)
class AnalyzerConfig:
    chunk_head_sample: int = 20
    """Bytes hex-dumped from the start of each chunk payload"""

    chunk_tail_sample: int = 10
    """Bytes hex-dumped from the end of each chunk payload"""

    packet_sample: int = 10
    """Bytes hex-dumped from the start of each packet payload"""

    min_type_bits: int = 4
    """Fewer remaining bits than this cannot hold a packet type"""

    nop_type: int = NET_Messages.net_NOP
    """Packet type that carries no size or payload"""

    network_commands: FrozenSet[int] = field(default_factory=lambda: NETWORK_PACKET_COMMANDS)
    """Chunk commands whose payload is a bit-packed packet stream"""

    def __post_init__(self):
        for name in ("chunk_head_sample", "chunk_tail_sample", "packet_sample", "min_type_bits"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if not isinstance(self.network_commands, frozenset):
            object.__setattr__(self, 'network_commands', frozenset(self.network_commands))


DEFAULT_CONFIG = AnalyzerConfig()
