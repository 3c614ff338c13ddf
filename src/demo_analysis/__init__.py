"""
Chunk and packet analysis for broadcast fragments.
"""

from .config import AnalyzerConfig, DEFAULT_CONFIG, NETWORK_PACKET_COMMANDS
from .classifier import classify
from .dispatcher import TypeDispatcher
from .walker import PacketWalker, WalkState
from .chunk_analyzer import ChunkAnalyzer, NO_DATA_ERROR
from .engine import FragmentAggregator, analyze_fragment, summarize, measure_performance

__all__ = [
    'AnalyzerConfig',
    'DEFAULT_CONFIG',
    'NETWORK_PACKET_COMMANDS',
    'classify',
    'TypeDispatcher',
    'PacketWalker',
    'WalkState',
    'ChunkAnalyzer',
    'NO_DATA_ERROR',
    'FragmentAggregator',
    'analyze_fragment',
    'summarize',
    'measure_performance',
]
