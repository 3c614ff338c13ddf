"""
Fragment analysis data models.
"""

from .chunk import Chunk, Fragment
from .values import Scalar, Sequence, Record, DecodedValue, to_plain
from .report import (
    AnalysisCategory,
    DecodeResult,
    PacketReport,
    RawSample,
    ChunkReport,
    FragmentSummary,
    ChunkTiming,
    PerformanceStats,
    FragmentReport,
)

__all__ = [
    'Chunk',
    'Fragment',
    'Scalar',
    'Sequence',
    'Record',
    'DecodedValue',
    'to_plain',
    'AnalysisCategory',
    'DecodeResult',
    'PacketReport',
    'RawSample',
    'ChunkReport',
    'FragmentSummary',
    'ChunkTiming',
    'PerformanceStats',
    'FragmentReport',
]
