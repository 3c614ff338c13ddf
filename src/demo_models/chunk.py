# Chunk data model
"""
Input data models for fragment analysis.

THESE MODELS ARE IMMUTABLE. A Fragment is produced once by the loader and
read by the analyzers; nothing downstream modifies it.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Chunk:
    """
    One framed unit inside a broadcast fragment.

    Compressed payloads are held inflated; `stored_size` keeps the framed
    length.
    """
    # CORE IDENTIFICATION
    index: int
    """0-based position in the fragment, sequential"""

    command: int
    """Demo command code with the compression bit cleared"""

    # FRAMING
    is_compressed: bool
    """True when the stored command carried the compression bit"""

    raw_command: int
    """Command exactly as framed (compression bit folded in)"""

    size: int
    """Payload length in bytes"""

    # RAW DATA
    payload: Optional[bytes] = None
    """Chunk payload; None when the framing carried no data"""

    tick: int = 0
    """Server tick recorded in the chunk header"""

    stored_size: Optional[int] = None
    """Payload length as framed; None means the same as size"""

    error: Optional[str] = None
    """Loader failure for this chunk (a payload that would not inflate)"""

    @property
    def has_data(self) -> bool:
        return bool(self.payload)


@dataclass(frozen=True)
class Fragment:
    """An ordered sequence of chunks plus the fragment's byte size."""
    size: int
    chunks: Tuple[Chunk, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.chunks, tuple):
            object.__setattr__(self, 'chunks', tuple(self.chunks))

    def __len__(self) -> int:
        return len(self.chunks)

    def __iter__(self):
        return iter(self.chunks)
