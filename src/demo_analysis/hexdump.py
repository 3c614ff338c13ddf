"""Hex helpers for raw-byte samples."""
from typing import Optional

from demo_models.report import RawSample


def hex_bytes(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data)


def raw_sample(payload: Optional[bytes], head: int = 20, tail: int = 10) -> RawSample:
    """Hex of the first `head` and last `tail` bytes. Short or missing payloads give short samples."""
    data = payload or b""
    last = data[-tail:] if tail else b""
    return RawSample(first_bytes=hex_bytes(data[:head]), last_bytes=hex_bytes(last))
