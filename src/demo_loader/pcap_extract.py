"""
Recover broadcast fragments from a packet capture.

Broadcast fragments are served over plain HTTP. This module reads a capture
with scapy, rebuilds each TCP session's byte stream and pulls out the bodies
of successful HTTP/1.x responses. It is best-effort: a malformed response
ends the scan of its own session only.
"""
import logging
from typing import Dict, Iterator, List, Tuple

from scapy.all import rdpcap
from scapy.layers.inet import TCP

logger = logging.getLogger(__name__)

HTTP_PREFIX = b"HTTP/1."
HEADER_END = b"\r\n\r\n"


class HttpStreamError(ValueError):
    """Response framing in a reassembled stream could not be followed."""


def reassemble_stream(packets) -> bytes:
    """Concatenate TCP payloads of one session in sequence order, dropping retransmitted bytes."""
    segments: List[Tuple[int, bytes]] = []
    for pkt in packets:
        if TCP not in pkt:
            continue
        payload = bytes(pkt[TCP].payload)
        if payload:
            segments.append((pkt[TCP].seq, payload))
    if not segments:
        return b""

    segments.sort(key=lambda s: s[0])
    out = bytearray()
    next_seq = segments[0][0]
    for seq, payload in segments:
        end = seq + len(payload)
        if end <= next_seq:
            continue
        if seq < next_seq:
            payload = payload[next_seq - seq:]
        out.extend(payload)
        next_seq = end
    return bytes(out)


def _parse_headers(block: bytes) -> Tuple[int, Dict[str, str]]:
    lines = block.decode("latin1").split("\r\n")
    parts = lines[0].split(" ", 2)
    if len(parts) < 2 or not parts[1].isdigit():
        raise HttpStreamError(f"Bad status line: {lines[0]!r}")
    headers = {}
    for line in lines[1:]:
        if ":" in line:
            name, value = line.split(":", 1)
            headers[name.strip().lower()] = value.strip()
    return int(parts[1]), headers


def _read_chunked(stream: bytes, pos: int) -> Tuple[bytes, int]:
    body = bytearray()
    while True:
        line_end = stream.find(b"\r\n", pos)
        if line_end < 0:
            raise HttpStreamError("Truncated chunk size line")
        size_text = stream[pos:line_end].split(b";", 1)[0].strip()
        try:
            size = int(size_text, 16)
        except ValueError:
            raise HttpStreamError(f"Bad chunk size: {size_text!r}")
        pos = line_end + 2
        if size == 0:
            trailer_end = stream.find(b"\r\n", pos)
            return bytes(body), (trailer_end + 2 if trailer_end >= 0 else len(stream))
        if pos + size > len(stream):
            raise HttpStreamError("Truncated chunk body")
        body.extend(stream[pos:pos + size])
        pos += size + 2


def iter_http_responses(stream: bytes) -> Iterator[Tuple[int, Dict[str, str], bytes]]:
    """Yield (status, headers, body) for each HTTP response in a server-to-client stream."""
    pos = 0
    while stream.startswith(HTTP_PREFIX, pos):
        header_end = stream.find(HEADER_END, pos)
        if header_end < 0:
            raise HttpStreamError("Truncated response headers")
        status, headers = _parse_headers(stream[pos:header_end])
        pos = header_end + len(HEADER_END)

        if headers.get("transfer-encoding", "").lower() == "chunked":
            body, pos = _read_chunked(stream, pos)
        elif "content-length" in headers:
            length = int(headers["content-length"])
            if pos + length > len(stream):
                raise HttpStreamError(f"Body truncated ({len(stream) - pos} of {length} bytes)")
            body = stream[pos:pos + length]
            pos += length
        else:
            body = stream[pos:]
            pos = len(stream)
        yield status, headers, body


def extract_fragments(pcap_path: str, packets=None) -> List[Tuple[str, bytes]]:
    """
    Return (session_key, body) for every 200 response with a non-empty body.

    `packets` may be an already loaded scapy PacketList; otherwise the
    capture at `pcap_path` is read.
    """
    if packets is None:
        packets = rdpcap(pcap_path)

    fragments: List[Tuple[str, bytes]] = []
    for session_key, session_packets in packets.sessions().items():
        stream = reassemble_stream(session_packets)
        if not stream.startswith(HTTP_PREFIX):
            continue
        try:
            for status, _headers, body in iter_http_responses(stream):
                if status == 200 and body:
                    fragments.append((session_key, body))
        except HttpStreamError as e:
            logger.warning("Stopped scanning %s: %s", session_key, e)
    logger.info("Recovered %d fragment bodies from %s", len(fragments), pcap_path)
    return fragments
