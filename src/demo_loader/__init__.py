"""
Fragment loading: bit cursor, chunk framing and capture extraction.
"""

from .exceptions import DemoLoaderError, FragmentFormatError, BitBufferOverflowError
from .bitbuffer import BitBuffer
from .fragment import decompress_payload, iter_chunks, parse_fragment, load_fragment_file

__all__ = [
    'DemoLoaderError',
    'FragmentFormatError',
    'BitBufferOverflowError',
    'BitBuffer',
    'decompress_payload',
    'iter_chunks',
    'parse_fragment',
    'load_fragment_file',
]
