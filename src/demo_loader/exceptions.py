"""
Exceptions raised while loading demo fragments.
"""


class DemoLoaderError(Exception):
    """Base class for fragment loading failures."""


class FragmentFormatError(DemoLoaderError):
    """Fragment bytes do not follow the chunk framing."""


class BitBufferOverflowError(DemoLoaderError, EOFError):
    """A read asked for more bits than the buffer holds."""
