"""
Exceptions raised by message registries.
"""


class MessageDecodeError(ValueError):
    """A registry could not decode a message payload."""
