"""
Type resolution and decode dispatch.

Registries are consulted in their fixed priority order. The first registry
that owns a code is the only one asked to decode it; a failure there is
reported, never retried against a later registry.
"""
import logging
from typing import Optional, Sequence

from demo_models.report import DecodeResult
from demo_registry import DEMO_COMMAND_REGISTRY, PACKET_REGISTRIES, MessageRegistry

logger = logging.getLogger(__name__)


def _error_text(error: Exception) -> str:
    return str(error) or type(error).__name__


class TypeDispatcher:

    def __init__(self,
                 registries: Sequence[MessageRegistry] = PACKET_REGISTRIES,
                 command_registry: MessageRegistry = DEMO_COMMAND_REGISTRY):
        self.registries = tuple(registries)
        self.command_registry = command_registry

    def resolve_name(self, code: int) -> str:
        for registry in self.registries:
            name = registry.name_for(code)
            if name:
                return name
        return "unknown"

    def owner_of(self, code: int) -> Optional[MessageRegistry]:
        for registry in self.registries:
            if registry.owns(code):
                return registry
        return None

    def decode(self, code: int, payload: bytes) -> DecodeResult:
        registry = self.owner_of(code)
        if registry is None:
            return DecodeResult(success=False, error=f"Unknown message type: {code}")
        try:
            return DecodeResult(success=True, data=registry.decode(code, payload))
        except Exception as e:
            logger.debug("%s failed to decode type %d: %s", registry.name, code, e)
            return DecodeResult(success=False, error=_error_text(e))

    def decode_command(self, command: int, payload: bytes) -> DecodeResult:
        """Decode a whole chunk payload as the top-level message for `command`."""
        try:
            return DecodeResult(success=True, data=self.command_registry.decode(command, payload))
        except Exception as e:
            logger.debug("Command %d failed to decode: %s", command, e)
            return DecodeResult(success=False, error=_error_text(e))
