"""
Message-type registries.

A registry owns a set of numeric type codes (one or more IntEnum tables),
names them and decodes their payloads. Registries are stateless, so the same
instances are shared by every analysis run.
"""
from enum import IntEnum
from typing import Dict, Optional, Tuple, Type

from demo_models.values import Record

from .exceptions import MessageDecodeError
from .wire import decode_message


class MessageRegistry:
    """Registry over one or more code tables."""

    def __init__(self, name: str, *enums: Type[IntEnum]):
        if not enums:
            raise ValueError(f"Registry {name} needs at least one code table")
        self.name = name
        self.enums: Tuple[Type[IntEnum], ...] = enums
        self._names: Dict[int, str] = {}
        for enum_cls in enums:
            for member in enum_cls:
                self._names.setdefault(int(member), member.name)

    def owns(self, code: int) -> bool:
        return code in self._names

    def name_for(self, code: int) -> Optional[str]:
        return self._names.get(code)

    @property
    def codes(self) -> Tuple[int, ...]:
        return tuple(sorted(self._names))

    def decode(self, code: int, data: bytes) -> Record:
        type_name = self.name_for(code)
        if type_name is None:
            raise MessageDecodeError(f"{self.name} does not own message type {code}")
        return decode_message(data, type_name)

    def __repr__(self) -> str:
        return f"MessageRegistry({self.name!r}, codes={len(self._names)})"
