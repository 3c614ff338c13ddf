"""
Message-type registries for Source 2 broadcast data.

PACKET_REGISTRIES is consulted in order when resolving a packet's type code;
DEMO_COMMAND_REGISTRY decodes whole non-packet chunks by command code.
"""

from .exceptions import MessageDecodeError
from .registry import MessageRegistry
from .tables import (
    EDemoCommands,
    NET_Messages,
    CLC_Messages,
    SVC_Messages,
    EBaseUserMessages,
    EBaseGameEvents,
    ECitadelUserMessageIds,
    ETEProtobufIds,
    ECitadelGameEvents,
    command_name,
)
from .wire import decode_message

NetMessageBase = MessageRegistry("NetMessageBase", NET_Messages)
NetMessage = MessageRegistry("NetMessage", CLC_Messages, SVC_Messages)
UserMessage = MessageRegistry("UserMessage", EBaseUserMessages)
CitadelUserMessage = MessageRegistry("CitadelUserMessage", ECitadelUserMessageIds)
GameEvent = MessageRegistry("GameEvent", EBaseGameEvents)
TempEntity = MessageRegistry("TempEntity", ETEProtobufIds)
CitadelGameEvent = MessageRegistry("CitadelGameEvent", ECitadelGameEvents)

PACKET_REGISTRIES = (
    NetMessageBase,
    NetMessage,
    UserMessage,
    CitadelUserMessage,
    GameEvent,
    TempEntity,
    CitadelGameEvent,
)

DEMO_COMMAND_REGISTRY = MessageRegistry("DemoCommand", EDemoCommands)

__all__ = [
    'MessageDecodeError',
    'MessageRegistry',
    'EDemoCommands',
    'NET_Messages',
    'CLC_Messages',
    'SVC_Messages',
    'EBaseUserMessages',
    'EBaseGameEvents',
    'ECitadelUserMessageIds',
    'ETEProtobufIds',
    'ECitadelGameEvents',
    'command_name',
    'decode_message',
    'PACKET_REGISTRIES',
    'DEMO_COMMAND_REGISTRY',
]
