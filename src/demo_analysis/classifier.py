"""Chunk classification by command code."""
from typing import AbstractSet

from demo_models.report import AnalysisCategory
from demo_registry.tables import command_name

from .config import NETWORK_PACKET_COMMANDS


def classify(command: int, network_commands: AbstractSet[int] = NETWORK_PACKET_COMMANDS) -> AnalysisCategory:
    if command in network_commands:
        return AnalysisCategory.NETWORK_PACKETS
    if command_name(command) == "unknown":
        return AnalysisCategory.UNKNOWN
    return AnalysisCategory.PROTOBUF
