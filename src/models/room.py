"""Room enums."""

from enum import Enum


class RoomGroup(str, Enum):
    """Room groups used to aggregate report rows."""
    P1 = "P1"
    P2 = "P2"
    A1S = "A1S"
    A2S = "A2S"
    OTHER = "OTHER"
