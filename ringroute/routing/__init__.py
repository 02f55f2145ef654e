"""
Routing module for consistent key-to-node assignment.

Provides:
- Ring: immutable snapshot of virtual point placement
- ConsistentHash: thread-safe facade publishing Ring snapshots
- AsyncConsistentHash: the same facade for asyncio callers
"""

from .async_consistent_hash import AsyncConsistentHash
from .consistent_hash import ConsistentHash
from .factory import new_consistent_hash
from .ring import Ring
from .ring_info import RingInfo
from .virtual_point import VirtualPoint

__all__ = [
    "AsyncConsistentHash",
    "ConsistentHash",
    "Ring",
    "RingInfo",
    "VirtualPoint",
    "new_consistent_hash",
]
